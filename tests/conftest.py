"""
Pytest configuration for rtty tests.

This file provides fixtures and utilities for testing.
"""
import pytest
import sys
from pathlib import Path

# Ensure rtty package is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from rtty.config import RttyConfig
from rtty.sinks import MemorySink, SinkUnderrun


class FlakySink(MemorySink):
    """MemorySink whose n-th write attempts (1-based) report an underrun."""

    def __init__(self, fail_on=(), headroom: int = 0):
        super().__init__(headroom=headroom)
        self.fail_on = set(fail_on)
        self.attempts = 0

    def write(self, data: bytes) -> int:
        self.attempts += 1
        if self.attempts in self.fail_on:
            raise SinkUnderrun("simulated xrun")
        return super().write(data)


class ScriptedSource:
    """Interactive source replaying a fixed list of poll() results."""

    def __init__(self, script):
        self.script = list(script)
        self.timeouts = []

    def poll(self, timeout_s):
        self.timeouts.append(timeout_s)
        if not self.script:
            return ""
        return self.script.pop(0)

    def __iter__(self):
        for item in self.script:
            if item:
                yield item


@pytest.fixture
def small_cfg():
    """8 kHz, no lead-in, short trailer: keeps sample counts easy to reason about."""
    return RttyConfig(
        sample_rate=8000,
        lead_in_ms=0,
        trailer_nulls=2,
        output="memory",
    )


@pytest.fixture
def flaky_sink_cls():
    return FlakySink


@pytest.fixture
def scripted_source_cls():
    return ScriptedSource


def _audio_device_available() -> bool:
    try:
        import pyaudio
    except ImportError:
        return False
    try:
        pa = pyaudio.PyAudio()
    except Exception:
        return False
    try:
        pa.get_default_output_device_info()
        return True
    except (IOError, OSError):
        return False
    finally:
        pa.terminate()


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "requires_audio: mark test as requiring a PyAudio output device"
    )


def pytest_collection_modifyitems(config, items):
    """Skip tests that need a sound card if none is available."""
    if not any("requires_audio" in item.keywords for item in items):
        return
    if not _audio_device_available():
        skip_audio = pytest.mark.skip(reason="no PyAudio output device available")
        for item in items:
            if "requires_audio" in item.keywords:
                item.add_marker(skip_audio)
