from __future__ import annotations

from typing import Optional

import numpy as np

from .interface import SampleFormat, SinkError, SinkGeometry
from ..synth.oscillator import Int16Block


class MemorySink:
    """Collects the PCM stream in memory. `headroom` is what available_headroom() reports."""

    def __init__(self, headroom: int = 0) -> None:
        self.data = bytearray()
        self.headroom = headroom
        self.writes = 0
        self.recoveries = 0
        self.is_open = False
        self.drained = False
        self.geometry: Optional[SinkGeometry] = None
        self.sample_format: Optional[SampleFormat] = None

    def open(self) -> None:
        self.is_open = True

    def negotiate(self, sample_rate: int, channels: int, sample_format: SampleFormat,
                  buffer_time_us: int, period_time_us: int) -> SinkGeometry:
        self.geometry = SinkGeometry.for_stream(
            sample_rate, channels, sample_format, buffer_time_us, period_time_us)
        self.sample_format = sample_format
        return self.geometry

    def write(self, data: bytes) -> int:
        if not self.is_open or self.geometry is None:
            raise SinkError("sink is not open")
        self.writes += 1
        self.data.extend(data)
        return len(data) // self.geometry.frame_size

    def available_headroom(self) -> int:
        return self.headroom

    def recover(self) -> None:
        self.recoveries += 1

    def drain(self) -> None:
        self.drained = True

    def close(self) -> None:
        self.is_open = False

    def samples(self) -> Int16Block:
        """Written PCM back on the 16-bit scale (8-bit data is expanded)."""
        if self.sample_format is SampleFormat.U8:
            raw = np.frombuffer(bytes(self.data), dtype=np.uint8).astype(np.int16)
            return ((raw - 128) << 8).astype(np.int16)
        return np.frombuffer(bytes(self.data), dtype="<i2").astype(np.int16)


__all__ = ["MemorySink"]
