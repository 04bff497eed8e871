# rtty/audio.py
from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional

from .config import RttyConfig
from .driver import TransmissionDriver, TransmissionReport
from .sinks.buffer import SampleBuffer
from .sinks.files import RawStreamSink, WavFileSink
from .sinks.interface import IAudioSink
from .sinks.memory import MemorySink
from .sinks.pyaudio_sink import PyAudioSink
from .sources.interface import ITextSource
from .sources.keyboard import KeyboardSource
from .sources.text import StringSource
from .synth.oscillator import Int16Block, Oscillator
from .synth.tables import build_table

# registry, keyed by output kind
_SINKS: Dict[str, Callable[[str], IAudioSink]] = {
    "raw": lambda output: RawStreamSink(output),
    "wav": lambda output: WavFileSink(output),
    "memory": lambda output: MemorySink(),
    "device": lambda output: PyAudioSink(None if output == "default" else output),
}


def sink_kind(output: str) -> str:
    lowered = output.lower()
    if output == "-" or lowered.endswith((".raw", ".pcm")):
        return "raw"
    if lowered.endswith(".wav"):
        return "wav"
    if output == "memory":
        return "memory"
    return "device"


def make_sink(output: str) -> IAudioSink:
    return _SINKS[sink_kind(output)](output)


class RttyTransmitter:
    """
    Wires one transmission chain from a configuration:
    sink (opened + negotiated) -> sample buffer -> oscillator -> driver.
    """

    CHANNELS: int = 1

    def __init__(self,
                 cfg: Optional[RttyConfig] = None,
                 sink: Optional[IAudioSink] = None,
                 logger: Optional[Callable[[str, object], None]] = None,
                 echo: Optional[Callable[[str], None]] = None) -> None:
        self.cfg = cfg or RttyConfig()
        self.log = logger or (lambda level, payload: None)
        self.sink = make_sink(self.cfg.output) if sink is None else sink

        self.sink.open()
        try:
            self.geometry = self._negotiate()
            self.table = build_table(self.cfg.table_size, self.cfg.volume)
            self.oscillator = Oscillator(self.table, self.cfg.sample_rate)
            self.buffer = SampleBuffer(self.sink, self.geometry, self.cfg.sample_format, logger=self.log)
        except Exception:
            self.sink.close()
            raise

        self.driver = TransmissionDriver(
            self.cfg, self.oscillator, self.buffer, self.sink, logger=self.log, echo=echo)

        self.log("info", {
            "event": "cfg",
            "sink": type(self.sink).__name__,
            "sample_rate": self.cfg.sample_rate,
            "format": self.cfg.sample_format.name,
            "freq_low": self.cfg.freq_low,
            "freq_high": self.cfg.freq_high,
            "bit_ms": self.cfg.bit_ms,
            "period_frames": self.geometry.period_frames,
            "buffer_frames": self.geometry.buffer_frames,
        })

    # ---- sink geometry ------------------------------------------------------
    def _negotiate(self):
        return self.sink.negotiate(
            self.cfg.sample_rate,
            self.CHANNELS,
            self.cfg.sample_format,
            self.cfg.buffer_time_us,
            self.cfg.period_time_us,
        )

    def renegotiate(self) -> None:
        """Re-run negotiation; the sample buffer follows a changed period size."""
        self.buffer.flush()
        geometry = self._negotiate()
        if geometry != self.geometry:
            self.buffer.resize(geometry)
            self.geometry = geometry
            self.log("info", {"event": "renegotiated", "period_frames": geometry.period_frames})

    # ---- runs ---------------------------------------------------------------
    def transmit_text(self, text: str) -> TransmissionReport:
        return self.driver.transmit(StringSource(text))

    def transmit_source(self, source: Iterable[str]) -> TransmissionReport:
        return self.driver.transmit(source)

    def run_keyboard(self, source: Optional[ITextSource] = None) -> TransmissionReport:
        if source is not None:
            return self.driver.run_interactive(source)
        with KeyboardSource() as keyboard:
            return self.driver.run_interactive(keyboard)

    def run_test_pattern(self) -> TransmissionReport:
        return self.driver.send_test_pattern()

    # ---- lifecycle ----------------------------------------------------------
    def close(self) -> None:
        self.sink.close()

    def __enter__(self) -> "RttyTransmitter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def render_text(text: str, cfg: Optional[RttyConfig] = None) -> Int16Block:
    """Complete transmission of `text` as 16-bit scaled samples."""
    sink = MemorySink()
    with RttyTransmitter(cfg, sink=sink) as tx:
        tx.transmit_text(text)
    return sink.samples()


__all__ = ["RttyTransmitter", "make_sink", "render_text", "sink_kind"]
