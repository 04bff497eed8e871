"""
Transmission driver - turns text into keyed tones.

The driver sits between the codec and the oscillator:
- Characters are expanded by the BaudotCodec (shift state, line wrap)
- Each Baudot symbol is sent as 8 framing bits
- Each bit is one fixed-duration mark or space tone

It also owns the framing around the text (lead-in, synchronization
preamble, trailer) and the keep-alive policy of the interactive loop.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional
import math

from .codec import BaudotCodec, symbol_bits
from .codec.baudot import PRINTABLE
from .codec.symbols import BITS_PER_SYMBOL, CHAR_CR, CHAR_LF, CHAR_NULL, CHAR_SHIFT_DOWN
from .config import RttyConfig
from .sinks.buffer import SampleBuffer
from .sinks.interface import IAudioSink
from .sources.interface import ITextSource, SourceError
from .synth.oscillator import Oscillator

PREAMBLE = (CHAR_NULL, CHAR_NULL, CHAR_SHIFT_DOWN, CHAR_CR, CHAR_LF)
TRAILER_EOL = (CHAR_CR, CHAR_LF)

TEST_PATTERN = (
    "the quick brown fox jumped over the lazy dog's back 1234567890\n"
    "ryryryryryryryryryryryryryryryryryryryryryryryryryryryryryryry\n"
    "sgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsgsg\n"
    "ryryryryryryryryryryryryryryryryryryryryryryryryryryryryryryry\n"
)
TEST_TAIL_MS = 2000


@dataclass
class TransmissionReport:
    chars_sent: int
    symbols_sent: int
    frames_written: int
    underruns: int
    keepalives: int
    error: Optional[str] = None


class TransmissionDriver:
    """
    Usage:
        driver = TransmissionDriver(cfg, oscillator, buffer, sink)
        report = driver.transmit(StringSource("CQ CQ DE N0CALL"))
    """

    def __init__(self,
                 cfg: RttyConfig,
                 oscillator: Oscillator,
                 buffer: SampleBuffer,
                 sink: IAudioSink,
                 codec: Optional[BaudotCodec] = None,
                 logger: Optional[Callable[[str, object], None]] = None,
                 echo: Optional[Callable[[str], None]] = None) -> None:
        self.cfg = cfg
        self.osc = oscillator
        self.buffer = buffer
        self.sink = sink
        self.codec = codec or BaudotCodec(column_max=cfg.column_max)
        self.log = logger or (lambda level, payload: None)
        self.echo = echo or (lambda text: None)

        self.chars_sent = 0
        self.symbols_sent = 0
        self.keepalives = 0

    # === Tones ===

    def encode_bit(self, bit: int) -> None:
        freq = self.cfg.freq_high if bit else self.cfg.freq_low
        self.osc.render(freq, self.cfg.bit_ms, self.buffer)

    def mark(self, duration_ms: int) -> None:
        """Steady mark tone (line idle)."""
        self.osc.render(self.cfg.freq_high, duration_ms, self.buffer)

    # === Symbols ===

    def send_symbol(self, symbol: int) -> None:
        for bit in symbol_bits(symbol):
            self.encode_bit(bit)
        self.symbols_sent += 1

    def send_symbols(self, symbols: Iterable[int]) -> None:
        for symbol in symbols:
            self.send_symbol(symbol)

    # === Characters ===

    def send_char(self, char: str) -> None:
        """Encode and transmit one character before the next is read."""
        wraps = self.codec.wraps
        self.send_symbols(self.codec.feed(char))
        self.chars_sent += 1

        if char in PRINTABLE:
            self.echo("\r\n" if char in "\r\n" else char.upper())
        if self.codec.wraps != wraps:
            self.echo("\r\n")

    def send_text(self, text: Iterable[str]) -> None:
        for char in text:
            if char in PRINTABLE:
                self.send_char(char)

    def new_line(self) -> None:
        self.send_symbols(TRAILER_EOL)
        self.codec.state.column = 0
        self.echo("\r\n")

    # === Framing ===

    def synchronize(self) -> None:
        self.send_symbols(PREAMBLE)
        self.codec.resync()

    def send_trailer(self) -> None:
        self.send_symbols(TRAILER_EOL)
        self.send_symbols([CHAR_NULL] * self.cfg.trailer_nulls)
        self.codec.resync()

    def begin(self) -> None:
        self.mark(self.cfg.lead_in_ms)
        self.synchronize()

    def end(self) -> TransmissionReport:
        self.send_trailer()
        return self.finish()

    def finish(self, error: Optional[str] = None) -> TransmissionReport:
        self.buffer.flush()
        self.sink.drain()
        report = TransmissionReport(
            chars_sent=self.chars_sent,
            symbols_sent=self.symbols_sent,
            frames_written=self.buffer.frames_written,
            underruns=self.buffer.underruns,
            keepalives=self.keepalives,
            error=error,
        )
        self.log("info", {"event": "tx_done", **vars(report)})
        return report

    # === Keep-alive ===

    @property
    def low_water_frames(self) -> int:
        return self.buffer.geometry.buffer_frames // 2

    def queued_frames(self) -> int:
        geometry = self.buffer.geometry
        return geometry.buffer_frames - self.sink.available_headroom() + self.buffer.pending_frames

    def needs_keepalive(self) -> bool:
        return self.queued_frames() < self.low_water_frames

    def keep_alive(self) -> None:
        """Idle NULL characters covering at least keepalive_ms."""
        char_ms = BITS_PER_SYMBOL * self.cfg.bit_ms
        count = max(1, math.ceil(self.cfg.keepalive_ms / char_ms))
        self.send_symbols([CHAR_NULL] * count)
        self.keepalives += 1
        self.log("debug", {"event": "keepalive", "nulls": count, "queued": self.queued_frames()})

    # === Runs ===

    def transmit(self, source: Iterable[str]) -> TransmissionReport:
        """Batch run: lead-in, preamble, text, trailer."""
        self.begin()
        error: Optional[str] = None
        try:
            self.send_text(source)
        except SourceError as exc:
            error = str(exc)
            self.log("error", {"event": "source_error", "error": error})
        self.send_trailer()
        return self.finish(error)

    def run_interactive(self, source: ITextSource) -> TransmissionReport:
        """
        Interactive run. Each iteration waits up to poll_timeout_ms for a
        keystroke; on a timeout the sink is topped up with idle characters
        when its queue is below the low-water mark.

        The queue is only checked on a timeout. An iteration that sent a
        keystroke has just queued at least one character, and sink writes
        block, so keepalive_ms sets how much idle audio is added, not how
        often the check runs.
        """
        poll_s = self.cfg.poll_timeout_ms / 1000.0
        self.begin()
        while True:
            char = source.poll(poll_s)
            if char is None:
                if self.needs_keepalive():
                    self.keep_alive()
                continue
            if char == "" or char == self.cfg.terminator:
                break
            if char in "\r\n":
                self.new_line()
            else:
                self.send_char(char)
        return self.end()

    def send_test_pattern(self) -> TransmissionReport:
        self.begin()
        self.send_text(TEST_PATTERN)
        self.synchronize()
        self.mark(TEST_TAIL_MS)
        return self.finish()


__all__ = [
    "PREAMBLE",
    "TEST_PATTERN",
    "TransmissionDriver",
    "TransmissionReport",
]
