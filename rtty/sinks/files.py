from __future__ import annotations

from typing import BinaryIO, Optional, Tuple
import sys
import wave

from .interface import SampleFormat, SinkError, SinkGeometry


class RawStreamSink:
    """
    Headerless PCM to a binary stream (`-` is stdout), e.g. for piping into
    `aplay -r 44100 -f S16_LE`. Never reports headroom, so the keep-alive
    policy does not pad file output.
    """

    def __init__(self, path: str = "-", stream: Optional[BinaryIO] = None) -> None:
        self.path = path
        self.stream = stream
        self._owned = False
        self.geometry: Optional[SinkGeometry] = None

    def open(self) -> None:
        if self.stream is not None:
            return
        if self.path == "-":
            self.stream = sys.stdout.buffer
            return
        try:
            self.stream = open(self.path, "wb")
        except OSError as exc:
            raise SinkError(f"cannot open {self.path}: {exc}") from exc
        self._owned = True

    def negotiate(self, sample_rate: int, channels: int, sample_format: SampleFormat,
                  buffer_time_us: int, period_time_us: int) -> SinkGeometry:
        self.geometry = SinkGeometry.for_stream(
            sample_rate, channels, sample_format, buffer_time_us, period_time_us)
        return self.geometry

    def write(self, data: bytes) -> int:
        if self.stream is None or self.geometry is None:
            raise SinkError("sink is not open")
        try:
            self.stream.write(data)
        except OSError as exc:
            raise SinkError(f"write to {self.path} failed: {exc}") from exc
        return len(data) // self.geometry.frame_size

    def available_headroom(self) -> int:
        return 0

    def recover(self) -> None:
        pass

    def drain(self) -> None:
        if self.stream is not None:
            self.stream.flush()

    def close(self) -> None:
        if self.stream is None:
            return
        self.stream.flush()
        if self._owned:
            self.stream.close()
        self.stream = None


class WavFileSink:
    """Mono WAV file; 8-bit WAV data is unsigned, matching SampleFormat.U8."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._wav: Optional[wave.Wave_write] = None
        self._params: Optional[Tuple[int, int, int]] = None
        self.geometry: Optional[SinkGeometry] = None

    def open(self) -> None:
        try:
            self._wav = wave.open(self.path, "wb")
        except OSError as exc:
            raise SinkError(f"cannot open {self.path}: {exc}") from exc

    def negotiate(self, sample_rate: int, channels: int, sample_format: SampleFormat,
                  buffer_time_us: int, period_time_us: int) -> SinkGeometry:
        if self._wav is None:
            raise SinkError("sink is not open")
        geometry = SinkGeometry.for_stream(
            sample_rate, channels, sample_format, buffer_time_us, period_time_us)
        params = (channels, sample_format.sample_width, sample_rate)
        if self._params is not None:
            # the header is fixed once set
            if params != self._params:
                raise SinkError(f"cannot change WAV parameters of {self.path} to {params}")
            self.geometry = geometry
            return geometry
        self._wav.setnchannels(channels)
        self._wav.setsampwidth(sample_format.sample_width)
        self._wav.setframerate(sample_rate)
        self._params = params
        self.geometry = geometry
        return geometry

    def write(self, data: bytes) -> int:
        if self._wav is None or self.geometry is None:
            raise SinkError("sink is not open")
        try:
            self._wav.writeframes(data)
        except OSError as exc:
            raise SinkError(f"write to {self.path} failed: {exc}") from exc
        return len(data) // self.geometry.frame_size

    def available_headroom(self) -> int:
        return 0

    def recover(self) -> None:
        pass

    def drain(self) -> None:
        pass

    def close(self) -> None:
        if self._wav is not None:
            self._wav.close()
            self._wav = None


__all__ = ["RawStreamSink", "WavFileSink"]
