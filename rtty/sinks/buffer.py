from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from .interface import IAudioSink, SampleFormat, SinkGeometry, SinkUnderrun
from ..synth.oscillator import Int16Block


def pack_samples(samples: Int16Block, sample_format: SampleFormat) -> bytes:
    """Convert 16-bit scaled samples to the sink's wire format."""
    if sample_format is SampleFormat.U8:
        return ((samples.astype(np.int16) >> 8) + 128).astype(np.uint8).tobytes()
    return samples.astype("<i2").tobytes()


class SampleBuffer:
    """
    One sink period worth of packed PCM.

    Samples go in one at a time or as blocks; every time `period_frames`
    frames have accumulated they are written to the sink in one blocking
    call. An underrun reported by the sink is counted, logged and recovered;
    the period that hit it is not re-sent.
    """

    def __init__(self,
                 sink: IAudioSink,
                 geometry: SinkGeometry,
                 sample_format: SampleFormat,
                 logger: Optional[Callable[[str, object], None]] = None) -> None:
        self.log = logger or (lambda level, payload: None)
        self.sink = sink
        self.sample_format = sample_format
        self.frames_written = 0
        self.underruns = 0
        self.resize(geometry)

    def resize(self, geometry: SinkGeometry) -> None:
        if geometry.period_frames <= 0:
            raise ValueError("period_frames must be > 0")
        if geometry.frame_size != self.sample_format.sample_width:
            raise ValueError(
                f"frame_size {geometry.frame_size} does not match mono {self.sample_format.name}"
            )
        self.geometry = geometry
        self._capacity = geometry.period_frames * geometry.frame_size
        self._buf = bytearray(self._capacity)
        self.write_cursor = 0

    @property
    def pending_frames(self) -> int:
        return self.write_cursor // self.geometry.frame_size

    # ---------------------------------------------------------------- public
    def push_sample(self, raw: int) -> None:
        if self.sample_format is SampleFormat.U8:
            self._append(bytes((128 + (int(raw) >> 8),)))
        else:
            self._append(int(raw).to_bytes(2, "little", signed=True))

    def extend(self, samples: Int16Block) -> None:
        self._append(pack_samples(samples, self.sample_format))

    def flush(self) -> None:
        if self.write_cursor:
            self._write(self.write_cursor)

    # ---------------------------------------------------------------- helpers
    def _append(self, data: bytes) -> None:
        view = memoryview(data)
        pos = 0
        while pos < len(view):
            n = min(self._capacity - self.write_cursor, len(view) - pos)
            self._buf[self.write_cursor:self.write_cursor + n] = view[pos:pos + n]
            self.write_cursor += n
            pos += n
            if self.write_cursor == self._capacity:
                self._write(self._capacity)

    def _write(self, nbytes: int) -> None:
        try:
            frames = self.sink.write(bytes(self._buf[:nbytes]))
            self.frames_written += frames
            self.log("debug", {"event": "flush", "frames": frames})
        except SinkUnderrun as exc:
            self.underruns += 1
            self.log("warn", {"event": "underrun", "count": self.underruns, "error": str(exc)})
            self.sink.recover()
        finally:
            self.write_cursor = 0


__all__ = ["SampleBuffer", "pack_samples"]
