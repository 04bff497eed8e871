"""
Audio sink interface - the blocking PCM consumer at the end of the chain.

The sink handles:
- Device open / close
- Negotiation of the period and buffer geometry
- Blocking writes of whole periods

It presents a byte-in interface; the sample buffer owns the packing.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class SinkError(RuntimeError):
    """Fatal sink failure (open, negotiate, write)."""


class SinkUnderrun(SinkError):
    """The sink ran dry before the write arrived; recoverable via recover()."""


class SampleFormat(Enum):
    U8 = 8
    S16_LE = 16

    @property
    def sample_width(self) -> int:
        return 1 if self is SampleFormat.U8 else 2

    @classmethod
    def from_bits(cls, bits: int) -> "SampleFormat":
        for fmt in cls:
            if fmt.value == bits:
                return fmt
        raise ValueError(f"bits must be 8 or 16, got {bits}")


@dataclass(frozen=True)
class SinkGeometry:
    frame_size: int         # bytes per frame (channels * sample width)
    period_frames: int      # frames per write
    buffer_frames: int      # total frames the sink can queue

    @classmethod
    def for_stream(cls,
                   sample_rate: int,
                   channels: int,
                   sample_format: SampleFormat,
                   buffer_time_us: int,
                   period_time_us: int) -> "SinkGeometry":
        if channels != 1:
            raise SinkError(f"only mono output is supported, got {channels} channels")
        period = max(1, sample_rate * period_time_us // 1_000_000)
        buffer = max(period, sample_rate * buffer_time_us // 1_000_000)
        return cls(frame_size=sample_format.sample_width, period_frames=period, buffer_frames=buffer)


@runtime_checkable
class IAudioSink(Protocol):
    """
    Audio sink interface.

    write() blocks until the sink accepts the data. The only non-fatal
    failure is SinkUnderrun, after which the caller invokes recover().
    """

    # === Lifecycle ===

    def open(self) -> None:
        """Acquire the device or file. Raises SinkError on failure."""
        ...

    def negotiate(self,
                  sample_rate: int,
                  channels: int,
                  sample_format: SampleFormat,
                  buffer_time_us: int,
                  period_time_us: int) -> SinkGeometry:
        """
        Agree on stream parameters.

        Returns the geometry actually granted; callers size their
        buffers from it. Raises SinkError if the parameters are refused.
        """
        ...

    def drain(self) -> None:
        """Block until queued audio has played out."""
        ...

    def close(self) -> None:
        ...

    # === Data path ===

    def write(self, data: bytes) -> int:
        """Write whole frames; returns the number of frames accepted."""
        ...

    def available_headroom(self) -> int:
        """Frames that can be written right now without blocking."""
        ...

    def recover(self) -> None:
        """Re-prepare the stream after an underrun."""
        ...


__all__ = [
    "IAudioSink",
    "SampleFormat",
    "SinkError",
    "SinkGeometry",
    "SinkUnderrun",
]
