from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

import numpy as np
import numpy.typing as npt

from .tables import Int16Table

Int16Block = npt.NDArray[np.int16]


class SampleWriter(Protocol):
    def extend(self, samples: Int16Block) -> None: ...


@dataclass
class OscillatorState:
    """
    Phase accumulator shared by every render() of one transmission.

    Never reset between frequency changes: mark/space transitions stay
    phase-continuous only because the table index carries over.
    """
    phase_index: int = 0
    error: int = 0


class Oscillator:
    """
    Table-lookup tone generator with Bresenham-style fractional stepping.

    The per-sample table step is frequency * table_size / sample_rate, split
    into an integer part and a remainder that is accumulated in integer
    arithmetic, so long runs have no floating-point phase drift.
    """

    def __init__(self,
                 table: Int16Table,
                 sample_rate: int,
                 state: Optional[OscillatorState] = None) -> None:
        if sample_rate <= 0:
            raise ValueError("sample_rate must be > 0")
        if len(table) == 0:
            raise ValueError("tone table is empty")
        self.table = table
        self.table_size = len(table)
        self.sample_rate = int(sample_rate)
        self.state = OscillatorState(error=self.sample_rate // 2) if state is None else state
        self._lookup = table.tolist()

    def steps(self, frequency_hz: int) -> Tuple[int, int]:
        if frequency_hz < 0:
            raise ValueError("frequency_hz must be >= 0")
        scaled = int(frequency_hz) * self.table_size
        return scaled // self.sample_rate, scaled % self.sample_rate

    def sample_count(self, duration_ms: int) -> int:
        if duration_ms <= 0:
            return 0
        return (int(duration_ms) * self.sample_rate) // 1000

    def generate(self, frequency_hz: int, duration_ms: int) -> Int16Block:
        count = self.sample_count(duration_ms)
        if count == 0:
            return np.zeros(0, dtype=np.int16)

        step, fraction = self.steps(frequency_hz)
        lookup = self._lookup
        size = self.table_size
        rate = self.sample_rate
        idx = self.state.phase_index
        err = self.state.error

        out = [0] * count
        for n in range(count):
            out[n] = lookup[idx]
            idx += step
            if err < 0:
                err += rate
                idx += 1
            idx %= size
            err -= fraction

        self.state.phase_index = idx
        self.state.error = err
        return np.asarray(out, dtype=np.int16)

    def render(self, frequency_hz: int, duration_ms: int, buffer: SampleWriter) -> int:
        samples = self.generate(frequency_hz, duration_ms)
        if samples.size:
            buffer.extend(samples)
        return int(samples.size)


__all__ = ["Oscillator", "OscillatorState", "SampleWriter"]
