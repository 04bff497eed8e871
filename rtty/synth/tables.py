from __future__ import annotations

import numpy as np
import numpy.typing as npt

Int16Table = npt.NDArray[np.int16]

AMPLITUDE_MAX: int = 32767
MIN_TABLE_SIZE: int = 2
MAX_TABLE_SIZE: int = 65536
DEFAULT_TABLE_SIZE: int = 8192


def build_table(table_size: int = DEFAULT_TABLE_SIZE, volume: int = 100) -> Int16Table:
    """
    One cycle of cosine, `table_size` samples long, scaled to `volume` percent
    of 16-bit full scale. The returned array is read-only.
    """
    if not (MIN_TABLE_SIZE <= table_size <= MAX_TABLE_SIZE):
        raise ValueError(f"table_size must be in {MIN_TABLE_SIZE}..{MAX_TABLE_SIZE}")
    if not (0 <= volume <= 100):
        raise ValueError("volume must be in 0..100")

    phase = 2.0 * np.pi * np.arange(table_size, dtype=np.float64) / table_size
    table = np.round((volume / 100.0) * AMPLITUDE_MAX * np.cos(phase)).astype(np.int16)
    table.flags.writeable = False
    return table
