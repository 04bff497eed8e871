import numpy as np
import pytest

from rtty.synth import AMPLITUDE_MAX, build_table


def test_table_is_deterministic():
    """Test two builds are byte-identical."""
    a = build_table(8192, 100)
    b = build_table(8192, 100)
    assert a.dtype == np.int16
    assert a.tobytes() == b.tobytes()


def test_full_volume_cosine():
    """Test peak, trough and zero crossing of a full-scale table."""
    table = build_table(8192, 100)
    assert len(table) == 8192
    assert table[0] == AMPLITUDE_MAX
    assert table[4096] == -AMPLITUDE_MAX
    assert table[2048] == 0
    assert int(np.max(table)) == AMPLITUDE_MAX


def test_volume_scales_amplitude():
    """Test volume percent scales the peak."""
    half = build_table(1024, 50)
    assert abs(int(half[0]) - AMPLITUDE_MAX // 2) <= 1
    assert not build_table(1024, 0).any()


def test_table_is_read_only():
    """Test the table cannot be modified."""
    table = build_table(64, 100)
    with pytest.raises(ValueError):
        table[0] = 1


@pytest.mark.parametrize("size,volume", [(1, 100), (65537, 100), (1024, -1), (1024, 101)])
def test_rejects_out_of_range(size, volume):
    """Test table size and volume limits."""
    with pytest.raises(ValueError):
        build_table(size, volume)
