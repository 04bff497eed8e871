from __future__ import annotations

import string

import pytest

from rtty.codec import BAUDOT_BITS, BaudotCodec, decode, encode_char, symbol_bits
from rtty.codec.symbols import (
    CHAR_5,
    CHAR_A,
    CHAR_CLOSED,
    CHAR_CR,
    CHAR_LF,
    CHAR_NULL,
    CHAR_OPEN,
    CHAR_SHIFT_DOWN,
    CHAR_SHIFT_UP,
    CHAR_SPACE,
    data_code,
)

SHIFTS = (CHAR_SHIFT_UP, CHAR_SHIFT_DOWN)


def _count_runs(symbols, pattern) -> int:
    count, i = 0, 0
    while i <= len(symbols) - len(pattern):
        if tuple(symbols[i:i + len(pattern)]) == pattern:
            count += 1
            i += len(pattern)
        else:
            i += 1
    return count


@pytest.mark.parametrize("char", list(string.ascii_letters))
def test_letter_round_trip(char: str) -> None:
    """Test every ASCII letter decodes back to its upper case."""
    symbols, figures = encode_char(char, False)
    assert figures is False
    assert decode(symbols) == char.upper()


def test_letters_are_alphabet_positions() -> None:
    """Test letters map to their alphabet index."""
    assert encode_char("a", False) == ([CHAR_A], False)
    assert encode_char("Z", False) == ([25], False)


def test_letter_in_figures_mode_shifts_down() -> None:
    """Test a letter in figures mode is preceded by SHIFT_DOWN."""
    assert encode_char("A", True) == ([CHAR_SHIFT_DOWN, CHAR_A], False)


def test_digit_after_letter_shifts_up() -> None:
    """Test a digit after a letter is preceded by SHIFT_UP."""
    codec = BaudotCodec()
    codec.encode("A")
    assert codec.encode("5") == [CHAR_SHIFT_UP, CHAR_5]
    assert codec.figures is True


@pytest.mark.parametrize("char,code", [
    ("-", 0), ("?", 1), (":", 2), ("$", 3), ("\x07", 6), ("'", 9), ("`", 9),
    ("(", 10), (")", 11), (".", 12), (",", 13), (";", 21), ("/", 23), ('"', 25),
])
def test_punctuation_uses_figures(char: str, code: int) -> None:
    """Test punctuation codes and their figures shift."""
    assert encode_char(char, False) == ([CHAR_SHIFT_UP, code], True)
    assert encode_char(char, True) == ([code], True)


def test_space_and_newline_keep_shift_state() -> None:
    """Test space and newline work in either shift state."""
    assert encode_char(" ", True) == ([CHAR_SPACE], True)
    assert encode_char(" ", False) == ([CHAR_SPACE], False)
    assert encode_char("\n", True) == ([CHAR_CR, CHAR_LF], True)


def test_raw_control_symbols_pass_through() -> None:
    """Test raw symbol values are sent unchanged."""
    assert encode_char(CHAR_OPEN, False) == ([CHAR_OPEN], False)
    assert encode_char(CHAR_CLOSED, True) == ([CHAR_CLOSED], True)
    assert encode_char(chr(CHAR_NULL), False) == ([CHAR_NULL], False)
    assert encode_char(chr(CHAR_SHIFT_DOWN), False) == ([CHAR_SHIFT_DOWN], False)


@pytest.mark.parametrize("char", ["@", "#", "\t", "\r", "é", "~", "_"])
def test_unrepresentable_becomes_null(char: str) -> None:
    """Test characters with no Baudot code become NULL."""
    assert encode_char(char, False) == ([CHAR_NULL], False)


def test_non_symbol_integer_becomes_null() -> None:
    """Test integers outside the control range become NULL."""
    assert encode_char(99, False) == ([CHAR_NULL], False)


def test_multi_character_string_rejected() -> None:
    """Test encode_char() takes one character."""
    with pytest.raises(ValueError):
        encode_char("AB", False)


class TestShiftMinimality:
    """Only mode changes emit shift symbols."""

    @pytest.mark.parametrize("text", ["HELLO WORLD", "12 34 56", "..,;/"])
    def test_single_mode_runs(self, text: str) -> None:
        """Test text in one mode shifts at most once."""
        symbols = BaudotCodec().encode_text(text)
        # a letters-only run starts in letters mode, no shift at all
        expected = 0 if text[0].isalpha() else 1
        assert sum(s in SHIFTS for s in symbols) == expected

    @pytest.mark.parametrize("text,transitions", [
        ("ABC123DEF", 2),
        ("A1B2C3", 5),
        ("CQ DE 5", 1),
        ("RST 599 599 TU", 2),
    ])
    def test_one_shift_per_transition(self, text: str, transitions: int) -> None:
        """Test one shift symbol per letters/figures change."""
        symbols = BaudotCodec().encode_text(text)
        assert sum(s in SHIFTS for s in symbols) == transitions

    def test_mixed_text_decodes(self) -> None:
        """Test mixed letters, digits and punctuation round trip."""
        symbols = BaudotCodec().encode_text("RST 599 (OK)")
        assert decode(symbols) == "RST 599 (OK)"


class TestColumnWrap:
    """Test the forced CR LF CR line wrap."""

    def test_77_printables_wrap_once(self) -> None:
        """Test 77 characters produce exactly one wrap."""
        codec = BaudotCodec()
        symbols = []
        for _ in range(77):
            symbols.extend(codec.feed("E"))
        assert _count_runs(symbols, (CHAR_CR, CHAR_LF, CHAR_CR)) == 1
        assert codec.wraps == 1
        assert codec.column == 1

    def test_counter_resets_at_limit(self) -> None:
        """Test the column resets when the limit is reached."""
        codec = BaudotCodec()
        for _ in range(76):
            codec.feed("x")
        assert codec.column == 0

    def test_newline_resets_column(self) -> None:
        """Test a newline restarts the column count."""
        codec = BaudotCodec()
        for char in "HELLO\n":
            codec.feed(char)
        assert codec.column == 0
        assert codec.wraps == 0

    def test_raw_symbols_do_not_advance_column(self) -> None:
        """Test raw symbols are not counted as columns."""
        codec = BaudotCodec(column_max=2)
        codec.feed(CHAR_NULL)
        codec.feed(CHAR_NULL)
        assert codec.column == 0

    def test_resync_restores_letters(self) -> None:
        """Test resync() returns to letters mode at column 0."""
        codec = BaudotCodec()
        codec.feed("7")
        codec.resync()
        assert codec.figures is False
        assert codec.column == 0


def test_bit_table_framing() -> None:
    """Test start bit 0, five data bits and two stop bits per symbol."""
    for symbol in range(CHAR_SHIFT_DOWN + 1):
        bits = symbol_bits(symbol)
        assert len(bits) == 8
        assert bits[0] == 0
        assert bits[6:] == (1, 1)
    assert BAUDOT_BITS[CHAR_OPEN] == (0,) * 8
    assert BAUDOT_BITS[CHAR_CLOSED] == (1,) * 8


def test_data_bits_are_ita2() -> None:
    """Test the data bits carry the ITA2 codes."""
    assert data_code(CHAR_A) == 0b00011
    assert data_code(1) == 0b11001          # B
    assert data_code(CHAR_SHIFT_UP) == 0b11011
    assert data_code(CHAR_SHIFT_DOWN) == 0b11111


def test_symbol_bits_rejects_out_of_range() -> None:
    """Test values past CLOSED have no bit pattern."""
    with pytest.raises(ValueError):
        symbol_bits(34)


def test_decode_figures() -> None:
    """Test decode() follows shift symbols."""
    assert decode([CHAR_SHIFT_UP, CHAR_5, CHAR_SHIFT_DOWN, CHAR_A]) == "5A"
