"""
Baudot (ITA2) symbol indices and their on-air bit patterns.

Symbols are small integers: 0..25 are the letter positions A..Z, 26..33 are
the control symbols. Figures-mode characters reuse the letter positions.
"""
from __future__ import annotations

from typing import Dict, Tuple

CHAR_A = 0
CHAR_Z = 25
CHAR_NULL = 26
CHAR_LF = 27
CHAR_SPACE = 28
CHAR_CR = 29
CHAR_SHIFT_UP = 30      # to figures
CHAR_SHIFT_DOWN = 31    # to letters
CHAR_OPEN = 32          # all space test pattern
CHAR_CLOSED = 33        # all mark test pattern

SHIFT_TO_FIGURES = CHAR_SHIFT_UP
SHIFT_TO_LETTERS = CHAR_SHIFT_DOWN

CHAR_0 = 15
CHAR_1 = 16
CHAR_2 = 22
CHAR_3 = 4
CHAR_4 = 17
CHAR_5 = 19
CHAR_6 = 24
CHAR_7 = 20
CHAR_8 = 8
CHAR_9 = 14

CHAR_DASH = 0
CHAR_QUESTION = 1
CHAR_COLON = 2
CHAR_DOLLAR = 3
CHAR_BELL = 6
CHAR_APOSTROPHE = 9
CHAR_LPAREN = 10
CHAR_RPAREN = 11
CHAR_PERIOD = 12
CHAR_COMMA = 13
CHAR_SEMICOLON = 21
CHAR_SOLIDUS = 23
CHAR_QUOTE = 25

DIGITS: Tuple[int, ...] = (
    CHAR_0, CHAR_1, CHAR_2, CHAR_3, CHAR_4,
    CHAR_5, CHAR_6, CHAR_7, CHAR_8, CHAR_9,
)

PUNCTUATION: Dict[str, int] = {
    "-": CHAR_DASH,
    "?": CHAR_QUESTION,
    ":": CHAR_COLON,
    "$": CHAR_DOLLAR,
    "\x07": CHAR_BELL,
    "'": CHAR_APOSTROPHE,
    "`": CHAR_APOSTROPHE,
    "(": CHAR_LPAREN,
    ")": CHAR_RPAREN,
    ".": CHAR_PERIOD,
    ",": CHAR_COMMA,
    ";": CHAR_SEMICOLON,
    "/": CHAR_SOLIDUS,
    '"': CHAR_QUOTE,
}

# start bit, five data bits (LSB first), two stop bits
BAUDOT_BITS: Tuple[Tuple[int, ...], ...] = (
    (0, 1, 1, 0, 0, 0, 1, 1),  # A
    (0, 1, 0, 0, 1, 1, 1, 1),  # B
    (0, 0, 1, 1, 1, 0, 1, 1),  # C
    (0, 1, 0, 0, 1, 0, 1, 1),  # D
    (0, 1, 0, 0, 0, 0, 1, 1),  # E / 3
    (0, 1, 0, 1, 1, 0, 1, 1),  # F
    (0, 0, 1, 0, 1, 1, 1, 1),  # G
    (0, 0, 0, 1, 0, 1, 1, 1),  # H
    (0, 0, 1, 1, 0, 0, 1, 1),  # I / 8
    (0, 1, 1, 0, 1, 0, 1, 1),  # J
    (0, 1, 1, 1, 1, 0, 1, 1),  # K
    (0, 0, 1, 0, 0, 1, 1, 1),  # L
    (0, 0, 0, 1, 1, 1, 1, 1),  # M / .
    (0, 0, 0, 1, 1, 0, 1, 1),  # N
    (0, 0, 0, 0, 1, 1, 1, 1),  # O / 9
    (0, 0, 1, 1, 0, 1, 1, 1),  # P / 0
    (0, 1, 1, 1, 0, 1, 1, 1),  # Q / 1
    (0, 0, 1, 0, 1, 0, 1, 1),  # R / 4
    (0, 1, 0, 1, 0, 0, 1, 1),  # S
    (0, 0, 0, 0, 0, 1, 1, 1),  # T / 5
    (0, 1, 1, 1, 0, 0, 1, 1),  # U / 7
    (0, 0, 1, 1, 1, 1, 1, 1),  # V
    (0, 1, 1, 0, 0, 1, 1, 1),  # W / 2
    (0, 1, 0, 1, 1, 1, 1, 1),  # X / /
    (0, 1, 0, 1, 0, 1, 1, 1),  # Y / 6
    (0, 1, 0, 0, 0, 1, 1, 1),  # Z
    (0, 0, 0, 0, 0, 0, 1, 1),  # NULL
    (0, 0, 1, 0, 0, 0, 1, 1),  # LF
    (0, 0, 0, 1, 0, 0, 1, 1),  # SPACE
    (0, 0, 0, 0, 1, 0, 1, 1),  # CR
    (0, 1, 1, 0, 1, 1, 1, 1),  # SHIFT_UP
    (0, 1, 1, 1, 1, 1, 1, 1),  # SHIFT_DOWN
    (0, 0, 0, 0, 0, 0, 0, 0),  # OPEN
    (1, 1, 1, 1, 1, 1, 1, 1),  # CLOSED
)

BITS_PER_SYMBOL = 8


def symbol_bits(symbol: int) -> Tuple[int, ...]:
    if not 0 <= symbol < len(BAUDOT_BITS):
        raise ValueError(f"not a Baudot symbol: {symbol!r}")
    return BAUDOT_BITS[symbol]


def data_code(symbol: int) -> int:
    """Five-bit ITA2 code carried by `symbol` (data bits, LSB first on air)."""
    bits = symbol_bits(symbol)[1:6]
    return sum(bit << i for i, bit in enumerate(bits))


