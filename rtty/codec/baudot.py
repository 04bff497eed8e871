from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple, Union
import string

from .symbols import (
    CHAR_CLOSED,
    CHAR_CR,
    CHAR_LF,
    CHAR_NULL,
    CHAR_OPEN,
    CHAR_SHIFT_DOWN,
    CHAR_SHIFT_UP,
    CHAR_SPACE,
    DIGITS,
    PUNCTUATION,
)

Symbolish = Union[str, int]

PRINTABLE = frozenset(string.printable)
_LETTERS = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)


def _figures_decode_table() -> Dict[int, str]:
    table: Dict[int, str] = {}
    for char, code in PUNCTUATION.items():
        table.setdefault(code, char)
    for value, code in enumerate(DIGITS):
        table[code] = str(value)
    return table


_FIGURES_DECODE = _figures_decode_table()


def encode_char(char: Symbolish, figures: bool) -> Tuple[List[int], bool]:
    """
    Map one character to its Baudot symbols.

    Returns the symbols and the shift state after them (True = figures).
    Integers in NULL..CLOSED are raw symbols and pass through; every other
    unmappable input becomes NULL.
    """
    if isinstance(char, int):
        if CHAR_NULL <= char <= CHAR_CLOSED:
            return [char], figures
        return [CHAR_NULL], figures
    if len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")

    code = PUNCTUATION.get(char)
    if code is not None:
        if figures:
            return [code], True
        return [CHAR_SHIFT_UP, code], True

    if char == " ":
        return [CHAR_SPACE], figures
    if char == "\n":
        return [CHAR_CR, CHAR_LF], figures

    if char in _DIGITS:
        out = [] if figures else [CHAR_SHIFT_UP]
        out.append(DIGITS[ord(char) - ord("0")])
        return out, True

    if char in _LETTERS:
        out = [CHAR_SHIFT_DOWN] if figures else []
        out.append(ord(char.upper()) - ord("A"))
        return out, False

    if CHAR_NULL <= ord(char) <= CHAR_CLOSED:
        return [ord(char)], figures
    return [CHAR_NULL], figures


def decode(symbols: Iterable[int]) -> str:
    """Reference inverse of the encoder at symbol level (starts in letters mode)."""
    figures = False
    out: List[str] = []
    for sym in symbols:
        if sym == CHAR_SHIFT_UP:
            figures = True
        elif sym == CHAR_SHIFT_DOWN:
            figures = False
        elif sym == CHAR_CR:
            out.append("\r")
        elif sym == CHAR_LF:
            out.append("\n")
        elif sym == CHAR_SPACE:
            out.append(" ")
        elif sym in (CHAR_NULL, CHAR_OPEN, CHAR_CLOSED):
            continue
        elif 0 <= sym <= 25:
            out.append(_FIGURES_DECODE.get(sym, "") if figures else chr(ord("A") + sym))
        else:
            raise ValueError(f"not a Baudot symbol: {sym!r}")
    return "".join(out)


@dataclass
class CodecState:
    figures: bool = False
    column: int = 0

    def reset(self) -> None:
        self.figures = False
        self.column = 0


class BaudotCodec:
    """
    Stateful wrapper around encode_char().

    Keeps the shift state across characters and enforces the transport line
    wrap: after `column_max` printable characters a CR LF CR is forced.
    """

    DEFAULT_COLUMN_MAX: int = 76

    def __init__(self, column_max: int = DEFAULT_COLUMN_MAX, state: CodecState | None = None) -> None:
        if column_max <= 0:
            raise ValueError("column_max must be > 0")
        self.column_max = column_max
        self.state = CodecState() if state is None else state
        self.wraps = 0

    @property
    def figures(self) -> bool:
        return self.state.figures

    @property
    def column(self) -> int:
        return self.state.column

    def resync(self) -> None:
        self.state.reset()

    def encode(self, char: Symbolish) -> List[int]:
        symbols, self.state.figures = encode_char(char, self.state.figures)
        return symbols

    def encode_text(self, text: Iterable[Symbolish]) -> List[int]:
        out: List[int] = []
        for char in text:
            out.extend(self.encode(char))
        return out

    def feed(self, char: Symbolish) -> List[int]:
        symbols = self.encode(char)
        if isinstance(char, str) and char in PRINTABLE:
            self.state.column += 1
            if char in "\r\n":
                self.state.column = 0

        if self.state.column >= self.column_max:
            symbols.extend((CHAR_CR, CHAR_LF, CHAR_CR))
            self.state.column = 0
            self.wraps += 1
        return symbols


__all__ = ["BaudotCodec", "CodecState", "PRINTABLE", "decode", "encode_char"]
