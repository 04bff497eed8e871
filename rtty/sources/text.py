from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from .interface import SourceError


class StringSource:
    """A fixed piece of text; poll() never waits."""

    def __init__(self, text: str) -> None:
        self.text = text
        self._pos = 0

    def __iter__(self) -> Iterator[str]:
        while self._pos < len(self.text):
            char = self.text[self._pos]
            self._pos += 1
            yield char

    def poll(self, timeout_s: Optional[float] = None) -> Optional[str]:
        if self._pos >= len(self.text):
            return ""
        char = self.text[self._pos]
        self._pos += 1
        return char


class ArgumentSource(StringSource):
    """Command-line words, separated by single spaces."""

    def __init__(self, words: Iterable[str]) -> None:
        super().__init__(" ".join(words))


class FileSource:
    """Characters of a text file, read lazily line by line."""

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding
        self._chars: Optional[Iterator[str]] = None

    def __iter__(self) -> Iterator[str]:
        try:
            fp = self.path.open("r", encoding=self.encoding, errors="replace")
        except OSError as exc:
            raise SourceError(f"cannot read {self.path}: {exc.strerror or exc}") from exc
        with fp:
            try:
                for line in fp:
                    yield from line
            except OSError as exc:
                raise SourceError(f"error reading {self.path}: {exc}") from exc

    def poll(self, timeout_s: Optional[float] = None) -> Optional[str]:
        if self._chars is None:
            self._chars = iter(self)
        return next(self._chars, "")


__all__ = ["ArgumentSource", "FileSource", "StringSource"]
