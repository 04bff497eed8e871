"""
Text source interface - where the characters to transmit come from.

Sources are pull-based. Batch sources are simply iterated; the interactive
loop calls poll() with a timeout so it can keep the sink fed while the
operator is not typing.
"""
from __future__ import annotations

from typing import Iterator, Optional, Protocol, runtime_checkable


class SourceError(OSError):
    """The source could not be read (missing or unreadable input file)."""


@runtime_checkable
class ITextSource(Protocol):

    def __iter__(self) -> Iterator[str]:
        """Yield characters until the source is exhausted."""
        ...

    def poll(self, timeout_s: Optional[float]) -> Optional[str]:
        """
        Wait up to `timeout_s` seconds (None = forever) for one character.

        Returns the character, None on timeout, or "" at end of source.
        """
        ...


__all__ = ["ITextSource", "SourceError"]
