from __future__ import annotations

from typing import Iterator, List, Optional
import os
import select
import sys
import termios


class KeyboardSource:
    """
    Keystrokes from a terminal, one character at a time.

    Used as a context manager the terminal is switched to raw mode (no echo,
    no line buffering, no signal keys) and restored on exit. A descriptor
    that is not a tty (pipe, file) is read as-is.
    """

    def __init__(self, fd: Optional[int] = None) -> None:
        self.fd = sys.stdin.fileno() if fd is None else fd
        self._saved: Optional[List] = None

    def __enter__(self) -> "KeyboardSource":
        self.set_raw()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.restore()

    def set_raw(self) -> bool:
        if not os.isatty(self.fd):
            return False
        self._saved = termios.tcgetattr(self.fd)
        mode = termios.tcgetattr(self.fd)
        mode[0] = 0                                                     # iflag
        mode[1] &= ~termios.OPOST                                       # oflag
        mode[2] &= ~(termios.CSIZE | termios.PARENB)                    # cflag
        mode[2] |= termios.CS8
        mode[3] &= ~(termios.IEXTEN | termios.ISIG | termios.ICANON | termios.ECHO)
        mode[6][termios.VMIN] = 1
        mode[6][termios.VTIME] = 1
        termios.tcsetattr(self.fd, termios.TCSANOW, mode)
        return True

    def restore(self) -> None:
        if self._saved is not None:
            termios.tcsetattr(self.fd, termios.TCSANOW, self._saved)
            self._saved = None

    def poll(self, timeout_s: Optional[float]) -> Optional[str]:
        ready, _, _ = select.select([self.fd], [], [], timeout_s)
        if not ready:
            return None
        data = os.read(self.fd, 1)
        if not data:
            return ""
        return data.decode("latin-1")

    def __iter__(self) -> Iterator[str]:
        while True:
            char = self.poll(None)
            if not char:
                return
            yield char


__all__ = ["KeyboardSource"]
