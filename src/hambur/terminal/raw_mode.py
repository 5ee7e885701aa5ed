"""Scoped raw-mode handling for the controlling terminal.

Raw mode must never outlive the code that asked for it: a shell left in
raw mode after the process exits is unusable. ``RawModeGuard`` restores
the saved attributes on every exit path, exceptions included.
"""

import sys
import termios
import tty
from typing import Any

from ..llm.errors import HamburError


class TerminalError(HamburError):
    """The terminal cannot be configured for interactive input."""


class RawModeGuard:
    """Context manager that puts a terminal into raw mode.

    Nesting is allowed; each guard restores the attributes that were
    active when it was entered.

    Example:
        with RawModeGuard():
            key = key_source.read()
    """

    def __init__(self, fd: int | None = None) -> None:
        self._fd = fd
        self._saved: list[Any] | None = None

    def __enter__(self) -> "RawModeGuard":
        try:
            if self._fd is None:
                self._fd = sys.stdin.fileno()
            self._saved = termios.tcgetattr(self._fd)
            tty.setraw(self._fd)
        except (termios.error, OSError, ValueError) as e:
            raise TerminalError(f"Cannot enter raw mode: {e}") from e
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._saved is None:
            return
        saved, self._saved = self._saved, None
        try:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, saved)
        except (termios.error, OSError) as e:
            raise TerminalError(f"Cannot restore terminal mode: {e}") from e
