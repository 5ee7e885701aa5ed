"""Keyboard events read from a raw-mode terminal.

Hides the byte sequences terminals send for special keys. Consumers see
``KeyEvent`` values and never touch stdin directly.
"""

import codecs
import os
import select
import sys
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from enum import Enum

from .raw_mode import TerminalError


class KeyCode(str, Enum):
    """Keys Hambur distinguishes."""

    CHAR = "char"
    ENTER = "enter"
    ESC = "esc"
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    OTHER = "other"


@dataclass(frozen=True)
class KeyEvent:
    """A single key press. ``char`` is set for printable keys."""

    code: KeyCode
    char: str | None = None


_ARROWS = {"A": KeyCode.UP, "B": KeyCode.DOWN, "C": KeyCode.RIGHT, "D": KeyCode.LEFT}


def parse_keys(text: str) -> list[KeyEvent]:
    """Split decoded terminal input into key events.

    A lone ESC byte is the Esc key; ESC followed by ``[`` or ``O`` starts a
    control sequence (arrows, function keys), which is consumed whole.

    Args:
        text: Characters read from the terminal in one go

    Returns:
        Key events in input order
    """
    events: list[KeyEvent] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\x1b":
            if i + 2 < len(text) and text[i + 1] in "[O":
                end = i + 2
                # Parameters are digits and ';', the final byte is a letter or '~'.
                while end < len(text) and (text[end].isdigit() or text[end] == ";"):
                    end += 1
                if end < len(text):
                    events.append(KeyEvent(_ARROWS.get(text[end], KeyCode.OTHER)))
                    i = end + 1
                    continue
            events.append(KeyEvent(KeyCode.ESC))
            i += 1
            continue

        if ch in ("\r", "\n"):
            events.append(KeyEvent(KeyCode.ENTER))
        elif ch in ("\x7f", "\x08"):
            events.append(KeyEvent(KeyCode.BACKSPACE))
        elif ch < " ":
            events.append(KeyEvent(KeyCode.OTHER, ch))
        else:
            events.append(KeyEvent(KeyCode.CHAR, ch))
        i += 1
    return events


class KeySource(ABC):
    """Abstract source of key events.

    ``poll`` never consumes input; ``read`` returns the next event,
    blocking until one is available.
    """

    @abstractmethod
    def poll(self, timeout: float | None) -> bool:
        """Return True if a key event is ready within ``timeout`` seconds."""

    @abstractmethod
    def read(self) -> KeyEvent:
        """Return the next key event."""


class TerminalKeySource(KeySource):
    """Key events from a terminal file descriptor (stdin by default).

    The terminal is expected to be in raw mode while keys are read; see
    ``RawModeGuard``.
    """

    def __init__(self, fd: int | None = None) -> None:
        try:
            self._fd = sys.stdin.fileno() if fd is None else fd
        except (OSError, ValueError) as e:
            raise TerminalError(f"stdin is not a usable terminal: {e}") from e
        if not os.isatty(self._fd):
            raise TerminalError("stdin is not a terminal")
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending: deque[KeyEvent] = deque()

    def poll(self, timeout: float | None) -> bool:
        if self._pending:
            return True
        readable, _, _ = select.select([self._fd], [], [], timeout)
        if readable:
            data = os.read(self._fd, 64)
            self._pending.extend(parse_keys(self._decoder.decode(data)))
        return bool(self._pending)

    def read(self) -> KeyEvent:
        while not self._pending:
            self.poll(None)
        return self._pending.popleft()
