"""Terminal control: raw mode, key events, styled output, cancellation."""

from .cancel import CancellationWatcher, DoublePressGesture
from .keys import KeyCode, KeyEvent, KeySource, TerminalKeySource, parse_keys
from .raw_mode import RawModeGuard, TerminalError
from .screen import Screen

__all__ = [
    "CancellationWatcher",
    "DoublePressGesture",
    "KeyCode",
    "KeyEvent",
    "KeySource",
    "RawModeGuard",
    "Screen",
    "TerminalError",
    "TerminalKeySource",
    "parse_keys",
]
