"""Keyboard-driven cancellation.

``CancellationWatcher`` answers "did the user press the interrupt key?"
without blocking, once per received chunk. ``DoublePressGesture``
recognises two interrupt presses close together, which exits the app.
"""

import time
from collections.abc import Callable

from .keys import KeyCode, KeySource

EXIT_WINDOW_SECONDS = 0.5


class CancellationWatcher:
    """Non-blocking check for the interrupt key.

    The answer latches: once the key has been seen, every later call
    returns True.
    """

    def __init__(self, keys: KeySource, interrupt_key: KeyCode = KeyCode.ESC) -> None:
        self._keys = keys
        self._interrupt_key = interrupt_key
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def poll_cancel(self) -> bool:
        """Consume at most one pending key and report whether to stop."""
        if not self._cancelled and self._keys.poll(0):
            if self._keys.read().code == self._interrupt_key:
                self._cancelled = True
        return self._cancelled


class DoublePressGesture:
    """Detects two interrupt presses within a time window.

    Any other key resets the window via :meth:`reset`.
    """

    def __init__(
        self,
        window: float = EXIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._window = window
        self._clock = clock
        self._last_press: float | None = None

    def press(self) -> bool:
        """Record an interrupt press; True if it completes the gesture."""
        now = self._clock()
        if self._last_press is not None and now - self._last_press < self._window:
            self._last_press = None
            return True
        self._last_press = now
        return False

    def reset(self) -> None:
        self._last_press = None
