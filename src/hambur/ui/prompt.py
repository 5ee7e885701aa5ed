"""Raw-mode input widgets: the line editor and the model picker.

Both read from a ``KeySource`` and draw on a ``Screen``; neither touches
the terminal mode itself.
"""

from collections.abc import Sequence

from rich.cells import cell_len

from ..registry import ModelDescriptor
from ..terminal.cancel import DoublePressGesture
from ..terminal.keys import KeyCode, KeySource
from ..terminal.screen import Screen
from .config import (
    DOUBLE_ESC_EXIT_NOTICE,
    INPUT_POLL_SECONDS,
    MODEL_SWITCH_CANCELLED_NOTICE,
    MULTIPLE_MATCHES_NOTICE,
    NOTICE_STYLE,
    SELECTION_MARK_STYLE,
)


class LineEditor:
    """Reads one line of input key by key, with echo and backspace.

    Esc feeds the double-press exit gesture; every other key resets it.
    The gesture object outlives single reads, so the window spans lines.
    """

    def __init__(
        self,
        screen: Screen,
        keys: KeySource,
        gesture: DoublePressGesture,
        poll_interval: float = INPUT_POLL_SECONDS,
    ) -> None:
        self._screen = screen
        self._keys = keys
        self._gesture = gesture
        self._poll_interval = poll_interval

    def read_line(self) -> str | None:
        """Read until Enter.

        Returns:
            The typed text, or None if the user asked to exit
        """
        buffer: list[str] = []
        while True:
            if not self._keys.poll(self._poll_interval):
                continue
            event = self._keys.read()

            if event.code == KeyCode.ESC:
                if self._gesture.press():
                    self._screen.newline()
                    self._screen.write_line(DOUBLE_ESC_EXIT_NOTICE)
                    return None
                continue

            self._gesture.reset()
            if event.code == KeyCode.ENTER:
                self._screen.newline()
                return "".join(buffer)
            if event.code == KeyCode.CHAR and event.char:
                buffer.append(event.char)
                self._screen.write_char(event.char)
            elif event.code == KeyCode.BACKSPACE and buffer:
                self._screen.erase_char(cell_len(buffer.pop()))


class ModelSelector:
    """Interactive list for choosing between several matching models.

    Up/Down move the highlight without wrapping, Enter confirms and Esc
    cancels. The list is redrawn in place after every move.
    """

    def __init__(
        self,
        screen: Screen,
        keys: KeySource,
        poll_interval: float = INPUT_POLL_SECONDS,
    ) -> None:
        self._screen = screen
        self._keys = keys
        self._poll_interval = poll_interval

    def select(self, models: Sequence[ModelDescriptor]) -> ModelDescriptor | None:
        """Let the user pick one of ``models``.

        Returns:
            The chosen model, or None if the user cancelled
        """
        self._screen.ensure_line_start()
        self._screen.write_line(MULTIPLE_MATCHES_NOTICE, NOTICE_STYLE)
        index = 0
        self._draw(models, index)

        while True:
            if not self._keys.poll(self._poll_interval):
                continue
            event = self._keys.read()

            if event.code == KeyCode.ENTER:
                return models[index]
            if event.code == KeyCode.ESC:
                self._screen.write_line(MODEL_SWITCH_CANCELLED_NOTICE, NOTICE_STYLE)
                return None
            if event.code == KeyCode.UP:
                index = max(index - 1, 0)
            elif event.code == KeyCode.DOWN:
                index = min(index + 1, len(models) - 1)
            else:
                continue

            self._screen.move_up(len(models))
            self._draw(models, index, redraw=True)

    def _draw(self, models: Sequence[ModelDescriptor], index: int, redraw: bool = False) -> None:
        for i, model in enumerate(models):
            if redraw:
                self._screen.clear_line()
            if i == index:
                self._screen.write(">", SELECTION_MARK_STYLE)
                self._screen.write(f" {model.name} ({model.provider})")
            else:
                self._screen.write(f"  {model.name} ({model.provider})")
            self._screen.newline()
