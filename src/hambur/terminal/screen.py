"""Terminal output with cursor tracking.

Hides the control sequences needed to drive a raw-mode terminal. In raw
mode a newline does not return the carriage, so every line break is
followed by an explicit move to column 0, and the screen remembers
whether the cursor sits at the start of a line.
"""

from rich.console import Console
from rich.control import Control, ControlType
from rich.style import Style


class Screen:
    """Writes styled text and cursor movements through a Rich console.

    Every styled write is rendered as ``SGR text SGR-reset``, so an
    interrupted sequence never leaves color active.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)
        self._at_line_start = True

    @property
    def at_line_start(self) -> bool:
        """True when the cursor is known to be at column 0."""
        return self._at_line_start

    def write_char(self, char: str, style: str | Style | None = None) -> None:
        """Write a single character, treating ``\\n`` as a line break."""
        if char == "\n":
            self.newline()
            return
        self.console.out(char, style=style, end="", highlight=False)
        self._at_line_start = False

    def write(self, text: str, style: str | Style | None = None) -> None:
        """Write text in one go, breaking lines at ``\\n``."""
        lines = text.split("\n")
        for index, line in enumerate(lines):
            if index:
                self.newline()
            if line:
                self.console.out(line, style=style, end="", highlight=False)
                self._at_line_start = False

    def write_line(self, text: str, style: str | Style | None = None) -> None:
        """Write text followed by a line break."""
        self.write(text, style)
        self.newline()

    def newline(self) -> None:
        """Emit a line break and return to column 0."""
        self.console.out("", end="\n", highlight=False)
        self.move_to_line_start()

    def ensure_line_start(self) -> None:
        """Break the line unless the cursor is already at column 0."""
        if not self._at_line_start:
            self.newline()

    def move_to_line_start(self) -> None:
        self.console.control(Control.move_to_column(0))
        self._at_line_start = True

    def erase_char(self, width: int = 1) -> None:
        """Erase the character left of the cursor (back, blank, back).

        Args:
            width: Terminal cells the character occupies (2 for wide CJK)
        """
        if width <= 0:
            return
        self.console.control(Control.move(x=-width))
        self.console.out(" " * width, end="", highlight=False)
        self.console.control(Control.move(x=-width))

    def move_up(self, lines: int) -> None:
        if lines > 0:
            self.console.control(Control.move(y=-lines))

    def clear_line(self) -> None:
        """Clear the whole current line and return to column 0."""
        self.move_to_line_start()
        self.console.control(Control((ControlType.ERASE_IN_LINE, 2)))
