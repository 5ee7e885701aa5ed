"""Unit tests for the line editor and the model picker."""
import pytest

from hambur.registry import find_models
from hambur.terminal import DoublePressGesture, KeyCode, KeyEvent
from hambur.ui import LineEditor, ModelSelector

ESC = KeyEvent(KeyCode.ESC)
ENTER = KeyEvent(KeyCode.ENTER)
BACKSPACE = KeyEvent(KeyCode.BACKSPACE)
UP = KeyEvent(KeyCode.UP)
DOWN = KeyEvent(KeyCode.DOWN)


def typed(text):
    return [KeyEvent(KeyCode.CHAR, char) for char in text]


class SteppingClock:
    """Clock that moves forward by a fixed step every time it is read."""

    def __init__(self, step):
        self.step = step
        self.now = 0.0

    def __call__(self):
        self.now += self.step
        return self.now


@pytest.fixture
def editor(screen, key_source, clock):
    return LineEditor(screen, key_source, DoublePressGesture(clock=clock))


class TestLineEditor:
    """Tests for reading a line in raw mode."""

    def test_typing_and_enter(self, editor, key_source, plain_output, screen):
        """Test that typed characters are echoed and returned on Enter."""
        key_source.push(*typed("hello"), ENTER)

        assert editor.read_line() == "hello"
        assert "hello" in plain_output()
        assert screen.at_line_start

    def test_empty_line(self, editor, key_source):
        """Test that Enter alone returns an empty string."""
        key_source.push(ENTER)

        assert editor.read_line() == ""

    def test_backspace_removes_last_character(self, editor, key_source, raw_output):
        """Test that backspace edits the buffer and the screen."""
        key_source.push(*typed("ab"), BACKSPACE, *typed("c"), ENTER)

        assert editor.read_line() == "ac"
        assert "\x1b[1D \x1b[1D" in raw_output()

    def test_backspace_on_wide_character(self, editor, key_source, raw_output):
        """Test that a wide character is erased across both cells."""
        key_source.push(*typed("你"), BACKSPACE, ENTER)

        assert editor.read_line() == ""
        assert "\x1b[2D  \x1b[2D" in raw_output()

    def test_backspace_on_empty_buffer(self, editor, key_source, raw_output):
        """Test that backspace does nothing when there is nothing to erase."""
        key_source.push(BACKSPACE, ENTER)

        assert editor.read_line() == ""
        assert "\x1b[1D" not in raw_output()

    def test_double_escape_exits(self, editor, key_source, plain_output):
        """Test that two quick Esc presses end input."""
        key_source.push(*typed("draft"), ESC, ESC)

        assert editor.read_line() is None
        assert "[Esc pressed twice, exiting]" in plain_output()

    def test_slow_escapes_do_not_exit(self, screen, key_source):
        """Test that Esc presses 600ms apart are ignored."""
        editor = LineEditor(screen, key_source, DoublePressGesture(clock=SteppingClock(0.6)))
        key_source.push(ESC, ESC, *typed("ok"), ENTER)

        assert editor.read_line() == "ok"

    def test_key_between_escapes_resets_gesture(self, editor, key_source):
        """Test that another key between two Esc presses cancels the exit."""
        key_source.push(ESC, *typed("a"), ESC, ENTER)

        assert editor.read_line() == "a"

    def test_gesture_spans_lines(self, editor, key_source):
        """Test that the window is not reset by a new read."""
        key_source.push(ESC)
        with pytest.raises(EOFError):
            editor.read_line()

        key_source.push(ESC)
        assert editor.read_line() is None

    def test_other_keys_are_ignored(self, editor, key_source):
        """Test that arrows and control keys are not typed."""
        key_source.push(UP, KeyEvent(KeyCode.OTHER, "\x03"), *typed("x"), ENTER)

        assert editor.read_line() == "x"


@pytest.fixture
def selector(screen, key_source):
    return ModelSelector(screen, key_source)


@pytest.fixture
def flash_models():
    models = find_models("flash")
    assert [m.name for m in models] == ["gemini-flash", "gemini-flash-lite"]
    return models


class TestModelSelector:
    """Tests for choosing between several matching models."""

    def test_lists_models_with_first_highlighted(self, selector, key_source, flash_models, plain_output):
        """Test the initial drawing of the list."""
        key_source.push(ENTER)

        selector.select(flash_models)

        output = plain_output()
        assert "Several models match" in output
        assert "> gemini-flash (openrouter)" in output
        assert "  gemini-flash-lite (openrouter)" in output

    def test_enter_selects_first(self, selector, key_source, flash_models):
        """Test that Enter without moving picks the first model."""
        key_source.push(ENTER)

        assert selector.select(flash_models) == flash_models[0]

    def test_down_then_enter(self, selector, key_source, flash_models, plain_output):
        """Test that Down moves the highlight and redraws in place."""
        key_source.push(DOWN, ENTER)

        assert selector.select(flash_models) == flash_models[1]
        assert "> gemini-flash-lite (openrouter)" in plain_output()

    def test_redraw_moves_up_over_list(self, selector, key_source, flash_models, raw_output):
        """Test that a redraw starts by moving back to the first row."""
        key_source.push(DOWN, ENTER)

        selector.select(flash_models)

        assert "\x1b[2A\x1b[1G\x1b[2K" in raw_output()

    def test_clamps_at_top(self, selector, key_source, flash_models):
        """Test that Up on the first row stays there."""
        key_source.push(UP, UP, ENTER)

        assert selector.select(flash_models) == flash_models[0]

    def test_clamps_at_bottom(self, selector, key_source, flash_models):
        """Test that Down on the last row stays there."""
        key_source.push(DOWN, DOWN, DOWN, ENTER)

        assert selector.select(flash_models) == flash_models[-1]

    def test_escape_cancels(self, selector, key_source, flash_models, plain_output):
        """Test that Esc returns no model."""
        key_source.push(DOWN, ESC)

        assert selector.select(flash_models) is None
        assert "Model switch cancelled" in plain_output()

    def test_unhandled_keys_do_not_redraw(self, selector, key_source, flash_models, raw_output):
        """Test that typing letters leaves the list alone."""
        key_source.push(*typed("zz"), ENTER)

        selector.select(flash_models)

        assert "\x1b[2A" not in raw_output()
