"""Pytest configuration and shared fixtures."""
import io
import re
from collections import deque

import pytest
from rich.console import Console

from hambur.terminal import KeySource, Screen

_ANSI = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


class ScriptedKeySource(KeySource):
    """Key source that replays a fixed list of events.

    Zero-timeout polls on an empty script report "no key"; a waiting poll
    on an empty script fails the test instead of spinning forever.
    """

    def __init__(self, events=()):
        self.events = deque(events)
        self.polls = 0

    def push(self, *events):
        self.events.extend(events)

    def poll(self, timeout):
        self.polls += 1
        if not self.events and timeout:
            raise EOFError("key script exhausted")
        return bool(self.events)

    def read(self):
        return self.events.popleft()


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def console():
    """Rich console writing ANSI output to a string buffer."""
    return Console(
        file=io.StringIO(),
        force_terminal=True,
        color_system="standard",
        width=120,
        _environ={},
    )


@pytest.fixture
def screen(console):
    """Screen backed by the capturing console."""
    return Screen(console)


@pytest.fixture
def raw_output(console):
    """Return everything written so far, escape codes included."""
    return lambda: console.file.getvalue()


@pytest.fixture
def plain_output(console):
    """Return everything written so far with escape codes removed."""
    return lambda: _ANSI.sub("", console.file.getvalue())


@pytest.fixture
def clock():
    """Fake monotonic clock."""
    return FakeClock()


@pytest.fixture
def key_source():
    """Empty scripted key source; tests push the keys they need."""
    return ScriptedKeySource()
