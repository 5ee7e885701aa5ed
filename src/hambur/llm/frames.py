"""Typed frames produced by the stream decoder.

Frames only live inside one decode/render loop; nothing here is stored.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextDelta:
    """A fragment of the assistant's reply."""

    content: str


@dataclass(frozen=True)
class ReasoningDelta:
    """A fragment of the model's reasoning, shown but never kept in history."""

    content: str


@dataclass(frozen=True)
class RawFallback:
    """A payload that was not JSON; treated as plain reply text."""

    text: str


@dataclass(frozen=True)
class DecodeError:
    """A JSON-looking payload that failed to parse."""

    raw: str
    cause: str


@dataclass(frozen=True)
class Done:
    """Last frame of every stream.

    ``interrupted`` is True when the user cancelled before the body ended.
    """

    interrupted: bool = False


StreamFrame = TextDelta | ReasoningDelta | RawFallback | DecodeError | Done


@dataclass
class StreamStats:
    """Per-turn debug counters, threaded through decoder and render sink."""

    chunks: int = 0
    bytes_received: int = 0
    text_deltas: int = 0
    chars_rendered: int = 0
    render_delay: float = 0.0
