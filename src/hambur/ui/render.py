"""Render sink for streamed replies.

Hides how frames become terminal output: per-character pacing, colors
per frame kind, and which text counts as the assistant's reply.
"""

import asyncio
import time
from collections.abc import AsyncIterable, Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from ..llm.frames import (
    DecodeError,
    Done,
    RawFallback,
    ReasoningDelta,
    StreamFrame,
    StreamStats,
    TextDelta,
)
from ..terminal.screen import Screen
from .config import (
    CHAR_DELAY_SECONDS,
    DIAGNOSTIC_STYLE,
    INTERRUPTED_MARKER,
    NOTICE_STYLE,
    REASONING_STYLE,
    TEXT_STYLE,
)


@dataclass
class RenderResult:
    """What a render pass produced.

    Attributes:
        reply: Text kept for history (text deltas and raw fallbacks only)
        interrupted: True if the stream ended through cancellation
    """

    reply: str = ""
    interrupted: bool = False


class RenderSink:
    """Writes stream frames to a screen with a typewriter effect.

    Example:
        sink = RenderSink(Screen())
        result = await sink.render(decode_stream(chunks, watcher.poll_cancel))
        history.append_assistant(result.reply)
    """

    def __init__(
        self,
        screen: Screen,
        char_delay: float = CHAR_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._screen = screen
        self._char_delay = char_delay
        self._sleep = sleep
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        """Send debug message if callback is set."""
        if self._debug_callback:
            self._debug_callback(level, component, message)

    async def render(
        self,
        frames: AsyncIterable[StreamFrame],
        stats: StreamStats | None = None,
        into: RenderResult | None = None,
    ) -> RenderResult:
        """Consume frames until the stream ends.

        Args:
            frames: Decoded frames, normally from ``decode_stream``
            stats: Optional per-turn counters to update
            into: Result to accumulate into, so a caller keeps the partial
                reply if the frame source raises

        Returns:
            The accumulated reply and whether the stream was interrupted
        """
        result = into if into is not None else RenderResult()
        stats = stats if stats is not None else StreamStats()

        async for frame in frames:
            if isinstance(frame, TextDelta):
                stats.text_deltas += 1
                started = time.perf_counter()
                await self._type(frame.content, TEXT_STYLE, stats)
                result.reply += frame.content
                self._debug(
                    "debug",
                    "Render",
                    f"chunk of {len(frame.content)} chars took {time.perf_counter() - started:.3f}s, "
                    f"{stats.chars_rendered} chars rendered, "
                    f"cumulative delay {stats.render_delay:.3f}s",
                )
            elif isinstance(frame, ReasoningDelta):
                await self._type(frame.content, REASONING_STYLE, stats)
            elif isinstance(frame, RawFallback):
                self._screen.write(frame.text, DIAGNOSTIC_STYLE)
                result.reply += frame.text
            elif isinstance(frame, DecodeError):
                self._screen.write(
                    f"Failed to parse response: {frame.cause}\nRaw data: {frame.raw}",
                    DIAGNOSTIC_STYLE,
                )
            elif isinstance(frame, Done):
                if frame.interrupted:
                    result.interrupted = True
                    self._screen.ensure_line_start()
                    self._screen.write_line(INTERRUPTED_MARKER, NOTICE_STYLE)

        return result

    async def _type(self, text: str, style: str, stats: StreamStats) -> None:
        for char in text:
            self._screen.write_char(char, style)
            stats.chars_rendered += 1
            stats.render_delay += self._char_delay
            await self._sleep(self._char_delay)
