"""Incremental decoder for SSE chat-completions bodies.

This module hides the wire format of a streaming reply:
- Chunk boundaries that split lines or UTF-8 code points
- ``data:`` framing, heartbeats and the ``[DONE]`` sentinel
- Providers that send plain text instead of JSON
- Cooperative cancellation between chunks

Nothing a single server frame contains can abort the stream; malformed
frames become ``DecodeError`` values for the caller to show.
"""

import codecs
from collections.abc import AsyncIterator, Callable
from typing import Any

from pydantic import ValidationError

from .frames import (
    DecodeError,
    Done,
    RawFallback,
    ReasoningDelta,
    StreamFrame,
    StreamStats,
    TextDelta,
)
from .models import ChatCompletionChunk

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"
COMMENT_PREFIX = ":"
# SSE fields other than data carry nothing a chat reply needs
IGNORED_FIELDS = ("event:", "id:", "retry:")
HEARTBEAT_MARKERS: tuple[str, ...] = ()


class SSEDecoder:
    """Turns raw body chunks into stream frames.

    Feed chunks in arrival order with :meth:`feed`, then call
    :meth:`finish` once the body has ended. An instance decodes exactly
    one response.

    Example:
        decoder = SSEDecoder()
        for chunk in body:
            for frame in decoder.feed(chunk):
                handle(frame)
        for frame in decoder.finish():
            handle(frame)
    """

    def __init__(self, heartbeat_markers: tuple[str, ...] = HEARTBEAT_MARKERS) -> None:
        self._heartbeat_markers = heartbeat_markers
        self._text = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""
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

    def feed(self, chunk: bytes) -> list[StreamFrame]:
        """Decode one chunk and return the frames of every line it completes."""
        self._pending += self._text.decode(chunk)
        *lines, self._pending = self._pending.split("\n")
        frames: list[StreamFrame] = []
        for line in lines:
            frames.extend(self._decode_line(line))
        return frames

    def finish(self) -> list[StreamFrame]:
        """Flush the decoder at end of body.

        A final line without a terminator is decoded like any other.
        """
        tail = self._pending + self._text.decode(b"", final=True)
        self._pending = ""
        frames: list[StreamFrame] = []
        for line in tail.split("\n"):
            frames.extend(self._decode_line(line))
        return frames

    def _decode_line(self, line: str) -> list[StreamFrame]:
        line = line.rstrip("\r")
        if not line.strip():
            return []
        # Comments cover keep-alives such as ": OPENROUTER PROCESSING"
        if line.startswith(COMMENT_PREFIX) or line.startswith(IGNORED_FIELDS):
            return []
        if self._heartbeat_markers and line.startswith(self._heartbeat_markers):
            return []

        payload = line[len(DATA_PREFIX):] if line.startswith(DATA_PREFIX) else line
        if payload == DONE_SENTINEL:
            # Not a terminator: some providers keep sending after it.
            return []

        return self._decode_payload(payload)

    def _decode_payload(self, payload: str) -> list[StreamFrame]:
        try:
            chunk = ChatCompletionChunk.model_validate_json(payload)
        except ValidationError as e:
            reason = _describe(e)
            self._debug("debug", "Decoder", f"JSON parse error: {reason}, data: {payload}")
            if not payload.startswith(("{", "[")):
                return [RawFallback(payload)]
            return [DecodeError(raw=payload, cause=reason)]

        if not chunk.choices:
            return []

        delta = chunk.choices[0].delta
        frames: list[StreamFrame] = []
        if delta.reasoning_content is not None:
            frames.append(ReasoningDelta(delta.reasoning_content))
        if delta.content is not None:
            frames.append(TextDelta(delta.content))
        return frames


def _describe(error: ValidationError) -> str:
    """Condense a validation error into one line."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


async def decode_stream(
    chunks: AsyncIterator[bytes],
    poll_cancel: Callable[[], bool],
    *,
    stats: StreamStats | None = None,
    decoder: SSEDecoder | None = None,
) -> AsyncIterator[StreamFrame]:
    """Decode a streaming body into frames, stopping early on cancellation.

    ``poll_cancel`` is called once for every chunk that arrives, before
    the chunk is decoded. When it returns True the rest of the body and
    any buffered bytes are dropped.

    Args:
        chunks: Raw body chunks in arrival order
        poll_cancel: Non-blocking cancellation check
        stats: Optional per-turn counters to update
        decoder: Decoder to use (a fresh SSEDecoder by default)

    Yields:
        Decoded frames, always ending with exactly one ``Done``
    """
    decoder = decoder or SSEDecoder()

    async for chunk in chunks:
        if poll_cancel():
            yield Done(interrupted=True)
            return

        if stats is not None:
            stats.chunks += 1
            stats.bytes_received += len(chunk)

        for frame in decoder.feed(chunk):
            yield frame

    for frame in decoder.finish():
        yield frame
    yield Done()
