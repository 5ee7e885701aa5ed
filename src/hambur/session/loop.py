"""Interactive session: input, commands, model switching and chat turns.

This module hides how one conversation is driven:
- Reading raw-mode input and recognising commands
- Switching models by keyword, with a picker for ambiguous matches
- Running a streamed turn and keeping the history consistent

Everything runs on one asyncio task. Blocking key reads at the prompt and
in the model picker are awaited in a worker thread, so the event loop
stays free. Terminal raw mode is held only while keys are being read or
a reply is streaming.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from contextlib import AbstractContextManager
from enum import Enum
from typing import Any

from ..llm.client import ChatClient
from ..llm.decoder import SSEDecoder, decode_stream
from ..llm.errors import ChatTransportError, ConfigurationError
from ..llm.frames import StreamStats
from ..registry import DEFAULT_MODEL_ID, ModelDescriptor, find_models, get_model
from ..terminal.cancel import CancellationWatcher, DoublePressGesture
from ..terminal.keys import KeySource
from ..terminal.raw_mode import RawModeGuard
from ..terminal.screen import Screen
from ..ui.config import (
    ASSISTANT_PROMPT,
    ASSISTANT_PROMPT_STYLE,
    BANNER_STYLE,
    CHAR_DELAY_SECONDS,
    DIAGNOSTIC_STYLE,
    HISTORY_CLEARED_NOTICE,
    MODEL_INFO_STYLE,
    NOTICE_STYLE,
    TEXT_STYLE,
    USER_PROMPT,
    USER_PROMPT_STYLE,
    WELCOME_BANNER,
)
from ..ui.prompt import LineEditor, ModelSelector
from ..ui.render import RenderResult, RenderSink
from .history import ConversationHistory


class SessionState(str, Enum):
    """Where the session is in its input/stream cycle."""

    AWAITING_INPUT = "awaiting_input"
    MODEL_SWITCH_PROMPT = "model_switch_prompt"
    STREAMING = "streaming"
    EXITED = "exited"


class ChatSession:
    """Drives a conversation from the keyboard.

    Example:
        async with ChatClient() as client:
            session = ChatSession(client, Screen(), TerminalKeySource())
            await session.run()
    """

    def __init__(
        self,
        client: ChatClient,
        screen: Screen,
        keys: KeySource,
        *,
        model_id: str = DEFAULT_MODEL_ID,
        char_delay: float = CHAR_DELAY_SECONDS,
        raw_mode: Callable[[], AbstractContextManager[Any]] = RawModeGuard,
        gesture: DoublePressGesture | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize the session.

        Args:
            client: Transport used for chat turns
            screen: Where all output goes
            keys: Keyboard source shared by input, picker and cancellation
            model_id: Model used until the user switches
            char_delay: Typewriter delay between rendered characters
            raw_mode: Factory for the raw-mode scope
            gesture: Double-Esc exit detector (a 500 ms one by default)
            sleep: Awaitable delay used by the renderer
        """
        self.history = ConversationHistory()
        self.model_id = model_id
        self.state = SessionState.AWAITING_INPUT
        self._client = client
        self._screen = screen
        self._keys = keys
        self._raw_mode = raw_mode
        self._editor = LineEditor(screen, keys, gesture or DoublePressGesture())
        self._selector = ModelSelector(screen, keys)
        self._sink = RenderSink(screen, char_delay=char_delay, sleep=sleep)
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for timing and decode diagnostics.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback
        self._client.set_debug_callback(callback)
        self._sink.set_debug_callback(callback)

    def _debug(self, level: str, component: str, message: str) -> None:
        """Send a debug log message if callback is set."""
        if self._debug_callback:
            self._debug_callback(level, component, message)

    async def run(self) -> None:
        """Read and handle input until the user exits."""
        self._show_banner()
        while self.state != SessionState.EXITED:
            self._screen.move_to_line_start()
            self._screen.write(USER_PROMPT, USER_PROMPT_STYLE)
            self._screen.write(" ")

            # Key reads block, so they run off the event loop
            with self._raw_mode():
                line = await asyncio.to_thread(self._editor.read_line)

            if line is None:
                self.state = SessionState.EXITED
                break
            await self.handle_input(line)

    async def handle_input(self, line: str) -> SessionState:
        """Act on one line of input.

        Args:
            line: Raw text typed by the user

        Returns:
            The session state after handling the line
        """
        text = line.strip()
        if not text:
            return self.state

        command = text.lower()
        if command == "exit":
            self.state = SessionState.EXITED
            return self.state
        if command == "clear":
            self.history.clear()
            self._screen.write_line(HISTORY_CLEARED_NOTICE, NOTICE_STYLE)
            return self.state

        matches = find_models(text)
        if len(matches) == 1:
            self._switch_model(matches[0])
        elif matches:
            self.state = SessionState.MODEL_SWITCH_PROMPT
            with self._raw_mode():
                chosen = await asyncio.to_thread(self._selector.select, matches)
            if chosen is not None:
                self._switch_model(chosen)
            self.state = SessionState.AWAITING_INPUT
        else:
            await self.send_message(text)
        return self.state

    async def send_message(self, text: str) -> str:
        """Run one chat turn and record it in the history.

        Configuration and transport failures become the turn's reply, so
        the history keeps alternating between user and assistant.

        Args:
            text: The user's message

        Returns:
            The reply stored in the history
        """
        self.state = SessionState.STREAMING
        started = time.perf_counter()

        self._screen.move_to_line_start()
        self._screen.write(ASSISTANT_PROMPT, ASSISTANT_PROMPT_STYLE)
        self._screen.write(" ")

        self.history.append_user(text)
        stats = StreamStats()
        result = RenderResult()
        decoder = SSEDecoder()
        decoder.set_debug_callback(self._debug_callback)

        try:
            with self._raw_mode():
                self._debug("debug", "Session", f"request prepared in {time.perf_counter() - started:.3f}s")
                sent = time.perf_counter()
                async with self._client.stream_chat(self.model_id, self.history.messages) as chunks:
                    self._debug("debug", "Session", f"request sent in {time.perf_counter() - sent:.3f}s")
                    watcher = CancellationWatcher(self._keys)
                    frames = decode_stream(chunks, watcher.poll_cancel, stats=stats, decoder=decoder)
                    await self._sink.render(frames, stats=stats, into=result)
            reply = result.reply
        except (ConfigurationError, ChatTransportError) as e:
            message = str(e)
            if result.reply:
                self._screen.ensure_line_start()
            self._screen.write(message, DIAGNOSTIC_STYLE)
            reply = f"{result.reply}\n{message}" if result.reply else message

        self._screen.ensure_line_start()
        self.history.append_assistant(reply)
        self._debug(
            "debug",
            "Session",
            f"{stats.chunks} chunks, {stats.text_deltas} text deltas, "
            f"{stats.chars_rendered} chars, typewriter delay {stats.render_delay:.3f}s, "
            f"total {time.perf_counter() - started:.3f}s",
        )
        self.state = SessionState.AWAITING_INPUT
        return reply

    def _switch_model(self, model: ModelDescriptor) -> None:
        self.model_id = model.id
        self._screen.ensure_line_start()
        self._screen.write_line(f"Switched to model: {model.name}", TEXT_STYLE)

    def _show_banner(self) -> None:
        self._screen.write_line(WELCOME_BANNER, BANNER_STYLE)
        model = get_model(self.model_id)
        name = model.name if model else self.model_id
        self._screen.write_line(f"Current model: {name}", MODEL_INFO_STYLE)
