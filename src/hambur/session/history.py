"""In-process conversation history.

History lives only as long as the session; nothing is written to disk.
"""

from collections.abc import Iterator

from ..llm.models import ChatMessage, Role


class ConversationHistory:
    """Ordered, append-only list of chat messages.

    Messages are immutable once appended. The only way to remove them is
    :meth:`clear`, which drops everything.
    """

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = []

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        """Snapshot of the history, oldest first."""
        return tuple(self._messages)

    def append(self, message: ChatMessage) -> ChatMessage:
        self._messages.append(message)
        return message

    def append_user(self, content: str) -> ChatMessage:
        """Append a user message."""
        return self.append(ChatMessage(role=Role.USER, content=content))

    def append_assistant(self, content: str) -> ChatMessage:
        """Append an assistant reply."""
        return self.append(ChatMessage(role=Role.ASSISTANT, content=content))

    def clear(self) -> None:
        """Drop every message."""
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(self.messages)
