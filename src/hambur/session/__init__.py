"""Conversation session: history and the interactive loop."""

from .history import ConversationHistory
from .loop import ChatSession, SessionState

__all__ = ["ChatSession", "ConversationHistory", "SessionState"]
