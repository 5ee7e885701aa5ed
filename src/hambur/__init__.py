"""
Hambur: a terminal chat client that streams model replies as they are generated.

Each subpackage hides one design decision: which providers and models
exist, how the SSE wire format is decoded, how the terminal is driven,
and how a conversation turn is orchestrated.
"""

__version__ = "0.1.0"

from .llm import ChatClient, ChatMessage, Role, decode_stream
from .registry import find_models, lookup_provider_for_model

__all__ = [
    "ChatClient",
    "ChatMessage",
    "Role",
    "decode_stream",
    "find_models",
    "lookup_provider_for_model",
]
