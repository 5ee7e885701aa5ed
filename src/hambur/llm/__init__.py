from .client import ChatClient
from .decoder import SSEDecoder, decode_stream
from .errors import (
    ChatTransportError,
    ConfigurationError,
    HamburError,
    MissingCredentialError,
    TransportErrorKind,
    UnknownModelError,
)
from .frames import (
    DecodeError,
    Done,
    RawFallback,
    ReasoningDelta,
    StreamFrame,
    StreamStats,
    TextDelta,
)
from .models import ChatMessage, ChatRequest, Role

__all__ = [
    "ChatClient",
    "ChatMessage",
    "ChatRequest",
    "ChatTransportError",
    "ConfigurationError",
    "DecodeError",
    "Done",
    "HamburError",
    "MissingCredentialError",
    "RawFallback",
    "ReasoningDelta",
    "Role",
    "SSEDecoder",
    "StreamFrame",
    "StreamStats",
    "TextDelta",
    "TransportErrorKind",
    "UnknownModelError",
    "decode_stream",
]
