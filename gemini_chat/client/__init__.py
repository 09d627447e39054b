"""Client-side conversation core: session manager, transport, storage, scroll policy."""

from gemini_chat.client.errors import (
    AuthError,
    ConfigurationError,
    FailureKind,
    RemoteError,
    TransportError,
    ValidationError,
)
from gemini_chat.client.scroll import ScrollFollow, ScrollMetrics, Viewport, is_near_bottom
from gemini_chat.client.session import SUGGESTED_PROMPTS, Notification, SessionManager
from gemini_chat.client.storage import FileBlobStore, HistoryStore, MemoryBlobStore
from gemini_chat.client.transport import ChatTransport, TransportResult

__all__ = [
    "AuthError",
    "ChatTransport",
    "ConfigurationError",
    "FailureKind",
    "FileBlobStore",
    "HistoryStore",
    "MemoryBlobStore",
    "Notification",
    "RemoteError",
    "SUGGESTED_PROMPTS",
    "ScrollFollow",
    "ScrollMetrics",
    "SessionManager",
    "TransportError",
    "TransportResult",
    "Viewport",
    "ValidationError",
    "is_near_bottom",
]
