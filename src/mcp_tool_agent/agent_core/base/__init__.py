"""Re-export the chat service interface implemented by all providers."""

from .base import ChatService

__all__ = [
    "ChatService",
]
