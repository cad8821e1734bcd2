"""Collect concrete chat service implementations."""

from .openai_api import OpenAIChatService, OpenAIMessageAdapter

__all__ = [
    "OpenAIChatService",
    "OpenAIMessageAdapter",
]
