"""Expose the OpenAI compatible chat service implementation."""

from .core import OpenAIChatService
from .adapter import OpenAIMessageAdapter

__all__ = ["OpenAIChatService", "OpenAIMessageAdapter"]
