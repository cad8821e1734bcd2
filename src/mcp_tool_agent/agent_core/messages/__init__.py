"""Expose provider-agnostic message models and the conversation history."""

from .models import (
    BaseMessage,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolMessage,
    ToolCallRequest,
    ChatChoice,
    ChatResponse,
)
from .history import ConversationHistory

__all__ = [
    "BaseMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "ToolCallRequest",
    "ChatChoice",
    "ChatResponse",
    "ConversationHistory",
]
