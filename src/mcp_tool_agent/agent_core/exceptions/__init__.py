"""Export the agent exception hierarchy used across setup, chat and tool paths."""

from .exceptions import (
    AgentError,
    ProtocolError,
    ConversationHistoryError,
    ChatServiceError,
    ProviderConnectError,
    ConfigurationError,
    ToolError,
    ToolNotFoundError,
    ToolArgumentsError,
    ToolResultShapeError,
    ToolExecutionError,
)

__all__ = [
    "AgentError",
    "ProtocolError",
    "ConversationHistoryError",
    "ChatServiceError",
    "ProviderConnectError",
    "ConfigurationError",
    "ToolError",
    "ToolNotFoundError",
    "ToolArgumentsError",
    "ToolResultShapeError",
    "ToolExecutionError",
]
