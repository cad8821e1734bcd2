"""Public exports for the agent orchestration core."""

from .agent import Agent, print_outputs, collect_outputs
from .base import ChatService
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
from .logger import get_logger, setup_logging
from .messages import (
    BaseMessage,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolMessage,
    ToolCallRequest,
    ChatChoice,
    ChatResponse,
    ConversationHistory,
)
from .tools import (
    ToolDescriptor,
    ProviderSpec,
    ProviderCallRequest,
    ToolCallResult,
    ToolProvider,
    ToolProviderRegistry,
    to_model_tools,
    to_provider_call,
    to_tool_message,
)

__all__ = [
    "Agent",
    "print_outputs",
    "collect_outputs",
    "ChatService",
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
    "get_logger",
    "setup_logging",
    "BaseMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "ToolCallRequest",
    "ChatChoice",
    "ChatResponse",
    "ConversationHistory",
    "ToolDescriptor",
    "ProviderSpec",
    "ProviderCallRequest",
    "ToolCallResult",
    "ToolProvider",
    "ToolProviderRegistry",
    "to_model_tools",
    "to_provider_call",
    "to_tool_message",
]
