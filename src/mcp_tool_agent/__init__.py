"""MCP Tool Agent - a chat agent that resolves model tool calls against MCP tool providers."""

from .agent_core import (
    Agent,
    ChatService,
    ConversationHistory,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolMessage,
    ToolCallRequest,
    ToolDescriptor,
    ToolCallResult,
    ProviderSpec,
    ToolProvider,
    ToolProviderRegistry,
)
from .chat_impl import OpenAIChatService
from .mcp_wrapper import MCPClientWrapper, connect_stdio_provider

__all__ = [
    "Agent",
    "ChatService",
    "ConversationHistory",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "ToolCallRequest",
    "ToolDescriptor",
    "ToolCallResult",
    "ProviderSpec",
    "ToolProvider",
    "ToolProviderRegistry",
    "OpenAIChatService",
    "MCPClientWrapper",
    "connect_stdio_provider",
]
