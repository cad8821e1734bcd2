"""
Custom exception classes for the agent orchestration core.

This module defines the hierarchy of exceptions raised while connecting to
tool providers, talking to the chat service and resolving tool calls.
"""


class AgentError(Exception):
    """Base exception for all agent errors."""

    pass


class ProtocolError(AgentError):
    """Raised when a chat response violates the expected shape."""

    pass


class ConversationHistoryError(ProtocolError):
    """Raised when a message would break the tool call / tool result pairing of the history."""

    pass


class ChatServiceError(AgentError):
    """Raised when the chat completion service rejects a request or fails at transport level.

    ``retryable`` is False for failures that repeating the same request cannot fix,
    such as a rejected payload or invalid credentials.
    """

    def __init__(self, message: str, retryable: bool = True):
        super().__init__(message)
        self.retryable = retryable


class ProviderConnectError(AgentError):
    """Raised when a tool provider cannot be connected during setup."""

    pass


class ConfigurationError(AgentError):
    """Raised when settings or provider specs are invalid."""

    pass


class ToolError(AgentError):
    """Base exception for tool resolution and execution errors."""

    pass


class ToolNotFoundError(ToolError, LookupError):
    """Raised when a requested tool is not bound to any connected provider."""

    pass


class ToolArgumentsError(ToolError, ValueError):
    """Raised when tool call arguments cannot be decoded into a JSON object."""

    pass


class ToolResultShapeError(ToolError):
    """Raised when a provider result carries neither content nor a tool result."""

    pass


class ToolExecutionError(ToolError):
    """Raised when a provider fails while executing a tool call."""

    pass
