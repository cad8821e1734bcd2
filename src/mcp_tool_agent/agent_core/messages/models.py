"""Provider-agnostic message models for the conversation history."""

from abc import ABC
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ToolCallRequest(BaseModel):
    """A tool call emitted by the chat model.

    Attributes:
        id: Identifier the tool result must echo back.
        name: Name of the requested tool.
        arguments: Raw arguments, either a JSON-encoded string or an already decoded object.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    arguments: Union[str, Dict[str, Any], None] = None


class BaseMessage(ABC, BaseModel):
    """Base model for messages exchanged with the chat service.

    Attributes:
        role: Role associated with the message.
        content: Text payload of the message.
    """

    model_config = ConfigDict(frozen=True)

    role: str
    content: Optional[str] = None


class SystemMessage(BaseMessage):
    """Message authored by the system to steer behavior."""

    role: Literal["system"] = "system"
    content: str


class UserMessage(BaseMessage):
    """Message authored by an end user."""

    role: Literal["user"] = "user"
    content: str


class AssistantMessage(BaseMessage):
    """Message authored by the assistant, optionally containing tool calls."""

    role: Literal["assistant"] = "assistant"
    tool_calls: Optional[List[ToolCallRequest]] = None


class ToolMessage(BaseMessage):
    """Result of a tool invocation, tied to the call that requested it."""

    role: Literal["tool"] = "tool"
    content: str
    tool_call_id: str
    name: Optional[str] = None


class ChatChoice(BaseModel):
    """A single completion choice returned by the chat service."""

    message: AssistantMessage
    finish_reason: Optional[str] = None


class ChatResponse(BaseModel):
    """Normalized chat service output.

    Attributes:
        choices: Completion choices; the agent only ever inspects the first one.
        raw: Provider-specific response payload for advanced use cases.
    """

    choices: List[ChatChoice] = Field(default_factory=list)
    raw: Any = None
