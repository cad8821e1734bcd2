from typing import Any, Callable, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from mcp_tool_agent.agent_core import (
    AssistantMessage,
    ChatChoice,
    ChatResponse,
    ChatService,
    ToolCallRequest,
    ToolCallResult,
    ToolDescriptor,
)


def _text_response(content: Optional[str]) -> ChatResponse:
    return ChatResponse(choices=[ChatChoice(message=AssistantMessage(content=content), finish_reason="stop")])


def _tool_response(calls: List[Dict[str, Any]], content: Optional[str] = None) -> ChatResponse:
    tool_calls = [ToolCallRequest(**call) for call in calls]
    return ChatResponse(
        choices=[ChatChoice(message=AssistantMessage(content=content, tool_calls=tool_calls), finish_reason="tool_calls")]
    )


@pytest.fixture
def text_response() -> Callable[[Optional[str]], ChatResponse]:
    return _text_response


@pytest.fixture
def tool_response() -> Callable[..., ChatResponse]:
    return _tool_response


@pytest.fixture
def mock_chat_service() -> Any:
    service = MagicMock(spec=ChatService)
    service.complete = AsyncMock()
    return service


@pytest.fixture
def make_provider() -> Callable[..., Any]:
    """Builds a mocked tool provider advertising the given tool names."""

    def factory(name: str = "filesystem", tools: Optional[List[str]] = None, text: str = "hello") -> Any:
        provider = MagicMock()
        provider.name = name
        provider.list_tools = AsyncMock(
            return_value=[ToolDescriptor(name=tool, description=f"{tool} tool") for tool in (tools or [])]
        )
        provider.call_tool = AsyncMock(return_value=ToolCallResult(content=[{"type": "text", "text": text}]))
        provider.close = AsyncMock()
        return provider

    return factory
