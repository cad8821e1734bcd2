"""
Stateless translation between the tool provider protocol and the chat model tool protocol.

Nothing here performs I/O or keeps state; the registry and the agent call these
functions on every connection and every tool call.
"""

import json
from typing import Any, Dict, List, Sequence

from .models import ToolDescriptor, ToolCallRequest, ProviderCallRequest, ToolCallResult
from ..messages.models import ToolMessage
from ..exceptions import ToolArgumentsError, ToolResultShapeError


def to_model_tools(descriptors: Sequence[ToolDescriptor]) -> List[Dict[str, Any]]:
    """Convert provider tool descriptors into chat model function tool definitions.

    Args:
        descriptors: Tools advertised by a provider, in advertised order.

    Returns:
        One function tool definition per descriptor, in the same order.
    """
    tools = []
    for descriptor in descriptors:
        function: Dict[str, Any] = {"name": descriptor.name}
        if descriptor.description is not None:
            function["description"] = descriptor.description
        function["parameters"] = descriptor.input_schema
        tools.append({"type": "function", "function": function})
    return tools


def to_provider_call(tool_call: ToolCallRequest) -> ProviderCallRequest:
    """Convert a model tool call into a provider call request.

    Args:
        tool_call: The tool call emitted by the model.

    Returns:
        The provider request with arguments decoded into a dictionary.

    Raises:
        ToolArgumentsError: If string arguments are not valid JSON or do not decode to an object.
    """
    raw_args = tool_call.arguments

    if raw_args is None or raw_args == "":
        return ProviderCallRequest(name=tool_call.name, arguments={})

    if isinstance(raw_args, dict):
        return ProviderCallRequest(name=tool_call.name, arguments=dict(raw_args))

    try:
        parsed = json.loads(raw_args)
    except json.JSONDecodeError as exc:
        raise ToolArgumentsError(f"Failed to parse arguments for tool '{tool_call.name}': {exc}") from exc

    if parsed is None:
        return ProviderCallRequest(name=tool_call.name, arguments={})

    if not isinstance(parsed, dict):
        raise ToolArgumentsError(f"Arguments for tool '{tool_call.name}' must decode to a JSON object.")

    return ProviderCallRequest(name=tool_call.name, arguments=parsed)


def to_tool_message(tool_call_id: str, result: ToolCallResult, name: str | None = None) -> ToolMessage:
    """Convert a provider result into a tool message the model can consume.

    Text items contribute their text; any other item is serialized as JSON.
    Items are joined with newlines in order.

    Args:
        tool_call_id: Id of the originating tool call.
        result: The provider result.
        name: Optional tool name recorded on the message.

    Returns:
        The tool message answering ``tool_call_id``.

    Raises:
        ToolResultShapeError: If the result has neither content nor a tool result.
    """
    if result.content is not None:
        content = "\n".join(_content_item_to_text(item) for item in result.content)
    elif result.tool_result is not None:
        content = json.dumps(result.tool_result)
    else:
        raise ToolResultShapeError("No tool result found")

    return ToolMessage(tool_call_id=tool_call_id, content=content, name=name)


def _content_item_to_text(item: Dict[str, Any]) -> str:
    if item.get("type") == "text" and "text" in item:
        return str(item["text"])
    return json.dumps(item)
