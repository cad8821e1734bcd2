import json

import pytest

from mcp_tool_agent.agent_core import (
    ToolArgumentsError,
    ToolCallRequest,
    ToolCallResult,
    ToolDescriptor,
    ToolResultShapeError,
    to_model_tools,
    to_provider_call,
    to_tool_message,
)


class TestToModelTools:
    def test_preserves_name_description_schema_and_order(self) -> None:
        schema = {"type": "object", "properties": {"path": {"type": "string"}}, "required": ["path"]}
        descriptors = [
            ToolDescriptor(name="read_file", description="Read a file", input_schema=schema),
            ToolDescriptor(name="list_directory", description="List a directory"),
        ]

        tools = to_model_tools(descriptors)

        assert [t["function"]["name"] for t in tools] == ["read_file", "list_directory"]
        assert tools[0] == {
            "type": "function",
            "function": {"name": "read_file", "description": "Read a file", "parameters": schema},
        }

    def test_missing_description_is_omitted(self) -> None:
        tools = to_model_tools([ToolDescriptor(name="ping")])
        assert tools == [{"type": "function", "function": {"name": "ping", "parameters": {"type": "object"}}}]

    def test_empty_list(self) -> None:
        assert to_model_tools([]) == []


class TestToProviderCall:
    def test_string_and_object_arguments_are_equivalent(self) -> None:
        from_string = to_provider_call(ToolCallRequest(id="1", name="read_file", arguments='{"path":"/a"}'))
        from_object = to_provider_call(ToolCallRequest(id="2", name="read_file", arguments={"path": "/a"}))

        assert from_string == from_object
        assert from_string.name == "read_file"
        assert from_string.arguments == {"path": "/a"}

    @pytest.mark.parametrize("raw", [None, "", "null"])
    def test_empty_arguments_become_empty_object(self, raw: object) -> None:
        assert to_provider_call(ToolCallRequest(id="1", name="ping", arguments=raw)).arguments == {}

    def test_malformed_json_raises(self) -> None:
        with pytest.raises(ToolArgumentsError, match="read_file"):
            to_provider_call(ToolCallRequest(id="1", name="read_file", arguments='{"path": '))

    def test_non_object_json_raises(self) -> None:
        with pytest.raises(ToolArgumentsError, match="JSON object"):
            to_provider_call(ToolCallRequest(id="1", name="read_file", arguments="[1, 2]"))


class TestToToolMessage:
    def test_text_items_are_joined_with_newlines(self) -> None:
        result = ToolCallResult(content=[{"type": "text", "text": "line 1"}, {"type": "text", "text": "line 2"}])

        message = to_tool_message("call_1", result)

        assert message.role == "tool"
        assert message.tool_call_id == "call_1"
        assert message.content == "line 1\nline 2"

    def test_non_text_items_are_serialized_as_json(self) -> None:
        image = {"type": "image", "data": "aGk=", "mimeType": "image/png"}
        result = ToolCallResult(content=[{"type": "text", "text": "caption"}, image])

        message = to_tool_message("call_1", result)

        first, second = message.content.split("\n")
        assert first == "caption"
        assert json.loads(second) == image

    def test_empty_content_gives_empty_text(self) -> None:
        assert to_tool_message("call_1", ToolCallResult(content=[])).content == ""

    def test_tool_result_is_serialized(self) -> None:
        message = to_tool_message("call_1", ToolCallResult(tool_result={"rows": [1, 2]}))
        assert json.loads(message.content) == {"rows": [1, 2]}

    def test_missing_result_raises(self) -> None:
        with pytest.raises(ToolResultShapeError, match="No tool result found"):
            to_tool_message("call_1", ToolCallResult())

    def test_repeated_conversion_is_identical(self) -> None:
        result = ToolCallResult(content=[{"type": "text", "text": "x"}, {"type": "audio", "data": "", "mimeType": "a"}])
        assert to_tool_message("call_1", result) == to_tool_message("call_1", result)

    def test_name_is_recorded(self) -> None:
        message = to_tool_message("call_1", ToolCallResult(content=[]), name="read_file")
        assert message.name == "read_file"


def test_tool_result_rejects_both_shapes() -> None:
    with pytest.raises(ValueError):
        ToolCallResult(content=[], tool_result="x")
