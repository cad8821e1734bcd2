import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from mcp.types import CallToolResult, ImageContent, ListToolsResult, TextContent, Tool as MCPTool
from typing import Any

from mcp_tool_agent.agent_core import ProviderSpec, ToolProvider, ToolProviderRegistry, to_tool_message
from mcp_tool_agent.mcp_wrapper import MCPClientWrapper, connect_stdio_provider


@pytest.fixture
def mock_session() -> Any:
    session = AsyncMock()
    session.initialize = AsyncMock()
    # Ensure context manager returns the session itself
    session.__aenter__.return_value = session
    return session


@pytest.fixture
def patched_transport(mock_session: Any) -> Any:
    with patch("mcp_tool_agent.mcp_wrapper.wrapper.stdio_client", new_callable=MagicMock) as mock_stdio:
        mock_stdio.return_value = AsyncMock()
        mock_stdio.return_value.__aenter__.return_value = (AsyncMock(), AsyncMock())

        with patch("mcp_tool_agent.mcp_wrapper.wrapper.ClientSession", return_value=mock_session) as mock_cls:
            yield mock_stdio, mock_cls


@pytest.mark.asyncio
async def test_mcp_wrapper_lifecycle(mock_session: Any, patched_transport: Any) -> None:
    """Test that the MCP wrapper correctly initializes and closes the session."""
    _, mock_cls = patched_transport

    async with MCPClientWrapper("cmd", ["arg"], name="fs") as wrapper:
        assert wrapper._session is not None
        assert mock_session.initialize.call_count > 0
        assert mock_cls.call_args.kwargs["client_info"].name == "fs-client"

    # Wrapper drops the session once closed
    assert wrapper._session is None
    mock_session.__aexit__.assert_awaited()


def test_wrapper_satisfies_provider_protocol() -> None:
    assert isinstance(MCPClientWrapper("cmd", []), ToolProvider)


@pytest.mark.asyncio
async def test_list_tools_returns_descriptors(mock_session: Any, patched_transport: Any) -> None:
    tools_result = ListToolsResult(
        tools=[
            MCPTool(name="read_file", description="Read a file", inputSchema={"type": "object", "properties": {}}),
            MCPTool(name="ping", inputSchema={"type": "object"}),
        ]
    )
    mock_session.list_tools = AsyncMock(return_value=tools_result)

    async with MCPClientWrapper("cmd", ["arg"]) as wrapper:
        descriptors = await wrapper.list_tools()

    assert [d.name for d in descriptors] == ["read_file", "ping"]
    assert descriptors[0].description == "Read a file"
    assert descriptors[0].input_schema == {"type": "object", "properties": {}}
    assert descriptors[1].description is None


@pytest.mark.asyncio
async def test_call_tool_maps_content(mock_session: Any, patched_transport: Any) -> None:
    mock_session.call_tool = AsyncMock(
        return_value=CallToolResult(
            content=[
                TextContent(type="text", text="Result from MCP"),
                ImageContent(type="image", data="aGk=", mimeType="image/png"),
            ]
        )
    )

    async with MCPClientWrapper("cmd", ["arg"]) as wrapper:
        result = await wrapper.call_tool("read_file", {"path": "a"})

    mock_session.call_tool.assert_called_with("read_file", arguments={"path": "a"})
    assert result.content == [
        {"type": "text", "text": "Result from MCP"},
        {"type": "image", "data": "aGk=", "mimeType": "image/png"},
    ]
    assert result.is_error is False
    assert to_tool_message("call_1", result).content.startswith("Result from MCP\n")


@pytest.mark.asyncio
async def test_call_tool_uses_structured_content_without_content(mock_session: Any, patched_transport: Any) -> None:
    mock_session.call_tool = AsyncMock(
        return_value=CallToolResult(content=[], structuredContent={"temperature": 21}, isError=False)
    )

    async with MCPClientWrapper("cmd", []) as wrapper:
        result = await wrapper.call_tool("weather", {})

    assert result.content is None
    assert result.tool_result == {"temperature": 21}


@pytest.mark.asyncio
async def test_call_tool_keeps_error_flag(mock_session: Any, patched_transport: Any) -> None:
    mock_session.call_tool = AsyncMock(
        return_value=CallToolResult(content=[TextContent(type="text", text="Access denied")], isError=True)
    )

    async with MCPClientWrapper("cmd", []) as wrapper:
        result = await wrapper.call_tool("read_file", {"path": "/etc/shadow"})

    assert result.is_error is True
    assert to_tool_message("call_1", result).content == "Access denied"


@pytest.mark.asyncio
async def test_calls_require_connection() -> None:
    wrapper = MCPClientWrapper("cmd", [])

    with pytest.raises(RuntimeError, match="not connected"):
        await wrapper.list_tools()
    with pytest.raises(RuntimeError, match="not connected"):
        await wrapper.call_tool("read_file", {})


@pytest.mark.asyncio
async def test_failed_initialize_closes_transport(mock_session: Any, patched_transport: Any) -> None:
    mock_stdio, _ = patched_transport
    mock_session.initialize.side_effect = ConnectionError("server exited")

    with pytest.raises(ConnectionError):
        await MCPClientWrapper("cmd", []).open()

    mock_stdio.return_value.__aexit__.assert_awaited()


@pytest.mark.asyncio
async def test_connect_stdio_provider_with_registry(mock_session: Any, patched_transport: Any) -> None:
    mock_stdio, _ = patched_transport
    mock_session.list_tools = AsyncMock(
        return_value=ListToolsResult(tools=[MCPTool(name="read_file", inputSchema={"type": "object"})])
    )
    spec = ProviderSpec(name="filesystem", command="npx", args=["-y", "server"], env={"A": "1"})
    registry = ToolProviderRegistry(connect_stdio_provider)

    await registry.connect([spec])

    server_params = mock_stdio.call_args.args[0]
    assert server_params.command == "npx"
    assert server_params.args == ["-y", "server"]
    assert server_params.env == {"A": "1"}
    provider = registry.resolve("read_file")
    assert isinstance(provider, MCPClientWrapper)
    assert provider.name == "filesystem"

    assert await registry.disconnect_all() == []
    assert provider._session is None
