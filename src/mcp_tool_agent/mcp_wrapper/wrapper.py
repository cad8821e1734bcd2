"""Connect to MCP servers over stdio and expose them as tool providers."""

from contextlib import AsyncExitStack
from types import TracebackType
from typing import Any, Dict, List, Optional, Type

from mcp import ClientSession
from mcp.client.stdio import stdio_client, StdioServerParameters
from mcp.types import CallToolResult, Implementation, Tool as MCPTool

from mcp_tool_agent.agent_core.logger import get_logger
from mcp_tool_agent.agent_core.tools import ProviderSpec, ToolCallResult, ToolDescriptor

logger = get_logger(__name__)

__all__ = ["MCPClientWrapper", "connect_stdio_provider"]

CLIENT_VERSION = "1.0.0"


class MCPClientWrapper:
    """Tool provider backed by a Model Context Protocol (MCP) server subprocess."""

    def __init__(
        self, command: str, args: list[str], env: Optional[dict[str, str]] = None, name: Optional[str] = None
    ):
        """Initializes the wrapper with parameters for the MCP server process.

        Args:
            command: The command to run the server.
            args: List of arguments for the command.
            env: Optional dictionary of environment variables.
            name: Provider name; defaults to the command.
        """
        self.name = name or command
        self._server_params = StdioServerParameters(command=command, args=args, env=env)
        self._session: Optional[ClientSession] = None
        self._exit_stack = AsyncExitStack()

    @classmethod
    def from_spec(cls, spec: ProviderSpec) -> "MCPClientWrapper":
        return cls(command=spec.command, args=list(spec.args), env=spec.env, name=spec.name)

    async def open(self) -> "MCPClientWrapper":
        """Starts the server process and initializes the session.

        Returns:
            The initialized MCPClientWrapper instance.
        """
        logger.debug("Initializing MCP client session for '%s'...", self.name)
        try:
            read, write = await self._exit_stack.enter_async_context(stdio_client(self._server_params))
            self._session = await self._exit_stack.enter_async_context(
                ClientSession(read, write, client_info=Implementation(name=f"{self.name}-client", version=CLIENT_VERSION))
            )
            await self._session.initialize()
        except BaseException:
            await self.close()
            raise
        logger.info("MCP client session for '%s' initialized successfully.", self.name)
        return self

    async def close(self) -> None:
        """Cleanly closes the session and the server process."""
        logger.debug("Closing MCP client session for '%s'...", self.name)
        try:
            await self._exit_stack.aclose()
        finally:
            self._session = None
            self._exit_stack = AsyncExitStack()
        logger.info("MCP client session for '%s' closed.", self.name)

    async def __aenter__(self) -> "MCPClientWrapper":
        return await self.open()

    async def __aexit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        await self.close()

    async def list_tools(self) -> List[ToolDescriptor]:
        """Fetches the tools advertised by the MCP server.

        Raises:
            RuntimeError: If the MCP Client is not connected.
        """
        session = self._require_session()

        logger.debug("Fetching tools from MCP server '%s'...", self.name)
        result = await session.list_tools()
        logger.info("Found %d tools on MCP server '%s'.", len(result.tools), self.name)
        return [self._to_descriptor(tool) for tool in result.tools]

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> ToolCallResult:
        """Delegates a tool call to the MCP server.

        Args:
            name: Name of the tool.
            arguments: Decoded tool arguments.

        Raises:
            RuntimeError: If the MCP Client is not connected.
        """
        session = self._require_session()

        logger.info("Delegating tool '%s' to MCP server '%s'...", name, self.name)
        logger.debug("Tool arguments: %s", arguments)
        mcp_result = await session.call_tool(name, arguments=arguments)
        return self._to_result(mcp_result)

    def _require_session(self) -> ClientSession:
        if not self._session:
            raise RuntimeError(f"MCP client '{self.name}' is not connected. Use 'async with' or 'open()'.")
        return self._session

    @staticmethod
    def _to_descriptor(tool: MCPTool) -> ToolDescriptor:
        return ToolDescriptor(name=tool.name, description=tool.description, input_schema=dict(tool.inputSchema))

    @staticmethod
    def _to_result(mcp_result: CallToolResult) -> ToolCallResult:
        # Servers returning only structured output leave the content list empty
        if not mcp_result.content and mcp_result.structuredContent is not None:
            return ToolCallResult(tool_result=mcp_result.structuredContent, is_error=mcp_result.isError)

        content = [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in mcp_result.content]
        return ToolCallResult(content=content, is_error=mcp_result.isError)


async def connect_stdio_provider(spec: ProviderSpec) -> MCPClientWrapper:
    """Default registry connector: launches the provider process and opens an MCP session."""
    return await MCPClientWrapper.from_spec(spec).open()
