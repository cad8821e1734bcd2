"""MCP stdio tool provider."""

from .wrapper import MCPClientWrapper, connect_stdio_provider

__all__ = ["MCPClientWrapper", "connect_stdio_provider"]
