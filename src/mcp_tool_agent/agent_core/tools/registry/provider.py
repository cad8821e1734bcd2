"""Capability set every tool provider connection implements."""

from typing import Any, Dict, List, Protocol, runtime_checkable

from ..models import ToolDescriptor, ToolCallResult


@runtime_checkable
class ToolProvider(Protocol):
    """
    Protocol for a live connection to a tool provider.

    The registry only depends on this interface, so any transport can back it.
    """

    name: str

    async def list_tools(self) -> List[ToolDescriptor]:
        """Returns the tools advertised by the provider."""
        ...

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> ToolCallResult:
        """Invokes a tool and returns its result."""
        ...

    async def close(self) -> None:
        """Closes the connection."""
        ...
