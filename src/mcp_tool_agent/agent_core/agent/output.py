"""Formatting and consumption helpers for the agent output channel.

A turn produces an ordered stream of human readable strings: assistant text,
tool usage notices and error reports. Consumers must handle them in the order
they are produced.
"""

from typing import AsyncIterator, Callable, List


def format_assistant(label: str, content: str) -> str:
    return f"[{label}]: {content}"


def format_tool_notice(tool_name: str) -> str:
    return f"Using tool: {tool_name} ..."


def format_error(message: object) -> str:
    return f"Error: {message}"


def format_unknown_error(error: object) -> str:
    return f"Received unknown error: {error}"


async def print_outputs(outputs: AsyncIterator[str], sink: Callable[[str], None] = print) -> None:
    """Forward every output item to ``sink`` as soon as it is produced."""
    async for output in outputs:
        sink(output)


async def collect_outputs(outputs: AsyncIterator[str]) -> List[str]:
    """Drain an output stream into a list, preserving order."""
    return [output async for output in outputs]
