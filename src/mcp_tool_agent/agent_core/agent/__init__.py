"""Agent orchestration loop and output channel helpers."""

from .agent import Agent
from .output import (
    format_assistant,
    format_tool_notice,
    format_error,
    format_unknown_error,
    print_outputs,
    collect_outputs,
)

__all__ = [
    "Agent",
    "format_assistant",
    "format_tool_notice",
    "format_error",
    "format_unknown_error",
    "print_outputs",
    "collect_outputs",
]
