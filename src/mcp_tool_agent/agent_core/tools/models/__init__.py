"""Tool-related data models."""

from .models import ToolDescriptor, ProviderSpec
from .tool_call import ToolCallRequest, ProviderCallRequest, ToolCallResult

__all__ = ["ToolDescriptor", "ProviderSpec", "ToolCallRequest", "ProviderCallRequest", "ToolCallResult"]
