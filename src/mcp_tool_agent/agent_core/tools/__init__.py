from .models import ToolDescriptor, ProviderSpec, ToolCallRequest, ProviderCallRequest, ToolCallResult
from .converters import to_model_tools, to_provider_call, to_tool_message
from .registry import ToolProvider, ToolProviderRegistry, ProviderConnector

__all__ = [
    "ToolDescriptor",
    "ProviderSpec",
    "ToolCallRequest",
    "ProviderCallRequest",
    "ToolCallResult",
    "to_model_tools",
    "to_provider_call",
    "to_tool_message",
    "ToolProvider",
    "ToolProviderRegistry",
    "ProviderConnector",
]
