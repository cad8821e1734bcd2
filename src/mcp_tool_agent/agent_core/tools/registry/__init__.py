"""Tool provider protocol and registry."""

from .provider import ToolProvider
from .base import ToolProviderRegistry, ProviderConnector

__all__ = ["ToolProvider", "ToolProviderRegistry", "ProviderConnector"]
