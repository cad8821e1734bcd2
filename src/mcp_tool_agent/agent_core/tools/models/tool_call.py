"""Data models for dispatching tool calls to providers."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from ...messages.models import ToolCallRequest


class ProviderCallRequest(BaseModel):
    """A tool call in the shape a provider expects: a name and decoded arguments."""

    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class ToolCallResult(BaseModel):
    """Outcome of a provider tool call.

    Either ``content`` (typed content items such as ``{"type": "text", "text": ...}``)
    or ``tool_result`` (an opaque value) carries the payload.

    Attributes:
        content: Ordered content items returned by the provider.
        tool_result: Opaque result value used by providers that do not return content items.
        is_error: Whether the provider flagged the result as an error.
    """

    content: Optional[List[Dict[str, Any]]] = None
    tool_result: Optional[Any] = None
    is_error: bool = False

    @model_validator(mode="after")
    def _single_shape(self) -> "ToolCallResult":
        if self.content is not None and self.tool_result is not None:
            raise ValueError("A tool result carries either 'content' or 'tool_result', not both.")
        return self


__all__ = ["ToolCallRequest", "ProviderCallRequest", "ToolCallResult"]
