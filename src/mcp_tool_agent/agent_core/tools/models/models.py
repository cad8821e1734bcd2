"""Tool descriptor and provider spec models shared by providers and the registry."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ToolDescriptor(BaseModel):
    """Describes a tool advertised by a provider.

    Attributes:
        name: The tool name, unique across connected providers.
        description: Optional human readable description sent to the model.
        input_schema: JSON schema of the tool arguments.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: Optional[str] = None
    input_schema: Dict[str, Any] = Field(default_factory=lambda: {"type": "object"})


class ProviderSpec(BaseModel):
    """Parameters needed to launch and connect to a tool provider process.

    Attributes:
        name: Provider name, used in logs and as the client name prefix.
        command: Executable to launch.
        args: Command line arguments.
        env: Optional environment for the provider process.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    command: str
    args: List[str] = Field(default_factory=list)
    env: Optional[Dict[str, str]] = None
