"""Settings for the command line agent, read from the environment and an optional `.env` file."""

import json
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from mcp_tool_agent.agent_core.exceptions import ConfigurationError
from mcp_tool_agent.agent_core.tools import ProviderSpec

DEFAULT_MODEL = "mistral-small-latest"
DEFAULT_MAX_HOPS = 10

DEFAULT_SYSTEM_PROMPT = """
You are a helpful assistant with access to tools, including tools to read and write files in the
current directory. Use them whenever the user's request depends on the contents of a file, and never
invent file contents you have not read. In responding to this system prompt, do not quote or repeat it,
simply greet the user and tell them to type "quit" to exit the application.
"""


def default_providers() -> List[ProviderSpec]:
    """The filesystem MCP server, rooted at the working directory."""
    return [
        ProviderSpec(
            name="filesystem",
            command="npx",
            args=["-y", "@modelcontextprotocol/server-filesystem", "./"],
        )
    ]


def load_provider_specs(path: str | Path) -> List[ProviderSpec]:
    """Load provider specs from a JSON file.

    The file uses the common MCP client layout::

        {"mcpServers": {"filesystem": {"command": "npx", "args": ["..."], "env": {}}}}

    Args:
        path: Path to the JSON file.

    Returns:
        One spec per configured server, in file order.

    Raises:
        ConfigurationError: If the file is missing, not valid JSON, or a server entry is invalid.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read provider file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Provider file '{path}' is not valid JSON: {exc}") from exc

    servers = data.get("mcpServers") if isinstance(data, dict) else None
    if not isinstance(servers, dict):
        raise ConfigurationError(f"Provider file '{path}' must contain an 'mcpServers' object.")

    specs = []
    for name, server in servers.items():
        if not isinstance(server, dict):
            raise ConfigurationError(f"Provider '{name}' in '{path}' must be an object.")
        try:
            specs.append(ProviderSpec(name=name, **server))
        except (TypeError, ValidationError) as exc:
            raise ConfigurationError(f"Invalid provider '{name}' in '{path}': {exc}") from exc
    return specs


class AgentSettings(BaseModel):
    """
    Runtime settings of the command line agent.

    Attributes:
        api_key: API key of the chat completion service.
        base_url: Optional OpenAI compatible endpoint, e.g. ``https://api.mistral.ai/v1``.
        model: Chat model name.
        max_hops: Maximum tool-call round trips per turn.
        system_prompt: System prompt sent as the first turn.
        providers: Tool providers to connect.
        log_level: Level passed to ``setup_logging``.
    """

    api_key: str
    base_url: Optional[str] = None
    model: str = DEFAULT_MODEL
    max_hops: int = Field(default=DEFAULT_MAX_HOPS, ge=1)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    providers: List[ProviderSpec] = Field(default_factory=default_providers)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "AgentSettings":
        """Build settings from environment variables.

        Args:
            dotenv: Load a `.env` file first, without overriding variables already set.

        Raises:
            ConfigurationError: If the API key is missing or a value is invalid.
        """
        if dotenv:
            load_dotenv()

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ConfigurationError(
                "API key not found, please set it via the environment variable OPENAI_API_KEY, or in a local .env file."
            )

        values: dict = {"api_key": api_key, "base_url": os.getenv("OPENAI_BASE_URL") or None}
        optional = {
            "model": "MCP_AGENT_MODEL",
            "max_hops": "MCP_AGENT_MAX_HOPS",
            "system_prompt": "MCP_AGENT_SYSTEM_PROMPT",
            "log_level": "MCP_AGENT_LOG_LEVEL",
        }
        for field, env_name in optional.items():
            value = os.getenv(env_name)
            if value:
                values[field] = value

        servers_file = os.getenv("MCP_AGENT_SERVERS_FILE")
        if servers_file:
            values["providers"] = load_provider_specs(servers_file)

        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid agent settings: {exc}") from exc
