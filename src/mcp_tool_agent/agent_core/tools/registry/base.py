"""Registry of live tool provider connections and the tool name bindings built from them."""

from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from .provider import ToolProvider
from ..models import ToolDescriptor, ProviderSpec
from ..converters import to_model_tools
from ...exceptions import ProviderConnectError, ToolNotFoundError
from ...logger import get_logger

logger = get_logger(__name__)

ProviderConnector = Callable[[ProviderSpec], Awaitable[ToolProvider]]


class ToolProviderRegistry:
    """
    Holds the provider connections owned by one agent.

    Maps every advertised tool name to the provider that advertised it and keeps
    the aggregate tool definition list sent to the chat model.
    """

    def __init__(self, connector: Optional[ProviderConnector] = None) -> None:
        """Initialize the registry.

        Args:
            connector: Coroutine function that opens a provider connection for a spec.
                Only required when ``connect`` is used.
        """
        self._connector = connector
        self._providers: List[ToolProvider] = []
        self._descriptors: Dict[str, ToolDescriptor] = {}
        self._bindings: Dict[str, ToolProvider] = {}

    async def connect(self, specs: Sequence[ProviderSpec]) -> None:
        """Connect to every provider, in order, and bind their tools.

        Args:
            specs: Providers to connect.

        Raises:
            ProviderConnectError: If any provider fails to connect or list its tools.
                Providers opened before the failure are closed again.
        """
        if specs and self._connector is None:
            raise ProviderConnectError("No provider connector configured.")

        for spec in specs:
            try:
                provider = await self._connector(spec)  # type: ignore[misc]
            except Exception as exc:
                await self._abort_connect()
                raise ProviderConnectError(f"Failed to connect to tool provider '{spec.name}': {exc}") from exc

            self._providers.append(provider)
            logger.info("Connected to tool provider '%s'.", spec.name)

            try:
                tools = await provider.list_tools()
            except Exception as exc:
                await self._abort_connect()
                raise ProviderConnectError(f"Failed to list tools of provider '{spec.name}': {exc}") from exc

            self._bind(provider, tools)

    def register_provider(self, provider: ToolProvider, tools: Sequence[ToolDescriptor]) -> None:
        """Add an already connected provider and bind the given tools to it.

        Args:
            provider: The live provider connection. The registry takes ownership of it.
            tools: The tools the provider advertises.
        """
        self._providers.append(provider)
        self._bind(provider, tools)

    def resolve(self, tool_name: str) -> ToolProvider:
        """Return the provider that advertised ``tool_name``.

        Raises:
            ToolNotFoundError: If no connected provider advertised the tool.
        """
        try:
            return self._bindings[tool_name]
        except KeyError:
            raise ToolNotFoundError(f"No provider found for tool '{tool_name}'") from None

    async def disconnect_all(self) -> List[Tuple[str, BaseException]]:
        """Close every provider connection.

        Each provider is closed independently, so one failure does not prevent
        closing the others.

        Returns:
            The ``(provider name, exception)`` pairs of providers that failed to close.
        """
        failures: List[Tuple[str, BaseException]] = []
        providers, self._providers = self._providers, []
        self._bindings.clear()
        self._descriptors.clear()

        for provider in providers:
            name = getattr(provider, "name", repr(provider))
            try:
                await provider.close()
                logger.info("Disconnected tool provider '%s'.", name)
            except Exception as exc:
                logger.error("Error closing tool provider '%s': %s", name, exc)
                failures.append((name, exc))
        return failures

    @property
    def providers(self) -> List[ToolProvider]:
        return list(self._providers)

    @property
    def tools(self) -> List[ToolDescriptor]:
        """Descriptors of every bound tool, in registration order."""
        return list(self._descriptors.values())

    @property
    def tool_names(self) -> List[str]:
        return list(self._descriptors)

    @property
    def model_tools(self) -> List[Dict[str, Any]]:
        """Tool definitions in chat model format."""
        return to_model_tools(self.tools)

    def _bind(self, provider: ToolProvider, tools: Sequence[ToolDescriptor]) -> None:
        provider_name = getattr(provider, "name", repr(provider))
        for tool in tools:
            previous = self._bindings.get(tool.name)
            if previous is not None and previous is not provider:
                logger.warning(
                    "Tool '%s' of provider '%s' shadows the tool of the same name from provider '%s'.",
                    tool.name,
                    provider_name,
                    getattr(previous, "name", repr(previous)),
                )
                # Re-insert so the definition moves to the position of the latest registration.
                del self._descriptors[tool.name]
            self._descriptors[tool.name] = tool
            self._bindings[tool.name] = provider
        logger.info("Registered %d tool(s) from provider '%s'.", len(tools), provider_name)

    async def _abort_connect(self) -> None:
        failures = await self.disconnect_all()
        if failures:
            logger.warning("%d provider(s) failed to close after an aborted connect.", len(failures))
