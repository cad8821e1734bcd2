"""Tool-calling orchestration loop between a chat service and tool providers."""

from types import TracebackType
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence, Type, Union

from .output import format_assistant, format_error, format_tool_notice, format_unknown_error
from ..base import ChatService
from ..exceptions import ChatServiceError, ProtocolError, ToolExecutionError, ToolNotFoundError
from ..messages import AssistantMessage, BaseMessage, ChatResponse, ConversationHistory, ToolMessage, UserMessage
from ..tools import ProviderSpec, ToolCallRequest, ToolProviderRegistry, to_provider_call, to_tool_message
from ..logger import get_logger

logger = get_logger(__name__)


class Agent:
    """
    Converses with a chat service and resolves its tool calls against connected providers.

    One agent owns one conversation history and the provider connections in its
    registry. Use it as an async context manager so providers are disconnected on
    every exit path::

        async with Agent(chat_service, registry, provider_specs=specs) as agent:
            async for output in agent.turn("Read notes.txt"):
                print(output)
    """

    def __init__(
        self,
        chat_service: ChatService,
        registry: Optional[ToolProviderRegistry] = None,
        *,
        provider_specs: Sequence[ProviderSpec] = (),
        max_hops: Optional[int] = 10,
        assistant_label: str = "assistant",
    ) -> None:
        """
        Initializes the agent.

        Args:
            chat_service: The chat completion service to converse with.
            registry: Registry holding the tool provider connections. A new, empty registry is used if omitted.
            provider_specs: Providers connected when entering the agent's context.
            max_hops: Maximum number of tool-call round trips per turn. ``None`` disables the limit.
            assistant_label: Label used when emitting assistant text.
        """
        if max_hops is not None and max_hops < 1:
            raise ValueError("max_hops must be at least 1 or None.")

        self.chat_service = chat_service
        self.registry = registry if registry is not None else ToolProviderRegistry()
        self.provider_specs = list(provider_specs)
        self.max_hops = max_hops
        self.assistant_label = assistant_label
        self.history = ConversationHistory()

    @property
    def tool_definitions(self) -> List[Dict[str, Any]]:
        return self.registry.model_tools

    async def connect(self, specs: Optional[Sequence[ProviderSpec]] = None) -> None:
        """Connect the given providers, or the ones passed at construction."""
        await self.registry.connect(self.provider_specs if specs is None else specs)

    async def disconnect(self) -> None:
        await self.registry.disconnect_all()

    async def __aenter__(self) -> "Agent":
        await self.connect()
        return self

    async def __aexit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        await self.disconnect()

    async def turn(self, message: Union[str, BaseMessage]) -> AsyncIterator[str]:
        """
        Runs one conversational turn and yields its output as it is produced.

        The message is appended to the history and sent to the chat service. As
        long as the reply requests tools, each call is resolved in the order the
        model returned them, the results are appended, and the conversation is
        sent back for a continuation. If a hop is aborted, every call it left
        unanswered is recorded with an error result before the exception leaves.

        Args:
            message: User text, or a pre-built message such as a system prompt.

        Yields:
            Assistant text, tool usage notices and error reports, in order.

        Raises:
            ProtocolError: If a reply has no choices or flags tool calls without providing any.
            ToolArgumentsError: If tool call arguments are malformed.
            ToolResultShapeError: If a provider result has neither content nor a tool result.
            ToolExecutionError: If a provider fails while executing a tool.
        """
        self.history.append(UserMessage(content=message) if isinstance(message, str) else message)

        hops = 0
        while True:
            try:
                response = await self.chat_service.complete(self.history.messages, self.tool_definitions)
            except ChatServiceError as e:
                logger.warning("Chat service error: %s", e)
                yield format_error(e)
                return
            except ProtocolError:
                raise
            except Exception as e:
                logger.exception("Unexpected error from chat service.")
                yield format_unknown_error(e)
                return

            assistant_message, tool_calls = self._handle_response(response)
            if assistant_message.content:
                yield format_assistant(self.assistant_label, assistant_message.content)

            if not tool_calls:
                if not assistant_message.content:
                    logger.warning("Model returned neither content nor tool calls.")
                    yield format_error("Model returned an empty reply")
                logger.debug("No tool calls in response. Turn finished after %d hop(s).", hops)
                return

            try:
                async for output in self._handle_tool_calls(tool_calls):
                    yield output
            finally:
                self._answer_pending_tool_calls()

            hops += 1
            if self.max_hops is not None and hops >= self.max_hops:
                logger.warning("Max tool-call hops (%d) reached. Stopping turn.", self.max_hops)
                yield format_error(f"Stopped after {hops} tool-call hops without a final reply")
                return

    def _handle_response(self, response: ChatResponse) -> tuple[AssistantMessage, List[ToolCallRequest]]:
        if not response.choices:
            raise ProtocolError("No response choices found")

        choice = response.choices[0]
        assistant_message = choice.message
        tool_calls = list(assistant_message.tool_calls or [])

        if choice.finish_reason == "tool_calls" and not tool_calls:
            raise ProtocolError("No tool calls found in response")

        self.history.append(assistant_message)
        return assistant_message, tool_calls

    async def _handle_tool_calls(self, tool_calls: Sequence[ToolCallRequest]) -> AsyncIterator[str]:
        # Providers see the calls one at a time, in model order.
        for tool_call in tool_calls:
            yield format_tool_notice(tool_call.name)

            try:
                provider = self.registry.resolve(tool_call.name)
            except ToolNotFoundError as e:
                logger.warning("%s", e)
                yield format_error(e)
                self.history.append(ToolMessage(tool_call_id=tool_call.id, content=format_error(e), name=tool_call.name))
                continue

            request = to_provider_call(tool_call)
            logger.debug("Calling tool '%s' (ID: %s) with %s", request.name, tool_call.id, request.arguments)
            try:
                result = await provider.call_tool(request.name, request.arguments)
            except Exception as e:
                raise ToolExecutionError(f"Tool '{request.name}' failed: {e}") from e

            self.history.append(to_tool_message(tool_call.id, result, name=tool_call.name))

    def _answer_pending_tool_calls(self) -> None:
        # Calls left open by an aborted hop get an error result.
        for tool_call in self.history.pending_tool_calls():
            logger.warning("Tool call '%s' (ID: %s) was not completed.", tool_call.name, tool_call.id)
            content = format_error(f"Tool call '{tool_call.name}' was not completed")
            self.history.append(ToolMessage(tool_call_id=tool_call.id, content=content, name=tool_call.name))
