"""Append-only conversation log owned by a single agent."""

from typing import Iterator, List, Optional, Set, Tuple

from .models import AssistantMessage, BaseMessage, ToolCallRequest, ToolMessage
from ..exceptions import ConversationHistoryError


class ConversationHistory:
    """Ordered, append-only sequence of messages.

    Tool results are only accepted for calls issued by the most recent
    assistant message, with nothing but other tool results in between, and
    each call can be answered once. Any other message is rejected while a
    call of that assistant message is still unanswered.
    """

    def __init__(self, messages: Optional[List[BaseMessage]] = None) -> None:
        self._messages: List[BaseMessage] = []
        for message in messages or []:
            self.append(message)

    def append(self, message: BaseMessage) -> None:
        """Append a message, enforcing the tool result pairing.

        Args:
            message: The message to append.

        Raises:
            ConversationHistoryError: If a tool result is orphaned or answers a call twice, or if a
                non-tool message would follow unanswered tool calls.
        """
        if isinstance(message, ToolMessage):
            issued, answered = self._open_tool_calls()
            if message.tool_call_id not in issued:
                raise ConversationHistoryError(
                    f"Tool result '{message.tool_call_id}' does not answer a call of the preceding assistant message."
                )
            if message.tool_call_id in answered:
                raise ConversationHistoryError(f"Tool call '{message.tool_call_id}' was already answered.")
        else:
            pending = self.pending_tool_call_ids()
            if pending:
                raise ConversationHistoryError(f"Tool calls {pending} have no result yet.")
        self._messages.append(message)

    def pending_tool_calls(self) -> List[ToolCallRequest]:
        """Return the calls of the last assistant message that have no result yet, in call order."""
        answered: Set[str] = set()
        for message in reversed(self._messages):
            if isinstance(message, ToolMessage):
                answered.add(message.tool_call_id)
            elif isinstance(message, AssistantMessage):
                return [call for call in message.tool_calls or [] if call.id not in answered]
        return []

    def pending_tool_call_ids(self) -> List[str]:
        return [call.id for call in self.pending_tool_calls()]

    @property
    def messages(self) -> Tuple[BaseMessage, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[BaseMessage]:
        return iter(tuple(self._messages))

    def __getitem__(self, index: int) -> BaseMessage:
        return self._messages[index]

    def _open_tool_calls(self) -> Tuple[Set[str], Set[str]]:
        # Tool results may only trail the assistant message that issued the calls.
        answered: Set[str] = set()
        for message in reversed(self._messages):
            if isinstance(message, ToolMessage):
                answered.add(message.tool_call_id)
                continue
            if isinstance(message, AssistantMessage) and message.tool_calls:
                return {call.id for call in message.tool_calls}, answered
            break
        return set(), answered
