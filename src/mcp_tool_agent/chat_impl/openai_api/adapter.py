"""Translate between the agent's message models and the OpenAI chat completions format."""

import json
from typing import Any, Dict, List, Optional, Sequence

from openai.types.chat import ChatCompletion, ChatCompletionMessage

from mcp_tool_agent.agent_core.exceptions import ProtocolError
from mcp_tool_agent.agent_core.messages import (
    AssistantMessage,
    BaseMessage,
    ChatChoice,
    ChatResponse,
    SystemMessage,
    ToolCallRequest,
    ToolMessage,
    UserMessage,
)


class OpenAIMessageAdapter:
    """Converts conversation history to OpenAI message dictionaries and completions back to ``ChatResponse``."""

    @staticmethod
    def to_openai_messages(messages: Sequence[BaseMessage]) -> List[Dict[str, Any]]:
        """
        Converts generic history to OpenAI message dictionaries.

        Args:
            messages: The conversation history.

        Returns:
            List of OpenAI message dictionaries.
        """
        openai_history: List[Dict[str, Any]] = []
        for msg in messages:
            if isinstance(msg, UserMessage):
                openai_history.append({"role": "user", "content": msg.content})
            elif isinstance(msg, SystemMessage):
                openai_history.append({"role": "system", "content": msg.content})
            elif isinstance(msg, AssistantMessage):
                openai_msg: Dict[str, Any] = {"role": "assistant", "content": msg.content}
                if msg.tool_calls:
                    openai_msg["tool_calls"] = [
                        OpenAIMessageAdapter._tool_call_to_openai(call) for call in msg.tool_calls
                    ]
                openai_history.append(openai_msg)
            elif isinstance(msg, ToolMessage):
                tool_msg: Dict[str, Any] = {"role": "tool", "tool_call_id": msg.tool_call_id, "content": msg.content}
                if msg.name:
                    tool_msg["name"] = msg.name
                openai_history.append(tool_msg)
            else:
                raise ProtocolError(f"Unsupported message type: {type(msg).__name__}")
        return openai_history

    @staticmethod
    def to_chat_response(completion: ChatCompletion) -> ChatResponse:
        """
        Normalizes an OpenAI chat completion.

        Args:
            completion: The raw completion.

        Returns:
            The normalized response. ``raw`` holds the original completion.

        Raises:
            ProtocolError: If a tool call has no id or the message content is not text.
        """
        choices = [
            ChatChoice(
                message=OpenAIMessageAdapter._to_assistant_message(choice.message),
                finish_reason=choice.finish_reason,
            )
            for choice in completion.choices or []
        ]
        return ChatResponse(choices=choices, raw=completion)

    @staticmethod
    def _to_assistant_message(message: ChatCompletionMessage) -> AssistantMessage:
        content: Optional[str] = message.content
        if content is not None and not isinstance(content, str):
            raise ProtocolError(f"Unexpected assistant content type: {type(content).__name__}")

        tool_calls: Optional[List[ToolCallRequest]] = None
        if message.tool_calls:
            tool_calls = []
            for tool_call in message.tool_calls:
                # Only function tool calls can be dispatched to providers
                if tool_call.type != "function":
                    continue
                if not tool_call.id:
                    raise ProtocolError("Tool call ID not found")
                tool_calls.append(
                    ToolCallRequest(
                        id=tool_call.id,
                        name=tool_call.function.name,
                        arguments=tool_call.function.arguments,
                    )
                )
        return AssistantMessage(content=content, tool_calls=tool_calls or None)

    @staticmethod
    def _tool_call_to_openai(tool_call: ToolCallRequest) -> Dict[str, Any]:
        arguments = tool_call.arguments
        if arguments is None:
            arguments = "{}"
        elif not isinstance(arguments, str):
            arguments = json.dumps(arguments)
        return {
            "id": tool_call.id,
            "type": "function",
            "function": {"name": tool_call.name, "arguments": arguments},
        }
