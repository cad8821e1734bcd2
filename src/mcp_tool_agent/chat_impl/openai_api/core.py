from typing import Any, Dict, Iterable, Optional, Sequence, cast

import openai
from openai import AsyncOpenAI

from mcp_tool_agent.agent_core import ChatService, ChatServiceError
from mcp_tool_agent.agent_core.messages import BaseMessage, ChatResponse
from mcp_tool_agent.agent_core.logger import get_logger
from .adapter import OpenAIMessageAdapter

logger = get_logger(__name__)

# Client errors that fail the same way on every retry
_PERMANENT_ERRORS = (
    openai.BadRequestError,
    openai.AuthenticationError,
    openai.PermissionDeniedError,
    openai.NotFoundError,
    openai.UnprocessableEntityError,
)


class OpenAIChatService(ChatService):
    """
    Chat service backed by an OpenAI compatible chat completions endpoint.

    Works with any provider exposing the OpenAI API, e.g. Mistral via its
    OpenAI compatible base URL.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str,
        temp: Optional[float] = None,
        max_tokens: Optional[int] = None,
        max_retries: int = 2,
        base_retry_delay: float = 1.0,
    ):
        """
        Initializes the OpenAI chat service.

        Args:
            client: The initialized AsyncOpenAI client.
            model_name: The identifier of the model to use (e.g. 'mistral-small-latest', 'gpt-4o-mini').
            temp: Optional sampling temperature.
            max_tokens: Optional maximum number of tokens to generate per reply.
            max_retries: Retries after a failed request.
            base_retry_delay: Initial delay between retries in seconds; doubled after each retry.
        """
        super().__init__(max_retries=max_retries, base_retry_delay=base_retry_delay)
        self.client: AsyncOpenAI = client
        self.model: str = model_name
        self.temperature = temp
        self.max_tokens = max_tokens

    async def _complete_impl(
        self, messages: Sequence[BaseMessage], tools: Sequence[Dict[str, Any]]
    ) -> ChatResponse:
        request: Dict[str, Any] = {
            "model": self.model,
            "messages": cast(Iterable[Any], OpenAIMessageAdapter.to_openai_messages(messages)),
        }
        # Some OpenAI compatible endpoints reject an empty tool list
        if tools:
            request["tools"] = list(tools)
        if self.temperature is not None:
            request["temperature"] = self.temperature
        if self.max_tokens is not None:
            request["max_tokens"] = self.max_tokens

        logger.debug(f"Sending {len(messages)} message(s) and {len(tools)} tool(s) to model {self.model}")
        try:
            completion = await self.client.chat.completions.create(**request)
        except _PERMANENT_ERRORS as e:
            raise ChatServiceError(str(e), retryable=False) from e
        except openai.OpenAIError as e:
            raise ChatServiceError(str(e)) from e

        response = OpenAIMessageAdapter.to_chat_response(completion)
        if response.choices:
            logger.debug(f"Response received. Finish reason: {response.choices[0].finish_reason}")
        return response
