"""Core abstraction for chat completion service implementations."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, Sequence

from ..exceptions import ChatServiceError
from ..messages import BaseMessage, ChatResponse
from ..logger import get_logger

logger = get_logger(__name__)


class ChatService(ABC):
    """Abstract base class for chat completion services.

    Given a message history and a list of tool definitions, a service returns
    either a textual reply or a set of tool call requests, normalized as a
    ``ChatResponse``. Implementations raise ``ChatServiceError`` for failures of
    the underlying SDK or transport.
    """

    def __init__(self, max_retries: int = 2, base_retry_delay: float = 1.0):
        self.max_retries = max_retries
        self.base_retry_delay = base_retry_delay

    async def complete(self, messages: Sequence[BaseMessage], tools: Sequence[Dict[str, Any]]) -> ChatResponse:
        """
        Requests a completion for the conversation so far.

        Args:
            messages: The full conversation history.
            tools: Tool definitions in chat model format. May be empty.

        Returns:
            The normalized chat response.

        Raises:
            ChatServiceError: The last service error if all retries fail, or the first non-retryable one.
        """
        delay = self.base_retry_delay
        for attempt in range(self.max_retries + 1):
            try:
                return await self._complete_impl(messages, tools)
            except ChatServiceError as e:
                if not e.retryable or attempt == self.max_retries:
                    raise

                logger.warning(f"Chat service error (Retry: {attempt + 1}/{self.max_retries}): {e}. Waiting {delay}s...")
                await asyncio.sleep(delay)
                delay *= 2  # Exponential backoff

        msg = f"Failed to get response after {self.max_retries} retries."
        logger.error(msg)
        raise ChatServiceError(msg)

    @abstractmethod
    async def _complete_impl(
        self, messages: Sequence[BaseMessage], tools: Sequence[Dict[str, Any]]
    ) -> ChatResponse:
        pass
