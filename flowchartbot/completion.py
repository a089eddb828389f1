"""
Client for an OpenAI-compatible chat-completions endpoint.
"""

from typing import Iterable

import openai
from openai import AsyncOpenAI

from .conversation import Message
from .errors import GenerationError

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 500


class CompletionClient:
    """
    Send a conversation to the completion endpoint and return the reply text.

    Args:
        api_key: Bearer credential for the endpoint
        base_url: Root URL of the OpenAI-compatible API
        model: Model identifier
        temperature: Sampling temperature
        max_tokens: Maximum length of the completion
        client: Preconfigured ``AsyncOpenAI`` instance (optional)
    """

    def __init__(
        self,
        api_key: str = None,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        client: AsyncOpenAI = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.total_tokens = 0
        if client is None:
            client = AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)
        self._client = client

    async def complete(self, messages: Iterable[Message]) -> str:
        """
        Request a single, non-streamed completion.

        Raises:
            GenerationError: If the transport fails, the endpoint returns a
                non-success status, or the reply holds no text
        """
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[m.to_dict() for m in messages],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                stream=False,
            )
        except openai.APIStatusError as e:
            raise GenerationError(
                f"API error: {e.status_code} {_status_text(e)}"
            ) from e
        except openai.APIError as e:
            raise GenerationError(f"API error: {e.message}") from e

        usage = getattr(response, "usage", None)
        if usage is not None and usage.total_tokens:
            self.total_tokens += usage.total_tokens

        if not response.choices:
            raise GenerationError("API error: the response contained no choices")
        content = response.choices[0].message.content
        if content is None:
            raise GenerationError("API error: the response contained no text")
        return content


def _status_text(error: openai.APIStatusError) -> str:
    reason = getattr(error.response, "reason_phrase", "")
    return reason or error.message
