"""Claude as an alternative provider for comment analysis and script drafting.

Claude has no structured-output switch on this path, so the response schema
is written into the system prompt and the agents extract the JSON object
from the reply.
"""

import json
import logging
import time
from typing import Optional

from anthropic import Anthropic, APIError, APIConnectionError, RateLimitError

from ..config import config

logger = logging.getLogger(__name__)


def schema_instruction(response_schema: dict) -> str:
    """Describe a Gemini-style response schema as a plain-text instruction."""
    return (
        "Respond with a single JSON object only, no markdown, "
        "matching this schema:\n" + json.dumps(response_schema, indent=2)
    )


class AnthropicClient:
    """Text client with the same create_message signature as GeminiClient."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Anthropic API key. Defaults to ANTHROPIC_API_KEY env var.
            model: Claude model. Defaults to config.anthropic_model.
            max_retries: Attempts before a rate limit or connection error is raised.
            retry_delay: Base delay for exponential backoff, in seconds.
        """
        self._api_key = api_key or config.anthropic_api_key
        if not self._api_key:
            raise ValueError(
                "Anthropic API key not provided. Set ANTHROPIC_API_KEY env var."
            )

        self._client = Anthropic(api_key=self._api_key)
        self._model = model or config.anthropic_model
        self._max_retries = max_retries
        self._retry_delay = retry_delay

    @property
    def model(self) -> str:
        return self._model

    def create_message(
        self,
        prompt: str,
        max_tokens: int = 4096,
        system: Optional[str] = None,
        temperature: float = 0.7,
        response_schema: Optional[dict] = None,
    ) -> str:
        """Send one prompt and return the text of the reply.

        Raises:
            RateLimitError: If still rate limited after the last attempt.
            APIConnectionError: If Claude is unreachable after the last attempt.
            APIError: On any other API failure, without retrying.
        """
        if response_schema:
            note = schema_instruction(response_schema)
            system = f"{system}\n\n{note}" if system else note

        request = {
            "model": self._model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
        }
        if system:
            request["system"] = system

        for attempt in range(1, self._max_retries + 1):
            logger.debug(f"Claude request {attempt}/{self._max_retries} ({self._model})")
            try:
                response = self._client.messages.create(**request)
            except (RateLimitError, APIConnectionError) as e:
                if attempt == self._max_retries:
                    raise
                delay = self._retry_delay * (2 ** (attempt - 1))
                logger.warning(f"Claude unavailable ({type(e).__name__}). Retrying in {delay:.1f}s...")
                time.sleep(delay)
                continue
            except APIError as e:
                logger.error(f"Claude API error: {e}")
                raise

            content = response.content[0]
            return content.text if hasattr(content, "text") else str(content)

        raise RuntimeError("Max retries exceeded")
