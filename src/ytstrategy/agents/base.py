"""Base agent abstraction."""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Generic, TypeVar, Optional

from ..services import TextClient, create_text_client

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")

PROMPT_DIR = Path(__file__).parent.parent.parent.parent / "templates" / "prompts"


def load_prompt(name: str, fallback: str) -> str:
    """Load a prompt template by name, falling back to the inline default."""
    path = PROMPT_DIR / f"{name}.txt"
    if path.exists():
        return path.read_text(encoding="utf-8")
    return fallback


class BaseAgent(ABC, Generic[InputT, OutputT]):
    """Abstract base class for AI agents.

    Provides shared functionality for agents that ask a text model for a
    JSON object. Subclasses must implement `run` and define their prompts.
    """

    def __init__(
        self,
        client: Optional[TextClient] = None,
        provider: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        """Initialize the agent.

        Args:
            client: Text generation client. Created from the provider if not provided.
            provider: 'gemini' or 'anthropic'. Defaults to config.ai_provider.
            api_key: API key for the provider.
            model: Model override.
        """
        self._client = client or create_text_client(provider, api_key=api_key, model=model)
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the agent's name."""
        ...

    @property
    @abstractmethod
    def system_prompt(self) -> str:
        """Return the system prompt for this agent."""
        ...

    @property
    def response_schema(self) -> Optional[dict]:
        """Return the JSON schema the response must follow, if any."""
        return None

    @property
    def model(self) -> str:
        """Return the model being used."""
        return self._client.model

    @abstractmethod
    def run(self, input_data: InputT) -> OutputT:
        """Execute the agent's main task.

        Args:
            input_data: Input data for the agent.

        Returns:
            Structured output from the agent.
        """
        ...

    def _create_message(
        self,
        prompt: str,
        max_tokens: int = 4096,
        temperature: float = 0.7,
    ) -> str:
        """Create a message using the agent's client, system prompt and schema."""
        self._logger.debug(f"Creating message with prompt length: {len(prompt)}")

        try:
            response = self._client.create_message(
                prompt=prompt,
                max_tokens=max_tokens,
                system=self.system_prompt,
                temperature=temperature,
                response_schema=self.response_schema,
            )
            self._logger.debug(f"Received response of length: {len(response)}")
            return response

        except Exception as e:
            self._logger.error(f"Error creating message: {e}")
            raise

    def _parse_object(self, response: str) -> dict[str, Any]:
        """Parse a JSON object out of a model response.

        Raises:
            ValueError: If no JSON object can be decoded.
        """
        json_str = self._extract_json(response)
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            self._logger.error(f"Failed to parse JSON: {e}")
            self._logger.debug(f"Raw response: {response}")
            raise ValueError(f"Invalid JSON in response: {e}")

        if not isinstance(data, dict):
            raise ValueError("Response is not a JSON object")
        return data

    @staticmethod
    def _extract_json(response: str) -> str:
        """Extract JSON from a response that may contain markdown or other text."""
        if "```json" in response:
            start = response.find("```json") + 7
            end = response.find("```", start)
            if end > start:
                return response[start:end].strip()

        if "```" in response:
            start = response.find("```") + 3
            end = response.find("```", start)
            if end > start:
                return response[start:end].strip()

        start = response.find("{")
        if start != -1:
            depth = 0
            in_string = False
            escaped = False
            for i, char in enumerate(response[start:], start):
                if in_string:
                    if escaped:
                        escaped = False
                    elif char == "\\":
                        escaped = True
                    elif char == '"':
                        in_string = False
                elif char == '"':
                    in_string = True
                elif char == "{":
                    depth += 1
                elif char == "}":
                    depth -= 1
                    if depth == 0:
                        return response[start:i + 1]

        return response.strip()


def string_list(value: Any) -> list[str]:
    """Coerce a JSON value into a list of non-empty strings.

    Raises:
        ValueError: If the value is neither a list nor a string.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"Expected a list, got {type(value).__name__}")
    return [str(item).strip() for item in value if str(item).strip()]
