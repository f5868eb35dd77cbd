"""External service integrations."""

from typing import Optional, Union

from ..config import config
from .anthropic import AnthropicClient
from .gemini import GeminiAPIError, GeminiClient
from .youtube import QuotaTracker, YouTubeAPIError, YouTubeClient

TextClient = Union[GeminiClient, AnthropicClient]

PROVIDERS = ("gemini", "anthropic")


def create_text_client(
    provider: Optional[str] = None,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> TextClient:
    """Create the text generation client for a provider.

    Args:
        provider: 'gemini' or 'anthropic'. Defaults to config.ai_provider.
        api_key: Provider API key. Defaults to the provider's env var.
        model: Model override.

    Raises:
        ValueError: If the provider is unknown or its credentials are missing.
    """
    provider = (provider or config.ai_provider).lower()
    if provider == "gemini":
        return GeminiClient(api_key=api_key, model=model)
    if provider == "anthropic":
        return AnthropicClient(api_key=api_key, model=model)
    raise ValueError(
        f"Unknown AI provider: {provider}. Expected one of {', '.join(PROVIDERS)}"
    )


__all__ = [
    "AnthropicClient",
    "GeminiAPIError",
    "GeminiClient",
    "QuotaTracker",
    "TextClient",
    "YouTubeAPIError",
    "YouTubeClient",
    "PROVIDERS",
    "create_text_client",
]
