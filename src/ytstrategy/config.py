"""Configuration management."""

import os
from typing import Optional
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config(BaseModel):
    """Application configuration."""

    # API Keys
    youtube_api_key: str = Field(
        default_factory=lambda: os.getenv("YOUTUBE_API_KEY", ""),
        description="YouTube Data API v3 key"
    )
    gemini_api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""),
        description="Gemini API key (Google AI Studio)"
    )
    anthropic_api_key: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""),
        description="Anthropic API key"
    )
    google_cloud_project: str = Field(
        default_factory=lambda: os.getenv("GOOGLE_CLOUD_PROJECT", ""),
        description="Google Cloud project ID (Gemini via Vertex AI)"
    )

    # Provider / model settings
    ai_provider: str = Field(
        default_factory=lambda: os.getenv("STRATEGY_AI_PROVIDER", "gemini"),
        description="Text generation provider: 'gemini' or 'anthropic'"
    )
    gemini_model: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        description="Gemini model name"
    )
    anthropic_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Claude model used when the provider is 'anthropic'"
    )

    # YouTube search settings
    region_code: str = Field(
        default_factory=lambda: os.getenv("YOUTUBE_REGION_CODE", ""),
        description="Optional regionCode for search (e.g. 'KR')"
    )
    relevance_language: str = Field(
        default_factory=lambda: os.getenv("YOUTUBE_RELEVANCE_LANGUAGE", ""),
        description="Optional relevanceLanguage for search (e.g. 'ko')"
    )
    max_results: int = Field(
        default=15,
        description="Default number of search results",
        ge=1,
        le=50
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "20")),
        description="HTTP timeout in seconds"
    )
    daily_quota: int = Field(
        default=10_000,
        description="YouTube Data API daily quota units"
    )

    class Config:
        """Pydantic config."""
        frozen = False

    def validate_youtube_required(self) -> None:
        """Validate that the YouTube key is set."""
        if not self.youtube_api_key:
            raise ValueError("YOUTUBE_API_KEY not set")

    def validate_ai_required(self, provider: Optional[str] = None) -> None:
        """Validate that credentials for the text generation provider are set.

        Raises:
            ValueError: If the provider is unknown or its credentials are missing.
        """
        provider = (provider or self.ai_provider).lower()

        if provider == "gemini":
            if not self.gemini_api_key and not self.google_cloud_project:
                raise ValueError(
                    "Missing Gemini configuration: set GEMINI_API_KEY, "
                    "or GOOGLE_CLOUD_PROJECT to use Vertex AI."
                )
        elif provider == "anthropic":
            if not self.anthropic_api_key:
                raise ValueError("ANTHROPIC_API_KEY not set")
        else:
            raise ValueError(
                f"Unknown AI provider: {provider}. Expected 'gemini' or 'anthropic'."
            )


# Global config instance
config = Config()
