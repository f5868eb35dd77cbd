"""Google Gemini API client wrapper.

Talks to the Generative Language API with an API key, or to Vertex AI with
application default credentials when only a Google Cloud project is set.
"""

import logging
import time
from typing import Optional

import google.auth
import google.auth.transport.requests
import requests

from ..config import config

logger = logging.getLogger(__name__)

# Status codes worth retrying
_RETRYABLE = {429, 500, 502, 503, 504}


class GeminiAPIError(Exception):
    """Raised when a Gemini request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GeminiClient:
    """Client wrapper for Gemini text generation with retry logic."""

    API_BASE = "https://generativelanguage.googleapis.com/v1beta"
    DEFAULT_LOCATION = "us-central1"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        project_id: Optional[str] = None,
        location: str = DEFAULT_LOCATION,
        session: Optional[requests.Session] = None,
        timeout: float = 120.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            api_key: Gemini API key. Defaults to GEMINI_API_KEY env var.
            model: Model to use. Defaults to config.gemini_model.
            project_id: Google Cloud project for Vertex AI, used when no API key is set.
            location: GCP region for Vertex AI.
            session: HTTP session to reuse. Created if not provided.
            timeout: Seconds to wait for each generation request.
            max_retries: Maximum number of attempts for failed requests.
            retry_delay: Base delay between retries in seconds (exponential backoff).
        """
        self._api_key = api_key or config.gemini_api_key
        self._project_id = project_id or config.google_cloud_project
        if not self._api_key and not self._project_id:
            raise ValueError(
                "Gemini API key not provided. Set GEMINI_API_KEY, "
                "or GOOGLE_CLOUD_PROJECT to use Vertex AI."
            )

        self._model = model or config.gemini_model
        self._location = location
        self._session = session or requests.Session()
        self._timeout = timeout
        self._max_retries = max_retries
        self._retry_delay = retry_delay

    @property
    def model(self) -> str:
        """Return the model being used."""
        return self._model

    @property
    def uses_vertex(self) -> bool:
        """Whether requests go through Vertex AI instead of an API key."""
        return not self._api_key

    def _endpoint(self) -> tuple[str, dict]:
        """Return the generateContent URL and auth headers."""
        headers = {"Content-Type": "application/json"}

        if not self.uses_vertex:
            headers["x-goog-api-key"] = self._api_key
            return f"{self.API_BASE}/models/{self._model}:generateContent", headers

        scopes = ["https://www.googleapis.com/auth/cloud-platform"]
        credentials, _ = google.auth.default(scopes=scopes)
        credentials.refresh(google.auth.transport.requests.Request())
        headers["Authorization"] = f"Bearer {credentials.token}"

        url = (
            f"https://{self._location}-aiplatform.googleapis.com/v1/"
            f"projects/{self._project_id}/locations/{self._location}/"
            f"publishers/google/models/{self._model}:generateContent"
        )
        return url, headers

    def _build_body(
        self,
        prompt: str,
        max_tokens: int,
        system: Optional[str],
        temperature: float,
        response_schema: Optional[dict],
    ) -> dict:
        generation_config = {
            "maxOutputTokens": max_tokens,
            "temperature": temperature,
        }
        if response_schema:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = response_schema

        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }
        if system:
            body["systemInstruction"] = {"parts": [{"text": system}]}
        return body

    def create_message(
        self,
        prompt: str,
        max_tokens: int = 4096,
        system: Optional[str] = None,
        temperature: float = 0.7,
        response_schema: Optional[dict] = None,
    ) -> str:
        """Generate text with Gemini.

        Args:
            prompt: The user prompt to send.
            max_tokens: Maximum tokens in the response.
            system: Optional system instruction.
            temperature: Sampling temperature (0.0-2.0).
            response_schema: Optional OpenAPI-style schema; forces a JSON response.

        Returns:
            The text of the first candidate.

        Raises:
            GeminiAPIError: If the request fails after all retries.
        """
        url, headers = self._endpoint()
        body = self._build_body(prompt, max_tokens, system, temperature, response_schema)

        for attempt in range(self._max_retries):
            logger.debug(
                f"Sending request to Gemini (attempt {attempt + 1}/{self._max_retries})"
            )
            try:
                response = self._session.post(url, json=body, headers=headers, timeout=self._timeout)
            except (requests.ConnectionError, requests.Timeout) as e:
                delay = self._retry_delay * (2**attempt)
                logger.warning(f"Connection error: {e}. Retrying in {delay:.1f}s...")
                if attempt == self._max_retries - 1:
                    raise GeminiAPIError(f"Connection failed: {e}") from e
                time.sleep(delay)
                continue

            if response.status_code in _RETRYABLE and attempt < self._max_retries - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    f"Gemini returned {response.status_code}. Retrying in {delay:.1f}s..."
                )
                time.sleep(delay)
                continue

            if response.status_code != 200:
                error_msg = f"{response.status_code}: {response.text[:500]}"
                logger.error(f"Gemini API error: {error_msg}")
                raise GeminiAPIError(error_msg, response.status_code)

            return self._extract_text(response.json())

        raise GeminiAPIError("Max retries exceeded")

    @staticmethod
    def _extract_text(data: dict) -> str:
        candidates = data.get("candidates", [])
        if not candidates:
            reason = data.get("promptFeedback", {}).get("blockReason")
            raise GeminiAPIError(
                f"No candidates in response (block reason: {reason})" if reason
                else "No candidates in response"
            )

        parts = candidates[0].get("content", {}).get("parts", [])
        text = "".join(part.get("text", "") for part in parts)
        if not text:
            finish = candidates[0].get("finishReason", "unknown")
            raise GeminiAPIError(f"Empty response (finish reason: {finish})")
        return text
