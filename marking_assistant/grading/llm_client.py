"""
LLM Client for OpenAI-compatible chat endpoints.

Provides a wrapper around the OpenAI SDK configured from Settings.
Includes retry logic and error handling.
"""

import logging
import time

from openai import APIConnectionError, APIStatusError, OpenAI, RateLimitError

from marking_assistant.config import Settings, get_settings
from marking_assistant.errors import JudgeError

LOG = logging.getLogger(__name__)


class LLMError(JudgeError):
    """Raised when LLM API call fails."""

    def __init__(self, message: str, cause: Exception | None = None, retryable: bool = False):
        self.retryable = retryable
        super().__init__(message, cause=cause)


class LLMClient:
    """
    Client for interacting with an OpenAI-compatible chat API.

    Implements retry logic with exponential backoff.
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize the LLM client.

        Args:
            settings: Configuration settings. Uses global settings if not provided.

        Raises:
            LLMError: If no API key is configured.
        """
        self._settings = settings or get_settings()
        if not self._settings.llm_api_key:
            raise LLMError("LLM_API_KEY is not set; the llm judge needs an API key")

        self._client = OpenAI(
            api_key=self._settings.llm_api_key,
            base_url=self._settings.llm_base_url,
        )

        # Retry configuration
        self._max_retries = 3
        self._base_delay = 1.0  # seconds
        self._max_delay = 30.0  # seconds

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float | None = None,
        max_tokens: int = 512,
    ) -> str:
        """
        Generate a response from the LLM.

        Args:
            system_prompt: System message defining the LLM's role.
            user_prompt: User message with the actual request.
            temperature: Override temperature (uses config default if None).
            max_tokens: Maximum tokens in response.

        Returns:
            The generated text response.

        Raises:
            LLMError: If generation fails after all retries.
        """
        temp = temperature if temperature is not None else self._settings.llm_temperature

        messages: list[dict[str, str]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]

        return self._call_with_retry(messages, temp, max_tokens)

    def _call_with_retry(
        self,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> str:
        """
        Call the API with exponential backoff retry.

        Raises:
            LLMError: If all retries fail.
        """
        for attempt in range(self._max_retries + 1):
            try:
                response = self._client.chat.completions.create(
                    model=self._settings.llm_model,
                    messages=messages,  # type: ignore[arg-type]
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
            except (RateLimitError, APIConnectionError) as e:
                if attempt < self._max_retries:
                    self._backoff(attempt, e)
                    continue
                raise LLMError(
                    f"LLM request failed after {self._max_retries} retries: {e}",
                    cause=e,
                    retryable=True,
                ) from e
            except APIStatusError as e:
                # Don't retry on client errors (4xx except 429)
                if 400 <= e.status_code < 500 and e.status_code != 429:
                    raise LLMError(f"API error: {e.message}", cause=e) from e
                if attempt < self._max_retries:
                    self._backoff(attempt, e)
                    continue
                raise LLMError(
                    f"API error after {self._max_retries} retries: {e.message}",
                    cause=e,
                    retryable=True,
                ) from e

            if response.choices and response.choices[0].message.content:
                return response.choices[0].message.content
            raise LLMError("Empty response from LLM")

        raise LLMError(f"Failed after {self._max_retries} retries")

    def _backoff(self, attempt: int, error: Exception) -> None:
        delay = self._calculate_delay(attempt)
        LOG.warning("LLM call failed (%s); retrying in %.1fs", error, delay)
        time.sleep(delay)

    def _calculate_delay(self, attempt: int) -> float:
        """
        Calculate delay for exponential backoff.

        Args:
            attempt: Current attempt number (0-indexed).

        Returns:
            Delay in seconds.
        """
        delay = self._base_delay * (2**attempt)
        return min(delay, self._max_delay)

    def health_check(self) -> bool:
        """
        Check if the API is reachable.

        Returns:
            True if API is healthy, False otherwise.
        """
        try:
            response = self._client.chat.completions.create(
                model=self._settings.llm_model,
                messages=[{"role": "user", "content": "ping"}],
                max_tokens=5,
            )
            return bool(response.choices)
        except Exception as e:
            LOG.warning("LLM health check failed: %s", e)
            return False
