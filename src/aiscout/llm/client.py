"""
Async HTTP client for text generation APIs.

Provides:
- Async httpx-based HTTP client
- Hugging Face text-generation inference and OpenAI-compatible chat
- Retry logic with exponential backoff
"""

from __future__ import annotations

import asyncio
import math
import random
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Protocol

import httpx
import structlog

from aiscout.llm.config import LLMEndpointConfig, LLMProvider, RetryConfig

logger = structlog.get_logger(__name__)


class LLMClientError(Exception):
    """Base exception for text generation client errors."""

    pass


class LLMRateLimitError(LLMClientError):
    """Raised when rate limit is exceeded."""

    def __init__(self, message: str, retry_after: float | None = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class LLMAuthenticationError(LLMClientError):
    """Raised when authentication fails."""

    pass


class LLMAPIError(LLMClientError):
    """Raised when API returns an error."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


def parse_retry_after(value: str | None) -> float | None:
    """Seconds to wait from a Retry-After header (delay-seconds or HTTP-date)."""
    if not value:
        return None
    value = value.strip()
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        return max(seconds, 0.0) if math.isfinite(seconds) else None
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)


class TextGenerator(Protocol):
    """Anything that turns a prompt into generated text."""

    async def generate(self, prompt: str) -> str: ...


class TextGenerationClient:
    """
    Async client for text generation endpoints.

    Features:
    - Hugging Face inference API (``models/{model}``)
    - OpenAI-compatible ``chat/completions``
    - Retry with exponential backoff on rate limits, 5xx and transport errors
    """

    def __init__(
        self,
        endpoint: LLMEndpointConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._log = logger.bind(
            component="text_generation_client",
            provider=endpoint.provider,
            model=endpoint.model,
        )

        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(endpoint.timeout_ms / 1000),
        )

    @property
    def model(self) -> str:
        return self._endpoint.model

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> TextGenerationClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    def _build_url(self) -> str:
        if self._endpoint.provider == LLMProvider.HUGGINGFACE:
            return f"{self._endpoint.base_url}/models/{self._endpoint.model}"
        return f"{self._endpoint.base_url}/chat/completions"

    def _build_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        api_key = self._endpoint.api_key.get_secret_value()
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        return headers

    def _build_request_body(self, prompt: str) -> dict[str, Any]:
        if self._endpoint.provider == LLMProvider.HUGGINGFACE:
            return {
                "inputs": prompt,
                "parameters": {
                    "temperature": self._endpoint.temperature,
                    "max_new_tokens": self._endpoint.max_tokens,
                    "top_p": self._endpoint.top_p,
                    "return_full_text": False,
                },
            }
        return {
            "model": self._endpoint.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self._endpoint.temperature,
            "max_tokens": self._endpoint.max_tokens,
            "top_p": self._endpoint.top_p,
        }

    def _parse_response(self, data: Any) -> str:
        """Pull the generated text out of a provider response."""
        if self._endpoint.provider == LLMProvider.HUGGINGFACE:
            if isinstance(data, list) and data and isinstance(data[0], dict):
                data = data[0]
            if isinstance(data, dict) and "generated_text" in data:
                return str(data["generated_text"])
            raise LLMAPIError("No generated_text in response", response_body=data)

        choices = data.get("choices", []) if isinstance(data, dict) else []
        if not isinstance(choices, list) or not choices:
            raise LLMAPIError("No choices in response", response_body=data)
        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        if not isinstance(message, dict):
            raise LLMAPIError("No message in first choice", response_body=data)
        return str(message.get("content") or "")

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.status_code in (401, 403):
            raise LLMAuthenticationError("Invalid API key or authentication failed")

        if response.status_code == 429:
            raise LLMRateLimitError(
                "Rate limit exceeded",
                retry_after=parse_retry_after(response.headers.get("retry-after")),
            )

        try:
            error_body = response.json()
        except ValueError:
            error_body = {"error": response.text}

        raise LLMAPIError(
            f"API error: {response.status_code}",
            status_code=response.status_code,
            response_body=error_body,
        )

    async def generate(self, prompt: str) -> str:
        """Generate text for ``prompt``, retrying transient failures."""
        retry_config = self._endpoint.retry
        url = self._build_url()
        headers = self._build_headers()
        body = self._build_request_body(prompt)

        last_error: Exception | None = None

        for attempt in range(retry_config.max_retries + 1):
            try:
                response = await self._client.post(url, json=body, headers=headers)
                if response.status_code == 200:
                    try:
                        data = response.json()
                    except ValueError as e:
                        raise LLMAPIError(
                            "Invalid JSON in response",
                            status_code=200,
                            response_body=response.text,
                        ) from e
                    text = self._parse_response(data)
                    self._log.debug("Generation succeeded", attempt=attempt + 1, chars=len(text))
                    return text
                self._raise_for_status(response)

            except (LLMRateLimitError, httpx.TimeoutException, httpx.ConnectError) as e:
                last_error = e
                if attempt >= retry_config.max_retries:
                    raise

                delay = self._calculate_backoff(attempt, retry_config)
                if isinstance(e, LLMRateLimitError) and e.retry_after:
                    delay = max(delay, min(e.retry_after * 1000, retry_config.max_delay_ms))

                self._log.warning(
                    "Request failed, retrying",
                    attempt=attempt + 1,
                    max_retries=retry_config.max_retries,
                    delay_ms=delay,
                    error=str(e),
                )
                await asyncio.sleep(delay / 1000)

            except LLMAPIError as e:
                last_error = e
                # Retry on 5xx errors, including model warm-up (503)
                if not (e.status_code and 500 <= e.status_code < 600) or attempt >= retry_config.max_retries:
                    raise

                delay = self._calculate_backoff(attempt, retry_config)
                self._log.warning(
                    "Server error, retrying",
                    attempt=attempt + 1,
                    delay_ms=delay,
                    status_code=e.status_code,
                )
                await asyncio.sleep(delay / 1000)

        raise last_error or LLMClientError("Request failed after retries")

    def _calculate_backoff(self, attempt: int, config: RetryConfig) -> float:
        """Calculate exponential backoff delay with optional jitter."""
        delay = config.initial_delay_ms * (config.exponential_base**attempt)
        delay = min(delay, config.max_delay_ms)

        if config.jitter:
            delay = delay * (0.5 + random.random())

        return delay
