"""
Tests for the text generation client.

HTTP traffic is served by httpx.MockTransport; retries run with zero delay.
"""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

import httpx
import pytest

from aiscout.llm import (
    LLMAPIError,
    LLMAuthenticationError,
    LLMEndpointConfig,
    LLMProvider,
    LLMRateLimitError,
    RetryConfig,
    TextGenerationClient,
    parse_retry_after,
)

NO_DELAY = RetryConfig(max_retries=2, initial_delay_ms=0, max_delay_ms=0, jitter=False)


def _client(handler, **endpoint_kwargs) -> TextGenerationClient:
    endpoint = LLMEndpointConfig(retry=NO_DELAY, **endpoint_kwargs)
    return TextGenerationClient(endpoint, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestHuggingFaceProvider:
    """Test requests against the Hugging Face inference API."""

    @pytest.mark.asyncio
    async def test_request_and_response(self) -> None:
        """The prompt is posted to the model URL and generated_text returned."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"generated_text": "Scenario 1\nTitle: A"}])

        client = _client(handler, api_key="hf_secret", model="org/model", max_tokens=500)
        text = await client.generate("Write tests")

        assert text == "Scenario 1\nTitle: A"
        request = seen[0]
        assert str(request.url) == "https://api-inference.huggingface.co/models/org/model"
        assert request.headers["Authorization"] == "Bearer hf_secret"
        body = json.loads(request.content)
        assert body["inputs"] == "Write tests"
        assert body["parameters"]["max_new_tokens"] == 500
        assert body["parameters"]["return_full_text"] is False

    @pytest.mark.asyncio
    async def test_no_auth_header_without_key(self) -> None:
        """Anonymous requests carry no Authorization header."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"generated_text": "ok"})

        assert await _client(handler).generate("p") == "ok"
        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_missing_generated_text(self) -> None:
        """A reply without generated text is an API error."""
        client = _client(lambda request: httpx.Response(200, json={"unexpected": True}))
        with pytest.raises(LLMAPIError):
            await client.generate("p")


class TestOpenAIProvider:
    """Test requests against OpenAI-compatible endpoints."""

    @pytest.mark.asyncio
    async def test_chat_completion(self) -> None:
        """Chat completions are posted and the first choice returned."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"choices": [{"message": {"content": "generated"}}]})

        client = _client(handler, provider=LLMProvider.OPENAI, base_url="http://localhost:8000/v1/", model="m")
        assert await client.generate("p") == "generated"
        assert str(seen[0].url) == "http://localhost:8000/v1/chat/completions"
        assert json.loads(seen[0].content)["messages"] == [{"role": "user", "content": "p"}]


class TestRetries:
    """Test error handling and retry behavior."""

    @pytest.mark.asyncio
    async def test_retries_server_errors(self) -> None:
        """5xx responses are retried until success."""
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            if calls < 3:
                return httpx.Response(503, json={"error": "Model is loading"})
            return httpx.Response(200, json={"generated_text": "ready"})

        assert await _client(handler).generate("p") == "ready"
        assert calls == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self) -> None:
        """Persistent rate limiting surfaces after the last retry."""
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(429)

        with pytest.raises(LLMRateLimitError):
            await _client(handler).generate("p")
        assert calls == 3

    @pytest.mark.asyncio
    async def test_authentication_is_not_retried(self) -> None:
        """Authentication failures fail immediately."""
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(401, json={"error": "unauthorized"})

        with pytest.raises(LLMAuthenticationError):
            await _client(handler).generate("p")
        assert calls == 1

    @pytest.mark.asyncio
    async def test_client_errors_are_not_retried(self) -> None:
        """4xx errors other than 429 fail immediately with the status code."""
        client = _client(lambda request: httpx.Response(400, text="bad request"))
        with pytest.raises(LLMAPIError) as exc_info:
            await client.generate("p")
        assert exc_info.value.status_code == 400
        assert exc_info.value.response_body == {"error": "bad request"}

    @pytest.mark.asyncio
    async def test_transport_errors_are_retried(self) -> None:
        """Connection errors are retried."""
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json={"generated_text": "ok"})

        assert await _client(handler).generate("p") == "ok"
        assert calls == 2

    @pytest.mark.asyncio
    async def test_rate_limit_with_http_date(self) -> None:
        """A Retry-After given as an HTTP-date is retried like any other 429."""
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(429, headers={"retry-after": "Wed, 21 Oct 2026 07:28:00 GMT"})

        with pytest.raises(LLMRateLimitError):
            await _client(handler).generate("p")
        assert calls == 3

    @pytest.mark.asyncio
    async def test_non_json_success_body(self) -> None:
        """A 200 reply that is not JSON is an API error carrying the body."""
        client = _client(lambda request: httpx.Response(200, text="<html>gateway</html>"))
        with pytest.raises(LLMAPIError) as exc_info:
            await client.generate("p")
        assert exc_info.value.status_code == 200
        assert exc_info.value.response_body == "<html>gateway</html>"

    @pytest.mark.asyncio
    async def test_malformed_choice(self) -> None:
        """A chat reply whose first choice is not an object is an API error."""
        client = _client(
            lambda request: httpx.Response(200, json={"choices": ["text"]}),
            provider=LLMProvider.OPENAI,
            model="m",
        )
        with pytest.raises(LLMAPIError):
            await client.generate("p")


class TestBackoff:
    """Test backoff calculation."""

    def test_exponential_and_capped(self) -> None:
        """Delays grow exponentially and are capped."""
        config = RetryConfig(initial_delay_ms=1000, max_delay_ms=5000, exponential_base=2.0, jitter=False)
        client = TextGenerationClient(LLMEndpointConfig())
        assert client._calculate_backoff(0, config) == 1000
        assert client._calculate_backoff(2, config) == 4000
        assert client._calculate_backoff(5, config) == 5000

    @pytest.mark.asyncio
    async def test_retry_after_is_capped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A long Retry-After never exceeds the configured maximum delay."""
        delays: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            delays.append(seconds)

        monkeypatch.setattr(asyncio, "sleep", fake_sleep)
        config = RetryConfig(max_retries=1, initial_delay_ms=100, max_delay_ms=2000, jitter=False)
        transport = httpx.MockTransport(lambda request: httpx.Response(429, headers={"retry-after": "86400"}))
        client = TextGenerationClient(
            LLMEndpointConfig(retry=config),
            http_client=httpx.AsyncClient(transport=transport),
        )

        with pytest.raises(LLMRateLimitError):
            await client.generate("p")
        assert delays == [2.0]


class TestParseRetryAfter:
    """Test Retry-After header parsing."""

    @pytest.mark.parametrize(("value", "expected"), [("120", 120.0), (" 1.5 ", 1.5), ("-3", 0.0)])
    def test_delay_seconds(self, value: str, expected: float) -> None:
        """Numeric values are seconds."""
        assert parse_retry_after(value) == expected

    def test_http_date(self) -> None:
        """HTTP-dates are converted to seconds from now."""
        when = datetime.now(timezone.utc) + timedelta(seconds=90)
        seconds = parse_retry_after(format_datetime(when, usegmt=True))
        assert seconds is not None
        assert 80 <= seconds <= 90

    def test_past_date_is_zero(self) -> None:
        """A date in the past means retry now."""
        assert parse_retry_after("Wed, 21 Oct 2015 07:28:00 GMT") == 0.0

    @pytest.mark.parametrize("value", [None, "", "soon", "inf", "nan"])
    def test_unusable_values(self, value: str | None) -> None:
        """Missing or unparseable values give no delay hint."""
        assert parse_retry_after(value) is None
