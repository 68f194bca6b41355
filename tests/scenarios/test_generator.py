"""
Tests for scenario generation.

Text generation is replaced by in-process generators so no network access
is needed.
"""

from __future__ import annotations

from datetime import UTC, datetime

import httpx
import pytest

from aiscout.errors import GenerationError
from aiscout.llm import LLMAPIError, LLMEndpointConfig, RetryConfig, TextGenerationClient
from aiscout.models import GenerationResult, Priority, ScenarioRecord, ScenarioStep
from aiscout.scenarios import (
    DEMO_MODEL,
    ScenarioGenerator,
    ScenarioRequest,
    StaticTextGenerator,
    format_scenarios_as_text,
    scenario_filename,
)


class RecordingGenerator:
    """Returns fixed text and remembers the prompts it received."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.text


class FailingGenerator:
    """Always raises the given exception."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    async def generate(self, prompt: str) -> str:
        raise self.error


class TestScenarioGenerator:
    """Test ScenarioGenerator.generate."""

    @pytest.mark.asyncio
    async def test_generates_and_parses(self, sample_scenario_text: str) -> None:
        """The prompt is sent and the reply is parsed into scenarios."""
        backend = RecordingGenerator(sample_scenario_text)
        generator = ScenarioGenerator(backend, "test-model")

        result = await generator.generate(ScenarioRequest(url="https://example.com", title="Example"))

        assert len(backend.prompts) == 1
        assert "- URL: https://example.com" in backend.prompts[0]
        assert result.total_generated == 2
        assert result.model == "test-model"
        assert result.generation_time_ms >= 0
        assert result.scenarios[0].title == "Successful login"

    @pytest.mark.asyncio
    async def test_demo_generator(self) -> None:
        """The offline demo generator yields the five canned scenarios."""
        result = await ScenarioGenerator(StaticTextGenerator(), DEMO_MODEL).generate(
            ScenarioRequest(url="https://example.com")
        )
        assert result.total_generated == 5
        assert result.model == "demo"

    @pytest.mark.asyncio
    async def test_unusable_reply_yields_placeholder(self) -> None:
        """A reply with no scenarios still produces one scenario."""
        result = await ScenarioGenerator(RecordingGenerator("No."), "m").generate(
            ScenarioRequest(url="https://example.com")
        )
        assert result.total_generated == 1
        assert result.scenarios[0].title == "Basic Page Load Test"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            LLMAPIError("API error: 500", status_code=500),
            httpx.ConnectError("connection refused"),
        ],
    )
    async def test_backend_failure(self, error: Exception) -> None:
        """Backend failures are reported as GenerationError."""
        generator = ScenarioGenerator(FailingGenerator(error), "m")
        with pytest.raises(GenerationError, match="Failed to generate test scenarios from AI model"):
            await generator.generate(ScenarioRequest(url="https://example.com"))

    @pytest.mark.asyncio
    async def test_non_json_reply_from_client(self) -> None:
        """An HTML page served with status 200 surfaces as GenerationError."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>gateway</html>"))
        endpoint = LLMEndpointConfig(retry=RetryConfig(max_retries=0, initial_delay_ms=0, jitter=False))
        client = TextGenerationClient(endpoint, http_client=httpx.AsyncClient(transport=transport))

        with pytest.raises(GenerationError) as exc_info:
            await ScenarioGenerator(client, endpoint.model).generate(ScenarioRequest(url="https://example.com"))
        assert isinstance(exc_info.value.__cause__, LLMAPIError)


class TestFormatScenariosAsText:
    """Test format_scenarios_as_text."""

    def test_report_layout(self) -> None:
        """The report lists every scenario with its steps."""
        scenario = ScenarioRecord(
            id="scenario-abc-0",
            title="Login",
            description="Valid credentials",
            steps=(
                ScenarioStep(step_number=1, action="Open the page"),
                ScenarioStep(step_number=2, action="Click Login"),
            ),
            expected_result="Dashboard shown",
            priority=Priority.HIGH,
            category="Authentication",
        )
        result = GenerationResult(
            scenarios=(scenario,),
            total_generated=1,
            generation_time_ms=42,
            model="test-model",
        )

        text = format_scenarios_as_text(result)
        lines = text.splitlines()

        assert lines[0] == "# Test Scenarios"
        assert "Model: test-model" in lines
        assert "Total Scenarios: 1" in lines
        assert "Generation Time: 42ms" in lines
        assert "=" * 80 in lines
        assert "## Scenario 1: Login" in lines
        assert "**Priority:** HIGH" in lines
        assert "**Category:** Authentication" in lines
        assert "1. Open the page" in lines
        assert "2. Click Login" in lines
        assert "Dashboard shown" in lines
        assert "-" * 80 in lines


class TestScenarioFilename:
    """Test scenario_filename."""

    def test_timestamped_name(self) -> None:
        """File names carry the generation timestamp."""
        assert scenario_filename(datetime(2024, 3, 9, 14, 5, 7, tzinfo=UTC)) == "scenario_20240309_140507.txt"
