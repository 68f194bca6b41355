"""
Scenario generation from a component inventory.

Builds the prompt, calls the text generator, parses the reply and renders
results as a human-readable report.
"""

from __future__ import annotations

import time
from datetime import datetime

import httpx
import structlog

from aiscout.errors import GenerationError
from aiscout.llm.client import LLMClientError, TextGenerator
from aiscout.models import GenerationResult
from aiscout.scenarios.parser import ScenarioTextParser
from aiscout.scenarios.prompt import ScenarioRequest, build_prompt

logger = structlog.get_logger(__name__)

RULE_WIDTH = 80


class ScenarioGenerator:
    """Ask a text generator for test scenarios and parse them."""

    def __init__(
        self,
        generator: TextGenerator,
        model: str,
        parser: ScenarioTextParser | None = None,
    ) -> None:
        self._generator = generator
        self._model = model
        self._parser = parser or ScenarioTextParser()
        self._log = logger.bind(component="scenario_generator", model=model)

    async def generate(self, request: ScenarioRequest) -> GenerationResult:
        """Generate scenarios for the page described by ``request``.

        Raises:
            GenerationError: If the text generator fails
        """
        prompt = build_prompt(request)
        started = time.perf_counter()

        self._log.info(
            "Requesting scenarios",
            url=request.url,
            components=len(request.components),
            max_scenarios=request.options.max_scenarios,
        )
        try:
            text = await self._generator.generate(prompt)
        except (LLMClientError, httpx.HTTPError) as e:
            self._log.error("Scenario generation failed", error=str(e))
            raise GenerationError("Failed to generate test scenarios from AI model") from e

        scenarios = self._parser.parse(text, request.components)
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        self._log.info("Scenarios generated", scenarios=len(scenarios), generation_time_ms=elapsed_ms)
        return GenerationResult(
            scenarios=tuple(scenarios),
            total_generated=len(scenarios),
            generation_time_ms=elapsed_ms,
            model=self._model,
        )


def format_scenarios_as_text(result: GenerationResult) -> str:
    """Render a generation result as a plain-text report."""
    lines = [
        "# Test Scenarios",
        "",
        f"Generated: {result.timestamp.astimezone():%Y-%m-%d %H:%M:%S}",
        f"Model: {result.model}",
        f"Total Scenarios: {result.total_generated}",
        f"Generation Time: {result.generation_time_ms}ms",
        "",
        "=" * RULE_WIDTH,
        "",
    ]

    for index, scenario in enumerate(result.scenarios, start=1):
        lines += [
            f"## Scenario {index}: {scenario.title}",
            "",
            f"**Priority:** {scenario.priority.upper()}",
            f"**Category:** {scenario.category}",
            "",
            "**Description:**",
            scenario.description,
            "",
            "**Test Steps:**",
        ]
        lines += [f"{step.step_number}. {step.action}" for step in scenario.steps]
        lines += [
            "",
            "**Expected Result:**",
            scenario.expected_result,
            "",
            "-" * RULE_WIDTH,
            "",
        ]

    return "\n".join(lines)


def scenario_filename(now: datetime | None = None) -> str:
    """File name for a saved scenario report: scenario_YYYYMMDD_HHMMSS.txt."""
    now = now or datetime.now()
    return f"scenario_{now:%Y%m%d_%H%M%S}.txt"
