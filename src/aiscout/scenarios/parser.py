"""
Parser for free-form scenario text returned by a text generation model.

The text is untrusted and has no guaranteed structure. It is split on
scenario boundary markers (English or Turkish), each segment is run through
the field rules, and a fixed placeholder scenario is returned when nothing
usable is found, so callers never receive an empty result.
"""

from __future__ import annotations

import re
import uuid
from datetime import UTC, datetime

import structlog

from aiscout.models import InventoryItem, Priority, ScenarioRecord, ScenarioStep
from aiscout.scenarios import rules

logger = structlog.get_logger(__name__)

# "Scenario 1", "Test Case 2", "TC 3", "Senaryo 4", "Test Senaryosu 5", "Test Durumu 6"
SCENARIO_MARKER = re.compile(
    r"\b(?:test[ \t]+senaryosu|test[ \t]+durumu|test[ \t]+case|senaryo|scenario|tc)[ \t]*#?[ \t]*\d+",
    re.IGNORECASE,
)


def split_segments(text: str) -> list[str]:
    """Split on boundary markers, dropping preamble and blank segments."""
    markers = list(SCENARIO_MARKER.finditer(text))
    segments: list[str] = []
    for current, following in zip(markers, markers[1:] + [None]):
        end = following.start() if following is not None else len(text)
        segment = text[current.end():end]
        if segment.strip():
            segments.append(segment)
    return segments


def placeholder_scenario(run_token: str, timestamp: datetime) -> ScenarioRecord:
    """Scenario returned when the text contains nothing recognizable."""
    return ScenarioRecord(
        id=f"scenario-{run_token}-0",
        title="Basic Page Load Test",
        description="Verify that the page loads and renders its main content",
        steps=(
            ScenarioStep(step_number=1, action="Navigate to the page"),
            ScenarioStep(step_number=2, action="Verify the page has loaded successfully"),
        ),
        expected_result="Page loads without errors",
        priority=Priority.MEDIUM,
        category="Functional",
        timestamp=timestamp,
    )


class ScenarioTextParser:
    """Convert generated text into ScenarioRecord objects."""

    def __init__(self) -> None:
        self._log = logger.bind(component="scenario_parser")

    def parse(
        self,
        text: str | None,
        components: list[InventoryItem] | tuple[InventoryItem, ...] | None = None,
    ) -> list[ScenarioRecord]:
        """Parse ``text`` into scenarios.

        Args:
            text: Raw generated text
            components: Inventory the text was generated from (context only)

        Returns:
            At least one scenario; the placeholder when no segment survives
        """
        # Identifiers are unique per call, never per process
        run_token = uuid.uuid4().hex[:12]
        timestamp = datetime.now(UTC)
        normalized = (text or "").replace("\r\n", "\n").replace("\r", "\n")

        segments = split_segments(normalized)
        scenarios: list[ScenarioRecord] = []
        for position, segment in enumerate(segments, start=1):
            try:
                scenarios.append(self._parse_segment(segment, position, run_token, timestamp))
            except ValueError as e:
                self._log.warning("Skipping unparseable scenario segment", position=position, error=str(e))

        if not scenarios:
            self._log.info(
                "No scenarios recognized, using placeholder",
                markers=len(segments),
                text_length=len(normalized),
            )
            return [placeholder_scenario(run_token, timestamp)]

        self._log.info(
            "Scenarios parsed",
            scenarios=len(scenarios),
            segments=len(segments),
            components=len(components or ()),
        )
        return scenarios

    def _parse_segment(
        self,
        segment: str,
        position: int,
        run_token: str,
        timestamp: datetime,
    ) -> ScenarioRecord:
        return ScenarioRecord(
            id=f"scenario-{run_token}-{position - 1}",
            title=rules.TITLE.extract(segment, position).value,
            description=rules.DESCRIPTION.extract(segment, position).value,
            steps=rules.STEPS.extract(segment, position).value,
            expected_result=rules.EXPECTED_RESULT.extract(segment, position).value,
            priority=rules.PRIORITY.extract(segment, position).value,
            category=rules.CATEGORY.extract(segment, position).value,
            timestamp=timestamp,
        )
