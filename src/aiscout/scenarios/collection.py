"""In-memory collection of generated scenarios, newest first."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import structlog

from aiscout.models import ScenarioRecord

logger = structlog.get_logger(__name__)


class ScenarioCollection:
    """
    Accumulates scenarios across generation runs.

    Records are immutable; they can be added and removed but never edited
    in place. Newly added batches are placed ahead of older ones.
    """

    def __init__(self, scenarios: Iterable[ScenarioRecord] = ()) -> None:
        self._scenarios: list[ScenarioRecord] = list(scenarios)
        self._total_generated = len(self._scenarios)
        self._log = logger.bind(component="scenario_collection")

    def __len__(self) -> int:
        return len(self._scenarios)

    def __iter__(self) -> Iterator[ScenarioRecord]:
        return iter(list(self._scenarios))

    def __contains__(self, scenario_id: object) -> bool:
        return any(s.id == scenario_id for s in self._scenarios)

    @property
    def total_generated(self) -> int:
        """Number of scenarios ever added since the last clear."""
        return self._total_generated

    def add(self, scenarios: Iterable[ScenarioRecord]) -> None:
        batch = list(scenarios)
        self._scenarios = batch + self._scenarios
        self._total_generated += len(batch)
        self._log.debug("Scenarios added", added=len(batch), total=len(self._scenarios))

    def get(self, scenario_id: str) -> ScenarioRecord | None:
        return next((s for s in self._scenarios if s.id == scenario_id), None)

    def remove(self, scenario_id: str) -> bool:
        """Remove a scenario by id; returns whether anything was removed."""
        before = len(self._scenarios)
        self._scenarios = [s for s in self._scenarios if s.id != scenario_id]
        removed = len(self._scenarios) != before
        if not removed:
            self._log.debug("Scenario not found", scenario_id=scenario_id)
        return removed

    def clear(self) -> None:
        self._scenarios = []
        self._total_generated = 0
