"""Tests for the in-memory scenario collection."""

from __future__ import annotations

from aiscout.models import ScenarioRecord, ScenarioStep
from aiscout.scenarios import ScenarioCollection


def _scenario(scenario_id: str) -> ScenarioRecord:
    return ScenarioRecord(
        id=scenario_id,
        title=f"Scenario {scenario_id}",
        steps=(ScenarioStep(step_number=1, action="Open the page"),),
        expected_result="Page opens",
    )


class TestScenarioCollection:
    """Test ScenarioCollection."""

    def test_newest_batch_first(self) -> None:
        """Added batches are placed ahead of older scenarios."""
        collection = ScenarioCollection([_scenario("a")])
        collection.add([_scenario("b"), _scenario("c")])
        assert [s.id for s in collection] == ["b", "c", "a"]
        assert len(collection) == 3
        assert collection.total_generated == 3

    def test_get_and_contains(self) -> None:
        """Scenarios are looked up by id."""
        collection = ScenarioCollection([_scenario("a")])
        assert "a" in collection
        assert "z" not in collection
        assert collection.get("a") is not None
        assert collection.get("z") is None

    def test_remove(self) -> None:
        """Removal reports whether a scenario was found."""
        collection = ScenarioCollection([_scenario("a"), _scenario("b")])
        assert collection.remove("a") is True
        assert collection.remove("a") is False
        assert [s.id for s in collection] == ["b"]
        # Removal does not rewrite history
        assert collection.total_generated == 2

    def test_clear(self) -> None:
        """Clearing empties the collection and resets the counter."""
        collection = ScenarioCollection([_scenario("a")])
        collection.clear()
        assert len(collection) == 0
        assert collection.total_generated == 0
