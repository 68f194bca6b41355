"""
Pydantic models for AIScout.

Defines the component inventory produced by the extractor, page analysis
results, and the structured test scenarios produced by the scenario parser.
All records serialize with camelCase aliases.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ComponentType(StrEnum):
    """Closed set of component classifications."""

    BUTTON = "button"
    INPUT = "input"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    LABEL = "label"
    LINK = "link"
    IMAGE = "image"
    HEADING = "heading"
    FORM = "form"
    DIV = "div"
    SPAN = "span"
    OTHER = "other"


class Priority(StrEnum):
    """Scenario priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, dropping unset optional attributes."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class InventoryItem(_Record):
    """A single interactive element discovered on a page."""

    id: str = Field(description="Run-local identifier, component-{n}")
    type: ComponentType
    tag_name: str
    text: str | None = None
    role: str | None = None
    aria_label: str | None = None
    placeholder: str | None = None
    value: str | None = None
    name: str | None = None
    input_type: str | None = None
    href: str | None = None
    src: str | None = None
    alt: str | None = None
    class_name: str | None = None
    data_attributes: dict[str, str] = Field(default_factory=dict)
    path_locator: str = ""
    hierarchical_locator: str = ""

    @property
    def indexable_text(self) -> str:
        """First non-empty of text, placeholder and aria-label, case-folded."""
        for candidate in (self.text, self.placeholder, self.aria_label):
            if candidate:
                return candidate.casefold()
        return ""

    @property
    def preferred_locator(self) -> str:
        """Hierarchical locator, or the path locator when that is empty."""
        return self.hierarchical_locator or self.path_locator

    @property
    def label(self) -> str:
        """Human readable label used in prompts."""
        return self.text or self.placeholder or self.aria_label or self.name or "unnamed"


class Statistics(_Record):
    """Per-type component counts for one extraction run."""

    total_components: int = Field(ge=0)
    components_by_type: dict[ComponentType, int]

    @model_validator(mode="after")
    def check_counts(self) -> Statistics:
        """Every type is present and the counts add up to the total."""
        missing = set(ComponentType) - set(self.components_by_type)
        if missing:
            raise ValueError(f"components_by_type is missing {sorted(missing)}")
        if sum(self.components_by_type.values()) != self.total_components:
            raise ValueError("components_by_type does not sum to total_components")
        return self

    @classmethod
    def from_components(cls, components: list[InventoryItem] | tuple[InventoryItem, ...]) -> Statistics:
        """Count components by type, zero-filling absent types."""
        counts = {component_type: 0 for component_type in ComponentType}
        for component in components:
            counts[component.type] += 1
        return cls(total_components=len(components), components_by_type=counts)


class Inventory(_Record):
    """Output of one extraction run."""

    components: tuple[InventoryItem, ...] = ()
    statistics: Statistics

    def of_type(self, component_type: ComponentType) -> list[InventoryItem]:
        return [c for c in self.components if c.type == component_type]


class AnalysisResult(_Record):
    """Component inventory captured for one page."""

    url: str
    title: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    components: tuple[InventoryItem, ...] = ()
    statistics: Statistics

    @classmethod
    def from_inventory(cls, url: str, title: str, inventory: Inventory) -> AnalysisResult:
        return cls(
            url=url,
            title=title,
            components=inventory.components,
            statistics=inventory.statistics,
        )


class BatchAnalysisResult(_Record):
    """Results of analyzing several URLs; failures are reported per URL."""

    results: tuple[AnalysisResult, ...] = ()
    errors: tuple[dict[str, str], ...] = ()


class ScenarioStep(_Record):
    """One numbered step of a scenario."""

    step_number: int
    action: str


class ScenarioRecord(_Record):
    """A structured test scenario parsed from generated text."""

    id: str
    title: str
    description: str = ""
    steps: tuple[ScenarioStep, ...] = Field(min_length=1)
    expected_result: str
    priority: Priority = Priority.MEDIUM
    category: str = "Functional"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class GenerationResult(_Record):
    """Scenarios obtained from one text generation call."""

    scenarios: tuple[ScenarioRecord, ...] = ()
    total_generated: int = 0
    generation_time_ms: int = 0
    model: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
