"""Prompt construction for scenario generation."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from aiscout.models import ComponentType, InventoryItem

# Types that get example labels in the component summary
EXAMPLE_TYPES = frozenset({
    ComponentType.BUTTON,
    ComponentType.INPUT,
    ComponentType.LINK,
    ComponentType.FORM,
})

MAX_EXAMPLES = 3


class Language(StrEnum):
    """Language the scenarios are written in."""

    EN = "en"
    TR = "tr"

    @property
    def display_name(self) -> str:
        return "Turkish" if self is Language.TR else "English"


class Complexity(StrEnum):
    """Requested scenario complexity."""

    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class ScenarioOptions(BaseModel):
    """Knobs passed through to the generation prompt."""

    model_config = ConfigDict(frozen=True)

    max_scenarios: int = Field(default=5, ge=1, le=50)
    focus_areas: tuple[str, ...] = ()
    include_edge_cases: bool = False
    language: Language = Language.EN
    complexity: Complexity = Complexity.MODERATE


class ScenarioRequest(BaseModel):
    """Everything needed to ask for scenarios about one page."""

    model_config = ConfigDict(frozen=True)

    url: str
    title: str = ""
    components: tuple[InventoryItem, ...] = ()
    options: ScenarioOptions = Field(default_factory=ScenarioOptions)


def summarize_components(components: list[InventoryItem] | tuple[InventoryItem, ...]) -> str:
    """One line per component type in first-seen order, with examples for key types."""
    by_type: dict[ComponentType, list[InventoryItem]] = {}
    for component in components:
        by_type.setdefault(component.type, []).append(component)

    lines: list[str] = []
    for component_type, items in by_type.items():
        lines.append(f"- {component_type}: {len(items)} found")
        if component_type in EXAMPLE_TYPES:
            examples = ", ".join(item.label for item in items[:MAX_EXAMPLES])
            lines.append(f"  Examples: {examples}")
    return "\n".join(lines)


def build_prompt(request: ScenarioRequest) -> str:
    """Build the QA prompt sent to the text generation model."""
    options = request.options
    case_focus = (
        "Include edge cases and negative testing scenarios"
        if options.include_edge_cases
        else "Focus on positive test cases"
    )
    focus_line = f"\n- Focus on these areas: {', '.join(options.focus_areas)}" if options.focus_areas else ""

    return f"""You are an expert QA engineer specializing in automated testing.
Generate comprehensive test scenarios for a web application based on the following information:

**Application Details:**
- URL: {request.url}
- Page Title: {request.title}

**Available UI Components:**
{summarize_components(request.components)}

**Requirements:**
- Generate {options.max_scenarios} test scenarios
- Complexity level: {options.complexity}
- Language: {options.language.display_name}
- {case_focus}{focus_line}

**Output Format:**
Start each scenario with "Scenario N" and provide:
Title: clear and descriptive scenario title
Description: what the scenario tests
Steps: numbered, clear actions (1. 2. 3. ...)
Expected Result: what should happen
Priority: low, medium, high, or critical
Category: e.g. functional, usability, security

Generate realistic, actionable test scenarios that cover different aspects of the application.
Format each scenario clearly with proper structure.

---

Begin generating test scenarios:"""
