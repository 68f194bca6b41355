"""
Test scenario generation and parsing.

Provides:
- ScenarioTextParser: generated text to ScenarioRecord objects
- build_prompt / summarize_components: generation prompt
- ScenarioGenerator: prompt, generate, parse
- ScenarioCollection: newest-first scenario store
"""

from aiscout.scenarios.collection import ScenarioCollection
from aiscout.scenarios.demo import DEMO_MODEL, DEMO_SCENARIO_TEXT, StaticTextGenerator
from aiscout.scenarios.generator import ScenarioGenerator, format_scenarios_as_text, scenario_filename
from aiscout.scenarios.parser import ScenarioTextParser, placeholder_scenario, split_segments
from aiscout.scenarios.prompt import (
    Complexity,
    Language,
    ScenarioOptions,
    ScenarioRequest,
    build_prompt,
    summarize_components,
)

__all__ = [
    "Complexity",
    "DEMO_MODEL",
    "DEMO_SCENARIO_TEXT",
    "Language",
    "ScenarioCollection",
    "ScenarioGenerator",
    "ScenarioOptions",
    "ScenarioRequest",
    "ScenarioTextParser",
    "StaticTextGenerator",
    "build_prompt",
    "format_scenarios_as_text",
    "placeholder_scenario",
    "scenario_filename",
    "split_segments",
    "summarize_components",
]
