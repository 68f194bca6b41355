"""
AIScout.

Discovers interactive components on web pages, turns AI generated test
scenarios into structured records and translates them into Playwright tests.
"""

__version__ = "1.0.0"
__author__ = "Olib AI"

from aiscout.errors import (
    AIScoutError,
    ExtractionError,
    GenerationError,
    InvalidSelectorError,
    PageCaptureError,
    TranslationError,
)
from aiscout.extractor import ComponentExtractor, HtmlDocument, PageAnalyzer, analyze_html
from aiscout.models import (
    AnalysisResult,
    ComponentType,
    Inventory,
    InventoryItem,
    Priority,
    ScenarioRecord,
    ScenarioStep,
    Statistics,
)
from aiscout.scenarios import ScenarioCollection, ScenarioGenerator, ScenarioTextParser
from aiscout.translator import PlaywrightScriptWriter, StepTranslator

__all__ = [
    "AIScoutError",
    "AnalysisResult",
    "ComponentExtractor",
    "ComponentType",
    "ExtractionError",
    "GenerationError",
    "HtmlDocument",
    "InvalidSelectorError",
    "Inventory",
    "InventoryItem",
    "PageAnalyzer",
    "PageCaptureError",
    "PlaywrightScriptWriter",
    "Priority",
    "ScenarioCollection",
    "ScenarioGenerator",
    "ScenarioRecord",
    "ScenarioStep",
    "ScenarioTextParser",
    "Statistics",
    "StepTranslator",
    "TranslationError",
    "__version__",
]
