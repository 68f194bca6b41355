"""
Full Playwright test file generation.

Wraps translated steps into a runnable test file: header and imports, one
suite per analyzed page with a before-each navigation, and one test per
scenario with a commented expected-result scaffold.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

import structlog

from aiscout.models import AnalysisResult, ScenarioRecord
from aiscout.translator.dialects import (
    CodeDialect,
    DialectName,
    PythonDialect,
    TypeScriptDialect,
)
from aiscout.translator.translator import StepTranslator

logger = structlog.get_logger(__name__)

DEFAULT_SUITE_TITLE = "Web Application Tests"
GENERATOR_NAME = "AIScout"
INDENT = "    "


def script_filename(dialect: CodeDialect, now: datetime | None = None) -> str:
    """File name for a generated script, timestamped like scenario reports."""
    now = now or datetime.now()
    if dialect.name == DialectName.PYTHON:
        return f"test_{now:%Y%m%d_%H%M%S}{dialect.file_suffix}"
    return f"test-{now:%Y%m%d_%H%M%S}{dialect.file_suffix}"


class PlaywrightScriptWriter:
    """Render scenarios as a Playwright test file in the chosen dialect."""

    def __init__(self, dialect: CodeDialect | None = None) -> None:
        self._dialect = dialect or TypeScriptDialect()
        self._log = logger.bind(component="script_writer", dialect=self._dialect.name)

    def write(
        self,
        scenarios: Sequence[ScenarioRecord],
        analysis: AnalysisResult,
        generated_at: datetime | None = None,
    ) -> str:
        """Return the complete test file text.

        Args:
            scenarios: Scenarios to emit, in order
            analysis: Page analysis providing URL, title and inventory
            generated_at: Timestamp written to the header (defaults to now)
        """
        translator = StepTranslator(analysis.components, analysis.url, self._dialect)
        generated_at = generated_at or datetime.now()

        if isinstance(self._dialect, PythonDialect):
            lines = self._python_file(self._dialect, scenarios, analysis, translator, generated_at)
        else:
            lines = self._typescript_file(scenarios, analysis, translator, generated_at)

        self._log.info("Script generated", scenarios=len(scenarios), lines=len(lines), url=analysis.url)
        return "\n".join(lines) + "\n"

    def _header(self, analysis: AnalysisResult, generated_at: datetime) -> list[str]:
        comment = self._dialect.comment
        return [
            comment("Auto-generated Playwright Tests"),
            comment(f"Generated by {GENERATOR_NAME}"),
            comment(f"URL: {analysis.url}"),
            comment(f"Date: {generated_at:%Y-%m-%d %H:%M:%S}"),
            "",
        ]

    def _scenario_body(self, scenario: ScenarioRecord, translator: StepTranslator, indent: str) -> list[str]:
        comment = self._dialect.comment
        lines = [
            indent + comment(f"Priority: {scenario.priority.upper()}"),
            indent + comment(f"Category: {scenario.category}"),
            indent + comment(f"Description: {scenario.description}"),
            "",
        ]
        for step in scenario.steps:
            lines.append(indent + comment(f"Step {step.step_number}: {step.action}"))
            lines += [indent + line for line in translator.translate(step.action)]
            lines.append("")
        lines += [
            indent + comment(f"Expected Result: {scenario.expected_result}"),
            indent + comment("Add your verification assertions here"),
            indent + comment(f"Example: {self._dialect.verify_hint}"),
        ]
        return lines

    def _typescript_file(
        self,
        scenarios: Sequence[ScenarioRecord],
        analysis: AnalysisResult,
        translator: StepTranslator,
        generated_at: datetime,
    ) -> list[str]:
        quote = self._dialect.quote
        lines = self._header(analysis, generated_at)
        lines += [
            "import { test, expect } from '@playwright/test';",
            "",
            f"test.describe({quote(analysis.title or DEFAULT_SUITE_TITLE)}, () => {{",
            "  test.beforeEach(async ({ page }) => {",
            "    // Navigate to the application",
            f"    await page.goto({quote(analysis.url)});",
            "    // Wait for page to be fully loaded",
            "    await page.waitForLoadState('networkidle');",
            "  });",
            "",
        ]
        for index, scenario in enumerate(scenarios):
            if index:
                lines.append("")
            lines.append(f"  test({quote(scenario.title)}, async ({{ page }}) => {{")
            lines += self._scenario_body(scenario, translator, indent="    ")
            lines.append("  });")
        lines.append("});")
        return lines

    def _python_file(
        self,
        dialect: PythonDialect,
        scenarios: Sequence[ScenarioRecord],
        analysis: AnalysisResult,
        translator: StepTranslator,
        generated_at: datetime,
    ) -> list[str]:
        suite_title = analysis.title or DEFAULT_SUITE_TITLE
        class_name = "Test" + "".join(
            word.capitalize() for word in dialect.identifier(suite_title).split("_") if word
        )

        lines = self._header(analysis, generated_at)
        lines += [
            "import pytest",
            "from playwright.sync_api import Page, expect",
            "",
            f"BASE_URL = {dialect.quote(analysis.url)}",
            "",
            "",
            f"class {class_name}:",
            f"{INDENT}{dialect.quote(suite_title)}",
            "",
            f"{INDENT}@pytest.fixture(autouse=True)",
            f"{INDENT}def open_application(self, page: Page) -> None:",
            f"{INDENT * 2}# Navigate to the application",
            f"{INDENT * 2}page.goto(BASE_URL)",
            f"{INDENT * 2}# Wait for page to be fully loaded",
            f"{INDENT * 2}{dialect.wait_for_idle}",
        ]

        used_names: set[str] = set()
        for scenario in scenarios:
            name = dialect.identifier(scenario.title, prefix="test_")
            unique = name
            suffix = 2
            while unique in used_names:
                unique = f"{name}_{suffix}"
                suffix += 1
            used_names.add(unique)

            lines += [
                "",
                f"{INDENT}def {unique}(self, page: Page) -> None:",
                f"{INDENT * 2}{dialect.quote(scenario.title)}",
            ]
            lines += self._scenario_body(scenario, translator, indent=INDENT * 2)
        return lines
