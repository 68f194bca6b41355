"""
Target languages for generated Playwright code.

A dialect knows how to spell each automation action, comment and string
literal in its language, and how to lay out the surrounding test file.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from enum import StrEnum


class DialectName(StrEnum):
    """Supported output languages."""

    TYPESCRIPT = "typescript"
    PYTHON = "python"


class CodeDialect(ABC):
    """Base dialect; subclasses provide the templates."""

    name: DialectName
    comment_prefix: str
    file_suffix: str

    # Action templates; {locator} and {value} are already quoted literals
    goto: str
    wait_for_idle: str
    click: str
    fill: str
    select_option: str
    check: str
    wait_timeout: str
    verify_hint: str

    # Placeholder code shown (commented out) when no element was resolved
    click_hint: str
    fill_hint: str
    select_hint: str
    check_hint: str

    @abstractmethod
    def quote(self, value: str) -> str:
        """Render ``value`` as a string literal."""
        pass

    def comment(self, text: str) -> str:
        # Keep generated comments on one line
        return f"{self.comment_prefix} {' '.join(text.split())}".rstrip()


class TypeScriptDialect(CodeDialect):
    """@playwright/test specs."""

    name = DialectName.TYPESCRIPT
    comment_prefix = "//"
    file_suffix = ".spec.ts"

    goto = "await page.goto({url});"
    wait_for_idle = "await page.waitForLoadState('networkidle');"
    click = "await page.locator({locator}).click();"
    fill = "await page.locator({locator}).fill({value});"
    select_option = "await page.locator({locator}).selectOption({{ index: {index} }});"
    check = "await page.locator({locator}).check();"
    wait_timeout = "await page.waitForTimeout({timeout});"
    verify_hint = "await expect(page.locator('selector')).toBeVisible();"

    click_hint = "await page.locator('selector').click();"
    fill_hint = "await page.locator('input selector').fill({value});"
    select_hint = "await page.locator('select').selectOption('value');"
    check_hint = "await page.locator('input[type=\"checkbox\"]').check();"

    def quote(self, value: str) -> str:
        escaped = (
            value.replace("\\", "\\\\")
            .replace("'", "\\'")
            .replace("\n", "\\n")
            .replace("\r", "\\r")
        )
        return f"'{escaped}'"


class PythonDialect(CodeDialect):
    """pytest-playwright tests using the sync API."""

    name = DialectName.PYTHON
    comment_prefix = "#"
    file_suffix = ".py"

    goto = "page.goto({url})"
    wait_for_idle = 'page.wait_for_load_state("networkidle")'
    click = "page.locator({locator}).click()"
    fill = "page.locator({locator}).fill({value})"
    select_option = "page.locator({locator}).select_option(index={index})"
    check = "page.locator({locator}).check()"
    wait_timeout = "page.wait_for_timeout({timeout})"
    verify_hint = 'expect(page.locator("selector")).to_be_visible()'

    click_hint = 'page.locator("selector").click()'
    fill_hint = 'page.locator("input selector").fill({value})'
    select_hint = 'page.locator("select").select_option("value")'
    check_hint = "page.locator('input[type=\"checkbox\"]').check()"

    def quote(self, value: str) -> str:
        return json.dumps(value, ensure_ascii=False)

    @staticmethod
    def identifier(text: str, prefix: str = "") -> str:
        """Turn free text into a valid Python identifier."""
        slug = re.sub(r"\W+", "_", text.casefold()).strip("_")
        identifier = f"{prefix}{slug}" if prefix else slug
        if not identifier or identifier[0].isdigit():
            identifier = f"_{identifier}"
        return identifier


DIALECTS: dict[DialectName, CodeDialect] = {
    DialectName.TYPESCRIPT: TypeScriptDialect(),
    DialectName.PYTHON: PythonDialect(),
}


def get_dialect(name: DialectName | str) -> CodeDialect:
    return DIALECTS[DialectName(name)]
