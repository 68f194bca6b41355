"""
Natural-language step to Playwright code translation.

Each step is classified by keyword cues, the target element is resolved
against the inventory, and one or more lines of code are emitted. Steps that
cannot be mapped confidently become comment-only placeholders; translation
itself never fails on step content.
"""

from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import urlparse

import structlog

from aiscout.errors import TranslationError
from aiscout.models import InventoryItem
from aiscout.translator.dialects import CodeDialect, TypeScriptDialect
from aiscout.translator.resolver import SelectorResolver
from aiscout.translator.vocabulary import (
    ACTION_TARGET_TYPES,
    SELECT_OPTION_INDEX,
    WAIT_TIMEOUT_MS,
    ActionCategory,
    classify_step,
    fill_value,
)

logger = structlog.get_logger(__name__)

TODO_CLICK = "TODO: Find and click the correct element"
TODO_FILL = "TODO: Find the input field and enter value"
TODO_SELECT = "TODO: Select an option from dropdown"
TODO_CHECK = "TODO: Check the checkbox"
TODO_UNKNOWN = "TODO: Implement this step"
VERIFY_COMMENT = "Verification step"


def validate_base_url(base_url: str | None) -> str:
    """Require an absolute http(s) URL with a host, or a file URL."""
    if not base_url or not base_url.strip():
        raise TranslationError("A base URL is required for navigation steps")
    parsed = urlparse(base_url.strip())
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return base_url.strip()
    if parsed.scheme == "file" and parsed.path:
        return base_url.strip()
    raise TranslationError(f"Invalid base URL: {base_url!r}")


class StepTranslator:
    """Translate scenario steps into Playwright code lines."""

    def __init__(
        self,
        components: Sequence[InventoryItem] | None,
        base_url: str | None,
        dialect: CodeDialect | None = None,
    ) -> None:
        if components is None:
            raise TranslationError("A component inventory is required to translate steps")
        self._base_url = validate_base_url(base_url)
        self._dialect = dialect or TypeScriptDialect()
        self._resolver = SelectorResolver(components)
        self._log = logger.bind(component="step_translator", dialect=self._dialect.name)

    @property
    def dialect(self) -> CodeDialect:
        return self._dialect

    def translate(self, step_text: str) -> list[str]:
        """Return the code lines for one step, in order."""
        category = classify_step(step_text)
        self._log.debug("Step classified", step=step_text, category=category)

        match category:
            case ActionCategory.NAVIGATE:
                return self._navigate()
            case ActionCategory.CLICK:
                return self._click(step_text)
            case ActionCategory.FILL:
                return self._fill(step_text)
            case ActionCategory.SELECT:
                return self._select(step_text)
            case ActionCategory.CHECK:
                return self._check(step_text)
            case ActionCategory.VERIFY:
                return [self._comment(VERIFY_COMMENT), self._comment(self._dialect.verify_hint)]
            case ActionCategory.WAIT:
                return [self._dialect.wait_timeout.format(timeout=WAIT_TIMEOUT_MS)]
            case _:
                return [self._comment(step_text), self._comment(TODO_UNKNOWN)]

    def _comment(self, text: str) -> str:
        return self._dialect.comment(text)

    def _locator(self, step_text: str, category: ActionCategory) -> str | None:
        locator = self._resolver.resolve(step_text, ACTION_TARGET_TYPES[category])
        if locator is None:
            self._log.debug("No element resolved", step=step_text, category=category)
            return None
        return self._dialect.quote(locator)

    def _navigate(self) -> list[str]:
        return [
            self._dialect.goto.format(url=self._dialect.quote(self._base_url)),
            self._dialect.wait_for_idle,
        ]

    def _click(self, step_text: str) -> list[str]:
        locator = self._locator(step_text, ActionCategory.CLICK)
        if locator is None:
            return [self._comment(TODO_CLICK), self._comment(self._dialect.click_hint)]
        return [self._dialect.click.format(locator=locator), self._dialect.wait_for_idle]

    def _fill(self, step_text: str) -> list[str]:
        value = self._dialect.quote(fill_value(step_text))
        locator = self._locator(step_text, ActionCategory.FILL)
        if locator is None:
            return [self._comment(TODO_FILL), self._comment(self._dialect.fill_hint.format(value=value))]
        return [self._dialect.fill.format(locator=locator, value=value)]

    def _select(self, step_text: str) -> list[str]:
        locator = self._locator(step_text, ActionCategory.SELECT)
        if locator is None:
            return [self._comment(TODO_SELECT), self._comment(self._dialect.select_hint)]
        return [self._dialect.select_option.format(locator=locator, index=SELECT_OPTION_INDEX)]

    def _check(self, step_text: str) -> list[str]:
        locator = self._locator(step_text, ActionCategory.CHECK)
        if locator is None:
            return [self._comment(TODO_CHECK), self._comment(self._dialect.check_hint)]
        return [self._dialect.check.format(locator=locator)]
