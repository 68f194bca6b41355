"""Map keyword cues in step text to a locator from the component inventory."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from aiscout.models import ComponentType, InventoryItem
from aiscout.translator.vocabulary import RESOLVER_KEYWORDS

logger = structlog.get_logger(__name__)


class SelectorResolver:
    """
    Resolve a step to the locator of the best-matching inventory item.

    For each domain keyword (in vocabulary order) that occurs in the step
    text, the first item whose indexable text contains the same keyword and
    whose type matches the requested type wins. Without a keyword match the
    first item of the requested type is used.
    """

    def __init__(
        self,
        components: Sequence[InventoryItem],
        keywords: Sequence[str] = RESOLVER_KEYWORDS,
    ) -> None:
        self._components = tuple(components)
        self._keywords = tuple(keywords)
        self._log = logger.bind(component="selector_resolver")

    def resolve(self, step_text: str, preferred_type: ComponentType | None = None) -> str | None:
        """Return a locator for ``step_text`` or None when nothing fits."""
        item = self.resolve_item(step_text, preferred_type)
        return item.preferred_locator if item is not None else None

    def resolve_item(
        self,
        step_text: str,
        preferred_type: ComponentType | None = None,
    ) -> InventoryItem | None:
        text = step_text.casefold()
        candidates = [
            c for c in self._components
            if preferred_type is None or c.type == preferred_type
        ]

        for keyword in self._keywords:
            if keyword not in text:
                continue
            for component in candidates:
                if keyword in component.indexable_text:
                    self._log.debug("Resolved by keyword", keyword=keyword, component_id=component.id)
                    return component

        if preferred_type is not None and candidates:
            self._log.debug("Resolved by type", type=preferred_type, component_id=candidates[0].id)
            return candidates[0]

        return None
