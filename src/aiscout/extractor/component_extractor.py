"""
Component extraction from a DOM document.

Walks the document once in document order, keeps interactive candidates,
applies exclusion selectors and the visibility filter, classifies each
element and synthesizes its locators.
"""

from __future__ import annotations

import itertools

import structlog

from aiscout.errors import ExtractionError, InvalidSelectorError
from aiscout.extractor.dom import DomDocument, DomNode
from aiscout.extractor.locators import hierarchical_locator, path_locator
from aiscout.models import ComponentType, Inventory, InventoryItem, Statistics

logger = structlog.get_logger(__name__)

MAX_TEXT_LENGTH = 100

CANDIDATE_TAGS = frozenset({
    "button", "input", "textarea", "select", "a", "label", "img",
    "h1", "h2", "h3", "h4", "h5", "h6", "form",
})

CANDIDATE_ROLES = frozenset({"button", "link", "checkbox", "radio"})

# An explicit role overrides the tag default
ROLE_TYPES: dict[str, ComponentType] = {
    "button": ComponentType.BUTTON,
    "link": ComponentType.LINK,
    "checkbox": ComponentType.CHECKBOX,
    "radio": ComponentType.RADIO,
    "textbox": ComponentType.INPUT,
    "searchbox": ComponentType.INPUT,
    "combobox": ComponentType.SELECT,
    "listbox": ComponentType.SELECT,
    "img": ComponentType.IMAGE,
    "heading": ComponentType.HEADING,
    "form": ComponentType.FORM,
}

TAG_TYPES: dict[str, ComponentType] = {
    "button": ComponentType.BUTTON,
    "textarea": ComponentType.TEXTAREA,
    "select": ComponentType.SELECT,
    "label": ComponentType.LABEL,
    "a": ComponentType.LINK,
    "img": ComponentType.IMAGE,
    "h1": ComponentType.HEADING,
    "h2": ComponentType.HEADING,
    "h3": ComponentType.HEADING,
    "h4": ComponentType.HEADING,
    "h5": ComponentType.HEADING,
    "h6": ComponentType.HEADING,
    "form": ComponentType.FORM,
    "div": ComponentType.DIV,
    "span": ComponentType.SPAN,
}

INPUT_TYPES: dict[str, ComponentType] = {
    "checkbox": ComponentType.CHECKBOX,
    "radio": ComponentType.RADIO,
}

# Tag-appropriate attributes of interest
PLACEHOLDER_TAGS = frozenset({"input", "textarea"})
VALUE_TAGS = frozenset({"input", "textarea", "select"})


def _role(node: DomNode) -> str:
    return node.attributes.get("role", "").strip().lower()


def _input_type(node: DomNode) -> str:
    return (node.dom_property("type") or "text").strip().lower()


def is_candidate(node: DomNode) -> bool:
    """Whether the element belongs to the interactive candidate set."""
    return (
        node.tag_name in CANDIDATE_TAGS
        or _role(node) in CANDIDATE_ROLES
        or "onclick" in node.attributes
    )


def classify(node: DomNode) -> ComponentType:
    """Map an element to its ComponentType; first matching rule wins."""
    role_type = ROLE_TYPES.get(_role(node))
    if role_type is not None:
        return role_type
    if node.tag_name == "input":
        return INPUT_TYPES.get(_input_type(node), ComponentType.INPUT)
    return TAG_TYPES.get(node.tag_name, ComponentType.OTHER)


def _non_empty(value: str | None) -> str | None:
    return value if value else None


class ComponentExtractor:
    """
    Extract an inventory of interactive components from a document.

    Extraction is read-only and idempotent: two runs over an unchanged
    document yield the same items with the same ids and locators.
    """

    def __init__(
        self,
        exclude_selectors: list[str] | tuple[str, ...] = (),
        include_hidden: bool = False,
    ) -> None:
        self._exclude_selectors = tuple(exclude_selectors)
        self._include_hidden = include_hidden
        self._log = logger.bind(component="component_extractor")

    def extract(self, document: DomDocument | None) -> Inventory:
        """Walk ``document`` and return its components with per-type counts."""
        if document is None:
            raise ExtractionError("No document available for component extraction")

        ids = itertools.count()
        components: list[InventoryItem] = []
        skipped_hidden = 0
        skipped_excluded = 0

        for node in document.iter_elements():
            if not is_candidate(node):
                continue
            if self._is_excluded(node):
                skipped_excluded += 1
                continue
            if not self._include_hidden and not node.computed_style.is_rendered:
                skipped_hidden += 1
                continue
            components.append(self._build_item(node, f"component-{next(ids)}"))

        statistics = Statistics.from_components(components)
        self._log.info(
            "Extraction complete",
            components=statistics.total_components,
            skipped_hidden=skipped_hidden,
            skipped_excluded=skipped_excluded,
        )
        return Inventory(components=tuple(components), statistics=statistics)

    def _is_excluded(self, node: DomNode) -> bool:
        for selector in self._exclude_selectors:
            try:
                if node.matches(selector):
                    return True
            except InvalidSelectorError as e:
                self._log.debug("Ignoring invalid exclusion selector", selector=selector, error=str(e))
        return False

    def _build_item(self, node: DomNode, item_id: str) -> InventoryItem:
        attrs = node.attributes
        tag = node.tag_name
        text = node.text_content.strip()[:MAX_TEXT_LENGTH]

        return InventoryItem(
            id=item_id,
            type=classify(node),
            tag_name=tag,
            text=_non_empty(text),
            role=_non_empty(attrs.get("role")),
            aria_label=_non_empty(attrs.get("aria-label")),
            placeholder=_non_empty(attrs.get("placeholder")) if tag in PLACEHOLDER_TAGS else None,
            value=_non_empty(node.dom_property("value")) if tag in VALUE_TAGS else None,
            name=_non_empty(attrs.get("name")) if tag in VALUE_TAGS else None,
            input_type=_input_type(node) if tag == "input" else None,
            href=_non_empty(node.dom_property("href")) if tag == "a" else None,
            src=_non_empty(node.dom_property("src")) if tag == "img" else None,
            alt=_non_empty(attrs.get("alt")) if tag == "img" else None,
            class_name=_non_empty(attrs.get("class")),
            data_attributes={k: v for k, v in attrs.items() if k.startswith("data-")},
            path_locator=path_locator(node),
            hierarchical_locator=hierarchical_locator(node),
        )
