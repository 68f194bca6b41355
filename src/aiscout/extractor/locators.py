"""
Locator synthesis for discovered components.

Two locator strings are produced per element:
- a path locator (XPath style), indexed among same-tag siblings
- a hierarchical CSS locator, tag plus up to two classes per level

An element id always takes precedence over the structural form.
"""

from __future__ import annotations

from aiscout.extractor.dom import DomNode

MAX_HIERARCHY_DEPTH = 5
MAX_CLASSES_PER_LEVEL = 2


def _element_id(node: DomNode) -> str:
    return node.attributes.get("id", "")


def _same_tag_index(node: DomNode) -> int:
    """Count of preceding element siblings with the same tag."""
    count = 0
    sibling = node.previous_sibling_of_same_tag
    while sibling is not None:
        count += 1
        sibling = sibling.previous_sibling_of_same_tag
    return count


def path_locator(node: DomNode) -> str:
    """Build an XPath-style locator for ``node``.

    ``//*[@id="x"]`` when the element has an id, otherwise the absolute
    path from the root with ``[k]`` appended where the element is not the
    first of its tag among its siblings.
    """
    element_id = _element_id(node)
    if element_id:
        return f'//*[@id="{element_id}"]'

    segments: list[str] = []
    current: DomNode | None = node
    while current is not None:
        index = _same_tag_index(current)
        segment = current.tag_name
        if index:
            segment = f"{segment}[{index + 1}]"
        segments.append(segment)
        current = current.parent

    if not segments:
        return ""
    return "/" + "/".join(reversed(segments))


def hierarchical_locator(node: DomNode, max_depth: int = MAX_HIERARCHY_DEPTH) -> str:
    """Build a CSS child-combinator locator for ``node``.

    ``#x`` when the element has an id. Otherwise at most ``max_depth``
    levels starting from the element itself; farther ancestors are dropped.
    """
    element_id = _element_id(node)
    if element_id:
        return f"#{element_id}"

    levels: list[str] = []
    current: DomNode | None = node
    while current is not None and len(levels) < max_depth:
        selector = current.tag_name
        classes = current.attributes.get("class", "").split()[:MAX_CLASSES_PER_LEVEL]
        if classes:
            selector += "." + ".".join(classes)
        levels.append(selector)
        current = current.parent

    return " > ".join(reversed(levels))
