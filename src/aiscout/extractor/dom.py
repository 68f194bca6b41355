"""
DOM capability layer for component extraction.

The extractor only needs a small set of read-only DOM capabilities. They are
described by the DomNode and DomDocument protocols and provided by two hosts:

- HtmlDocument: static HTML parsed with BeautifulSoup, selector matching via
  soupsieve, visibility derived from inline styles and the hidden attribute.
- SnapshotDocument: a JSON tree serialized from a live browser page, carrying
  computed styles, live property values and pre-evaluated selector matches.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import urljoin

import soupsieve
from bs4 import BeautifulSoup, Tag

from aiscout.errors import InvalidSelectorError

BLOCK_TAGS = frozenset({
    "address", "article", "aside", "body", "div", "fieldset", "footer", "form",
    "h1", "h2", "h3", "h4", "h5", "h6", "header", "html", "main", "nav", "ol",
    "p", "section", "table", "ul",
})

# Elements that are never rendered regardless of styling
NON_RENDERED_TAGS = frozenset({"head", "script", "style", "template", "noscript", "title", "meta", "link"})


@dataclass(frozen=True)
class ComputedStyle:
    """The two style properties that decide whether an element is rendered."""

    display: str = "inline"
    visibility: str = "visible"

    @property
    def is_rendered(self) -> bool:
        return self.display != "none" and self.visibility != "hidden"


class DomNode(Protocol):
    """Read-only element capabilities used by the extractor."""

    @property
    def tag_name(self) -> str: ...

    @property
    def attributes(self) -> dict[str, str]: ...

    @property
    def parent(self) -> DomNode | None: ...

    @property
    def children(self) -> list[DomNode]: ...

    @property
    def text_content(self) -> str: ...

    @property
    def computed_style(self) -> ComputedStyle: ...

    @property
    def previous_sibling_of_same_tag(self) -> DomNode | None: ...

    def matches(self, selector: str) -> bool:
        """Test the element against a CSS selector; raises InvalidSelectorError."""
        ...

    def dom_property(self, name: str) -> str | None:
        """Live property value (value, type, href, src)."""
        ...


class DomDocument(Protocol):
    """A document that can be walked in document order."""

    @property
    def title(self) -> str: ...

    @property
    def root(self) -> DomNode | None: ...

    def iter_elements(self) -> Iterator[DomNode]: ...


def parse_inline_style(style: str) -> dict[str, str]:
    """Parse a style attribute into lowercase property -> value."""
    declarations: dict[str, str] = {}
    for declaration in style.split(";"):
        prop, sep, value = declaration.partition(":")
        if not sep:
            continue
        value = value.replace("!important", "").strip().lower()
        if prop.strip() and value:
            declarations[prop.strip().lower()] = value
    return declarations


class HtmlNode:
    """DomNode backed by a BeautifulSoup tag."""

    __slots__ = ("_tag", "_base_url")

    def __init__(self, tag: Tag, base_url: str | None = None) -> None:
        self._tag = tag
        self._base_url = base_url

    def __eq__(self, other: object) -> bool:
        return isinstance(other, HtmlNode) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"HtmlNode(<{self.tag_name}>)"

    @property
    def tag_name(self) -> str:
        return self._tag.name.lower()

    @property
    def attributes(self) -> dict[str, str]:
        # bs4 returns multi-valued attributes such as class as lists
        return {
            name.lower(): " ".join(value) if isinstance(value, list) else str(value)
            for name, value in self._tag.attrs.items()
        }

    @property
    def parent(self) -> HtmlNode | None:
        parent = self._tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return HtmlNode(parent, self._base_url)

    @property
    def children(self) -> list[HtmlNode]:
        return [HtmlNode(child, self._base_url) for child in self._tag.children if isinstance(child, Tag)]

    @property
    def text_content(self) -> str:
        return self._tag.get_text()

    @property
    def previous_sibling_of_same_tag(self) -> HtmlNode | None:
        sibling = self._tag.find_previous_sibling(self._tag.name)
        return HtmlNode(sibling, self._base_url) if isinstance(sibling, Tag) else None

    @property
    def computed_style(self) -> ComputedStyle:
        return ComputedStyle(display=self._display(), visibility=self._visibility())

    def _display(self) -> str:
        attrs = self.attributes
        declared = parse_inline_style(attrs.get("style", "")).get("display")
        if declared:
            return declared
        if "hidden" in attrs or self.tag_name in NON_RENDERED_TAGS:
            return "none"
        if self.tag_name == "input" and attrs.get("type", "").strip().lower() == "hidden":
            return "none"
        return "block" if self.tag_name in BLOCK_TAGS else "inline"

    def _visibility(self) -> str:
        # visibility is inherited: nearest declaration on self or an ancestor wins
        node: HtmlNode | None = self
        while node is not None:
            declared = parse_inline_style(node.attributes.get("style", "")).get("visibility")
            if declared:
                return declared
            node = node.parent
        return "visible"

    def matches(self, selector: str) -> bool:
        try:
            return soupsieve.match(selector, self._tag)
        except soupsieve.SelectorSyntaxError as e:
            raise InvalidSelectorError(selector, str(e).splitlines()[0]) from e

    def dom_property(self, name: str) -> str | None:
        attrs = self.attributes
        tag = self.tag_name
        match name:
            case "value":
                if tag == "textarea":
                    return self._tag.get_text()
                if tag == "select":
                    return self._selected_option_value()
                return attrs.get("value")
            case "type":
                if tag != "input":
                    return attrs.get("type")
                return attrs.get("type", "text").strip().lower() or "text"
            case "href" | "src":
                raw = attrs.get(name)
                if raw and self._base_url:
                    return urljoin(self._base_url, raw)
                return raw
            case _:
                return attrs.get(name)

    def _selected_option_value(self) -> str | None:
        options = self._tag.find_all("option")
        if not options:
            return None
        selected = next((o for o in options if o.has_attr("selected")), options[0])
        value = selected.get("value")
        return str(value) if value is not None else selected.get_text().strip()


class HtmlDocument:
    """DomDocument for static HTML text."""

    def __init__(self, html: str, base_url: str | None = None, parser: str = "html.parser") -> None:
        self._soup = BeautifulSoup(html, parser)
        self._base_url = base_url

    @property
    def title(self) -> str:
        title = self._soup.title
        return title.get_text().strip() if title is not None else ""

    @property
    def root(self) -> HtmlNode | None:
        first = self._soup.find(True)
        return HtmlNode(first, self._base_url) if isinstance(first, Tag) else None

    def iter_elements(self) -> Iterator[HtmlNode]:
        for tag in self._soup.find_all(True):
            yield HtmlNode(tag, self._base_url)


class SnapshotNode:
    """DomNode backed by one element of a serialized page snapshot."""

    def __init__(
        self,
        data: dict[str, Any],
        parent: SnapshotNode | None,
        invalid_selectors: dict[str, str],
    ) -> None:
        self._data = data
        self._parent = parent
        self._invalid = invalid_selectors
        self._attributes = {str(k).lower(): str(v) for k, v in (data.get("attributes") or {}).items()}
        self._matched = frozenset(data.get("matched") or ())
        self._previous_same_tag: SnapshotNode | None = None
        self._content: list[SnapshotNode | str] = []

    @classmethod
    def build_tree(cls, data: dict[str, Any], invalid_selectors: dict[str, str]) -> SnapshotNode:
        """Build the node tree for ``data`` without recursing per level."""
        root = cls(data, None, invalid_selectors)
        pending = [root]
        while pending:
            node = pending.pop()
            last_by_tag: dict[str, SnapshotNode] = {}
            for child in node._data.get("children") or ():
                if isinstance(child, str):
                    node._content.append(child)
                    continue
                child_node = cls(child, node, invalid_selectors)
                child_node._previous_same_tag = last_by_tag.get(child_node.tag_name)
                last_by_tag[child_node.tag_name] = child_node
                node._content.append(child_node)
                pending.append(child_node)
        return root

    def __repr__(self) -> str:
        return f"SnapshotNode(<{self.tag_name}>)"

    @property
    def tag_name(self) -> str:
        return str(self._data.get("tag", "")).lower()

    @property
    def attributes(self) -> dict[str, str]:
        return dict(self._attributes)

    @property
    def parent(self) -> SnapshotNode | None:
        return self._parent

    @property
    def children(self) -> list[SnapshotNode]:
        return [c for c in self._content if isinstance(c, SnapshotNode)]

    @property
    def text_content(self) -> str:
        parts: list[str] = []
        pending: list[SnapshotNode | str] = [self]
        while pending:
            item = pending.pop()
            if isinstance(item, str):
                parts.append(item)
            else:
                pending.extend(reversed(item._content))
        return "".join(parts)

    @property
    def previous_sibling_of_same_tag(self) -> SnapshotNode | None:
        return self._previous_same_tag

    @property
    def computed_style(self) -> ComputedStyle:
        return ComputedStyle(
            display=str(self._data.get("display") or "inline"),
            visibility=str(self._data.get("visibility") or "visible"),
        )

    def matches(self, selector: str) -> bool:
        if selector in self._invalid:
            raise InvalidSelectorError(selector, self._invalid[selector])
        return selector in self._matched

    def dom_property(self, name: str) -> str | None:
        properties = self._data.get("properties") or {}
        if name in properties and properties[name] is not None:
            return str(properties[name])
        return self._attributes.get(name)

    def walk(self) -> Iterator[SnapshotNode]:
        """Yield this node and its descendants in document order."""
        pending = [self]
        while pending:
            node = pending.pop()
            yield node
            pending.extend(reversed(node.children))


class SnapshotDocument:
    """DomDocument rebuilt from the JSON returned by the page snapshot script."""

    def __init__(self, data: dict[str, Any]) -> None:
        self._title = str(data.get("title") or "")
        self.url = str(data.get("url") or "")
        invalid = {
            str(entry.get("selector")): str(entry.get("error", ""))
            for entry in data.get("invalidSelectors") or ()
        }
        root = data.get("root")
        self._root = SnapshotNode.build_tree(root, invalid) if root else None

    @property
    def title(self) -> str:
        return self._title

    @property
    def root(self) -> SnapshotNode | None:
        return self._root

    def iter_elements(self) -> Iterator[SnapshotNode]:
        if self._root is not None:
            yield from self._root.walk()
