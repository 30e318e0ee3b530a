"""
ProfileTrace DOM adapter - one queryable capability for documents and elements.

The matcher never touches BeautifulSoup directly. It only needs something that
answers `query_first(selector)` and `query_all(selector)`; `Node` provides that
for a parsed document and for any element inside it, so a whole page and a
single modal subtree are interchangeable roots.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from bs4 import BeautifulSoup, Tag


@runtime_checkable
class Queryable(Protocol):
    """Anything that can be searched with CSS selectors."""

    def query_first(self, selector: str) -> Node | None: ...

    def query_all(self, selector: str) -> list[Node]: ...


class Node:
    """Thin wrapper around a BeautifulSoup tag (or the soup itself)."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag):
        self._tag = tag

    def __repr__(self) -> str:
        return f"Node(<{self.tag_name}>)"

    @property
    def tag(self) -> Tag:
        return self._tag

    @property
    def tag_name(self) -> str:
        return (self._tag.name or "").lower()

    @property
    def key(self) -> int:
        """Identity key; two wrappers of the same element share it."""
        return id(self._tag)

    @property
    def is_document(self) -> bool:
        return isinstance(self._tag, BeautifulSoup)

    def query_first(self, selector: str) -> Node | None:
        found = self._tag.select_one(selector)
        return Node(found) if found is not None else None

    def query_all(self, selector: str) -> list[Node]:
        return [Node(found) for found in self._tag.select(selector)]

    def text(self) -> str:
        """Concatenated text of all descendants (like DOM textContent)."""
        return self._tag.get_text()

    def attr(self, name: str) -> str | None:
        value = self._tag.get(name)
        if value is None:
            return None
        # bs4 returns multi-valued attributes (class, rel) as lists
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def closest(self, tag_name: str) -> Node | None:
        """Nearest ancestor-or-self with the given tag name."""
        if self.tag_name == tag_name:
            return self
        parent = self._tag.find_parent(tag_name)
        return Node(parent) if parent is not None else None

    def outer_html(self) -> str:
        return str(self._tag)

    def path(self) -> str | None:
        """Diagnostic locator: tag#id / tag.class:nth-of-type chain up to the root."""
        if self.is_document:
            return None

        segments: list[str] = []
        current: Tag | None = self._tag
        while current is not None and not isinstance(current, BeautifulSoup):
            segment = current.name.lower()
            element_id = current.get("id")
            if element_id:
                segments.insert(0, f"{segment}#{element_id}")
                break

            classes = [c for c in (current.get("class") or []) if c]
            if classes:
                segment += "." + ".".join(classes[:3])

            parent = current.parent
            if parent is not None:
                same_tag = parent.find_all(current.name, recursive=False)
                if len(same_tag) > 1:
                    position = next(
                        (i for i, sibling in enumerate(same_tag) if sibling is current), -1
                    )
                    if position >= 0:
                        segment += f":nth-of-type({position + 1})"

            segments.insert(0, segment)
            current = parent

        return " > ".join(segments) if segments else None


def parse_html(html: str) -> Node:
    """Parse raw HTML into a document node."""
    return Node(BeautifulSoup(html or "", "lxml"))


def as_node(root: Node | Tag) -> Node:
    """Accept either a Node or a raw BeautifulSoup tag/document."""
    if isinstance(root, Node):
        return root
    if isinstance(root, Tag):
        return Node(root)
    raise TypeError(f"Expected a document or element, got {type(root).__name__}")
