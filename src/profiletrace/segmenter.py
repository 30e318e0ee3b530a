"""
ProfileTrace segmenter - locate repeated "row" elements.

No single selector reliably targets a row boundary across markup revisions,
so every structural selector is tried and the matches are unioned: selector
order first, document order within a selector, each element once.
"""

import re
from collections.abc import Iterable

from .config import SelectorCatalog
from .dom import Node

_DEGREE_RE = re.compile(r"\b(?:bachelor|master|phd|degree|university|college|school)\b", re.I)
_DURATION_RE = re.compile(r"\b(?:present|current|yrs?|mos?|months?|years?)\b", re.I)

COMPANY_LINK_SELECTOR = "a[href*='/company/']"
SCHOOL_LINK_SELECTOR = "a[href*='/school/']"


def collect_rows(root: Node, selectors: Iterable[str]) -> list[Node]:
    """Union of all selector matches, deduplicated by element identity."""
    rows: list[Node] = []
    seen: set[int] = set()
    for selector in selectors:
        for node in root.query_all(selector):
            if node.key in seen:
                continue
            seen.add(node.key)
            rows.append(node)
    return rows


def looks_like_education(row: Node) -> bool:
    """
    True for an education entry that leaked into an experience list.

    Both sides must hold: the row reads academic (school link or degree
    keywords) AND it has neither a company link nor employment-duration
    keywords. A "University Relations Manager" role with "Present" survives.
    """
    text = row.text()
    academic = (
        row.query_first(SCHOOL_LINK_SELECTOR) is not None or _DEGREE_RE.search(text) is not None
    )
    if not academic:
        return False

    has_company_link = row.query_first(COMPANY_LINK_SELECTOR) is not None
    has_duration = _DURATION_RE.search(text) is not None
    return not has_company_link and not has_duration


def find_experience_rows(root: Node, catalog: SelectorCatalog) -> list[Node]:
    rows = collect_rows(root, catalog.experience_rows)
    return [row for row in rows if not looks_like_education(row)]


def find_education_rows(root: Node, catalog: SelectorCatalog) -> list[Node]:
    return collect_rows(root, catalog.education_rows)


def find_reactor_rows(root: Node, catalog: SelectorCatalog) -> list[Node]:
    return collect_rows(root, catalog.reactor_rows)


def find_comment_rows(root: Node, catalog: SelectorCatalog) -> list[Node]:
    return collect_rows(root, catalog.comment_rows)


def find_account_rows(root: Node, catalog: SelectorCatalog) -> list[Node]:
    """People cards; when no card matches, each profile anchor's enclosing <li>."""
    rows = collect_rows(root, catalog.account_cards)
    if rows:
        return rows

    seen: set[int] = set()
    for anchor in collect_rows(root, catalog.account_anchors):
        card = anchor.closest("li") or anchor
        if card.key not in seen:
            seen.add(card.key)
            rows.append(card)
    return rows


def find_anchor(row: Node, selectors: Iterable[str]) -> Node | None:
    """First profile anchor inside a row (the row itself if it is the anchor)."""
    for selector in selectors:
        anchor = row.query_first(selector)
        if anchor is not None:
            return anchor
    if row.tag_name == "a" and row.attr("href"):
        return row
    return None
