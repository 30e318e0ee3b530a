"""
ProfileTrace field extractors - top card, contact block and summary counts.

Each extractor is a thin configuration of the tier matcher: pick the tier
table from the catalog, pick the normalizer, resolve.
"""

import json
from dataclasses import dataclass, field

from .config import SelectorCatalog
from .dom import Node
from .matcher import TierMatch, fallback_notes, resolve_attribute, resolve_text
from .normalize import (
    clean_attribute,
    clean_company_name,
    clean_email,
    clean_full_name,
    clean_location,
    clean_person_name,
    clean_text,
    extract_phone_numbers,
    parse_count_from_summary,
    resolve_url,
)

JSON_LD_SELECTOR = "script[type='application/ld+json']"
JSON_LD_TIER = "json-ld"


# =============================================================================
# TOP CARD
# =============================================================================


def _json_ld_person_name(root: Node) -> str | None:
    """Person.name from embedded JSON-LD, if any block declares one."""
    for script in root.query_all(JSON_LD_SELECTOR):
        raw = script.tag.string or script.text()
        try:
            data = json.loads(raw)
        except ValueError:
            continue

        stack = [data]
        while stack:
            item = stack.pop(0)
            if isinstance(item, list):
                stack.extend(item)
                continue
            if not isinstance(item, dict):
                continue
            if "@graph" in item:
                stack.extend(item["@graph"] if isinstance(item["@graph"], list) else [])
            item_type = item.get("@type")
            types = item_type if isinstance(item_type, list) else [item_type]
            name = item.get("name")
            if "Person" in types and isinstance(name, str):
                cleaned = clean_person_name(name)
                if cleaned:
                    return cleaned
    return None


def resolve_full_name(root: Node, catalog: SelectorCatalog) -> TierMatch:
    """Full name through the tiers, then JSON-LD Person.name as a last resort."""
    match = resolve_text(root, catalog.full_name, clean=clean_full_name)
    if match.matched:
        return match

    tried = [*match.tried_selectors, JSON_LD_SELECTOR]
    name = _json_ld_person_name(root)
    if name is None:
        return TierMatch(tried_selectors=tried, notes=match.notes)

    tier_index = len(catalog.full_name)
    return TierMatch(
        tried_selectors=tried,
        notes=fallback_notes(JSON_LD_TIER, tier_index, 0),
        value=name,
        node=root.query_first(JSON_LD_SELECTOR),
        matched_selector=JSON_LD_SELECTOR,
        tier=JSON_LD_TIER,
        tier_index=tier_index,
        selector_index=0,
    )


def resolve_headline(root: Node, catalog: SelectorCatalog) -> TierMatch:
    return resolve_text(root, catalog.headline)


def resolve_location(root: Node, catalog: SelectorCatalog, headline: str | None) -> TierMatch:
    """Location, skipping relationship badges and echoes of the headline."""
    return resolve_text(root, catalog.location, clean=lambda raw: clean_location(raw, headline))


def resolve_profile_image(root: Node, catalog: SelectorCatalog) -> TierMatch:
    return resolve_attribute(root, catalog.profile_image, "src")


def resolve_top_card_title(root: Node, catalog: SelectorCatalog) -> TierMatch:
    return resolve_text(root, catalog.top_card_title)


def resolve_top_card_company(root: Node, catalog: SelectorCatalog) -> TierMatch:
    return resolve_text(root, catalog.top_card_company, clean=clean_company_name)


def resolve_top_card_company_url(root: Node, catalog: SelectorCatalog, origin: str) -> TierMatch:
    return resolve_attribute(
        root,
        catalog.top_card_company_link,
        "href",
        clean=lambda raw: resolve_url(clean_attribute(raw), origin),
    )


# =============================================================================
# CONTACT BLOCK
# =============================================================================


def find_contact_roots(root: Node, catalog: SelectorCatalog) -> list[Node]:
    """The root itself followed by every contact container found under it."""
    roots = [root]
    seen = {root.key}
    for selector in catalog.contact_containers:
        for node in root.query_all(selector):
            if node.key not in seen:
                seen.add(node.key)
                roots.append(node)
    return roots


def _first_across(roots: list[Node], resolver) -> TierMatch:
    first: TierMatch | None = None
    for position, contact_root in enumerate(roots):
        match = resolver(contact_root)
        if match.matched:
            if position > 0:
                match.notes.append(f"Resolved inside contact container #{position}.")
            return match
        if first is None:
            first = match
    return first if first is not None else TierMatch()


def resolve_email(roots: list[Node], catalog: SelectorCatalog) -> TierMatch:
    return _first_across(roots, lambda r: resolve_text(r, catalog.email, clean=clean_email))


def resolve_birthday(roots: list[Node], catalog: SelectorCatalog) -> TierMatch:
    return _first_across(roots, lambda r: resolve_text(r, catalog.birthday))


def resolve_phone_numbers(roots: list[Node], catalog: SelectorCatalog) -> list[str]:
    """Phone numbers from the first contact root that has any."""
    for contact_root in roots:
        nodes: list[Node] = []
        seen: set[int] = set()
        for selector in catalog.phone:
            for node in contact_root.query_all(selector):
                if node.key not in seen:
                    seen.add(node.key)
                    nodes.append(node)
        phones = extract_phone_numbers(nodes)
        if phones:
            return phones
    return []


@dataclass
class ContactInfo:
    """Resolved contact block."""

    email: TierMatch
    birthday: TierMatch
    phone_numbers: list[str] = field(default_factory=list)


def extract_contact_info(root: Node, catalog: SelectorCatalog) -> ContactInfo:
    roots = find_contact_roots(root, catalog)
    return ContactInfo(
        email=resolve_email(roots, catalog),
        birthday=resolve_birthday(roots, catalog),
        phone_numbers=resolve_phone_numbers(roots, catalog),
    )


# =============================================================================
# SUMMARY COUNTS
# =============================================================================


@dataclass
class SummaryCount:
    text: TierMatch
    count: int | None


def resolve_connections(root: Node, catalog: SelectorCatalog) -> SummaryCount:
    match = resolve_text(root, catalog.connections, clean=clean_text)
    return SummaryCount(text=match, count=parse_count_from_summary(match.value))


def resolve_followers(root: Node, catalog: SelectorCatalog) -> SummaryCount:
    match = resolve_text(root, catalog.followers, clean=clean_text)
    return SummaryCount(text=match, count=parse_count_from_summary(match.value))
