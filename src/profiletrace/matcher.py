"""
ProfileTrace matcher - the tiered first-match scan behind every field.

Tiers are tried in order, selectors within a tier in order. For each selector
the first matching descendant is read (text, or an attribute) and normalized;
the first non-empty value wins and carries its provenance. When nothing
matches, every attempted selector is still reported.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .dom import Node, Queryable
from .models import FieldMatch
from .normalize import clean_attribute, clean_text
from .selectors import SelectorTier

Cleaner = Callable[[str | None], str | None]

UNMATCHED_CONFIDENCE = 0.1
NO_MATCH_NOTE = "No selector matched"


def compute_confidence(tier_index: int, selector_index: int) -> float:
    """1 - 0.25 per tier - 0.05 per selector, clamped to [0.1, 0.99]."""
    value = 1 - tier_index * 0.25 - selector_index * 0.05
    bounded = min(0.99, max(0.1, value))
    return round(bounded, 2)


def fallback_notes(tier: str, tier_index: int, selector_index: int) -> list[str]:
    notes: list[str] = []
    if tier_index > 0:
        notes.append(f'Matched fallback tier "{tier}" (index {tier_index}).')
    if selector_index > 0:
        notes.append(f"Used fallback selector #{selector_index + 1} within tier.")
    return notes


@dataclass
class TierMatch:
    """Raw outcome of a tier scan, including the matched node."""

    tried_selectors: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    value: str | None = None
    node: Node | None = None
    matched_selector: str | None = None
    tier: str | None = None
    tier_index: int | None = None
    selector_index: int | None = None
    attribute: str | None = None

    @property
    def matched(self) -> bool:
        return self.value is not None

    @property
    def confidence(self) -> float:
        if self.value is None or self.tier_index is None or self.selector_index is None:
            return UNMATCHED_CONFIDENCE
        return compute_confidence(self.tier_index, self.selector_index)

    def to_field(self, name: str) -> FieldMatch:
        """Freeze into a FieldMatch for the given logical field name."""
        return FieldMatch(
            field=name,
            value=self.value,
            matched_selector=self.matched_selector,
            tried_selectors=list(self.tried_selectors),
            tier=self.tier,
            tier_index=self.tier_index,
            selector_index=self.selector_index,
            path=self.node.path() if self.node is not None else None,
            attribute=self.attribute,
            confidence=self.confidence,
            notes=list(self.notes),
        )


def resolve(
    root: Queryable,
    tiers: Sequence[SelectorTier],
    *,
    attribute: str | None = None,
    clean: Cleaner | None = None,
) -> TierMatch:
    """
    Scan tiers for the first non-empty normalized value.

    Args:
        root: Document or element to search under.
        tiers: Ordered selector tiers.
        attribute: Read this attribute instead of text. A tier's own
            `attribute` takes precedence for that tier.
        clean: Normalizer applied to each candidate. A candidate it rejects
            (returns None) falls through to the next selector. Defaults to
            clean_text for text and clean_attribute for attributes.

    Returns:
        TierMatch with provenance; value is None when nothing matched.
    """
    tried: list[str] = []

    for tier_index, tier in enumerate(tiers):
        read_attribute = tier.attribute or attribute
        for selector_index, selector in enumerate(tier.selectors):
            tried.append(selector)
            node = root.query_first(selector)
            if node is None:
                continue

            if read_attribute:
                value = (clean or clean_attribute)(node.attr(read_attribute))
            else:
                value = (clean or clean_text)(node.text())
            if not value:
                continue

            return TierMatch(
                tried_selectors=tried,
                notes=fallback_notes(tier.name, tier_index, selector_index),
                value=value,
                node=node,
                matched_selector=selector,
                tier=tier.name,
                tier_index=tier_index,
                selector_index=selector_index,
                attribute=read_attribute,
            )

    return TierMatch(tried_selectors=tried, notes=[NO_MATCH_NOTE], attribute=attribute)


def resolve_text(
    root: Queryable, tiers: Sequence[SelectorTier], *, clean: Cleaner | None = None
) -> TierMatch:
    return resolve(root, tiers, clean=clean)


def resolve_attribute(
    root: Queryable,
    tiers: Sequence[SelectorTier],
    attribute: str,
    *,
    clean: Cleaner | None = None,
) -> TierMatch:
    return resolve(root, tiers, attribute=attribute, clean=clean)


def match_text(
    root: Queryable,
    tiers: Sequence[SelectorTier],
    *,
    field: str = "",
    clean: Cleaner | None = None,
) -> FieldMatch:
    """Resolve a text field and report it as a FieldMatch."""
    return resolve_text(root, tiers, clean=clean).to_field(field)


def match_attribute(
    root: Queryable,
    tiers: Sequence[SelectorTier],
    attribute: str,
    *,
    field: str = "",
    clean: Cleaner | None = None,
) -> FieldMatch:
    """Resolve an attribute field (href, src, ...) and report it as a FieldMatch."""
    return resolve_attribute(root, tiers, attribute, clean=clean).to_field(field)


def first_text(
    root: Queryable, tiers: Sequence[SelectorTier], clean: Cleaner | None = None
) -> str | None:
    """Shortcut for callers that only need the value."""
    return resolve_text(root, tiers, clean=clean).value
