"""
ProfileTrace current-position resolver - two-phase title/company inference.

Phase 1 reads the experience section: the first ongoing row, else the first
row. Phase 2 consults the top card only for what phase 1 left empty, and
rejects top-card values that merely repeat the resolved company, title or
headline (promotional banners, cross-assigned fields).
"""

from dataclasses import dataclass, field

from .config import SelectorCatalog
from .dom import Node
from .fields import (
    resolve_top_card_company,
    resolve_top_card_company_url,
    resolve_top_card_title,
)
from .matcher import TierMatch
from .models import ExperienceInsight, FieldMatch

TOP_CARD_NOTE = "Resolved from top card; experience section had no value."
NO_EXPERIENCE_NOTE = "No experience entry available"


@dataclass
class CurrentPosition:
    """Resolved current role with provenance for each part."""

    title: FieldMatch
    company: FieldMatch
    company_url: FieldMatch
    experience_index: int | None = None
    started_at: str | None = None
    notes: list[str] = field(default_factory=list)


def select_current_experience(experiences: list[ExperienceInsight]) -> ExperienceInsight | None:
    """First row with is_current; otherwise the first row; None when empty.

    Concurrent ongoing roles are not ranked: the first listed wins.
    """
    for experience in experiences:
        if experience.is_current:
            return experience
    return experiences[0] if experiences else None


def _renamed(match: FieldMatch, name: str) -> FieldMatch:
    return match.model_copy(update={"field": name}, deep=True)


def _from_top_card(
    candidate: TierMatch, name: str, conflicts: dict[str, str | None]
) -> FieldMatch:
    """Accept a top-card value unless it equals an already-resolved value."""
    result = candidate.to_field(name)
    if not candidate.matched:
        return result

    value = candidate.value.casefold()
    for label, existing in conflicts.items():
        if existing and value == existing.strip().casefold():
            return FieldMatch(
                field=name,
                tried_selectors=result.tried_selectors,
                notes=[f"Rejected top-card value {candidate.value!r}: matches resolved {label}."],
            )

    return result.model_copy(update={"notes": [TOP_CARD_NOTE, *result.notes]})


def resolve_current_position(
    root: Node,
    experiences: list[ExperienceInsight],
    *,
    headline: str | None,
    catalog: SelectorCatalog,
    origin: str,
) -> CurrentPosition:
    """
    Decide the current title, company and company URL.

    Args:
        root: Document (or subtree) holding the top card.
        experiences: Analyzed experience rows, in document order.
        headline: Already-resolved headline, used to reject echoes.
        catalog: Selector tables.
        origin: Base URL for relative company links.

    Returns:
        CurrentPosition; unresolved parts carry value None.
    """
    current = select_current_experience(experiences)
    notes: list[str] = []

    if current is not None:
        title = _renamed(current.fields.title, "currentTitle")
        company = _renamed(current.fields.company, "currentCompany")
        company_url = _renamed(current.fields.company_url, "currentCompanyUrl")
    else:
        notes.append(NO_EXPERIENCE_NOTE)
        title = FieldMatch(field="currentTitle", notes=[NO_EXPERIENCE_NOTE])
        company = FieldMatch(field="currentCompany", notes=[NO_EXPERIENCE_NOTE])
        company_url = FieldMatch(field="currentCompanyUrl", notes=[NO_EXPERIENCE_NOTE])

    company_from_top_card = False
    if company.value is None:
        company = _from_top_card(
            resolve_top_card_company(root, catalog),
            "currentCompany",
            {"title": title.value, "headline": headline},
        )
        company_from_top_card = company.value is not None

    if title.value is None:
        title = _from_top_card(
            resolve_top_card_title(root, catalog),
            "currentTitle",
            {"company": company.value, "headline": headline},
        )

    # A top-card link only describes a top-card company
    if company_url.value is None and company_from_top_card:
        company_url = _from_top_card(
            resolve_top_card_company_url(root, catalog, origin), "currentCompanyUrl", {}
        )

    return CurrentPosition(
        title=title,
        company=company,
        company_url=company_url,
        experience_index=current.index if current is not None else None,
        started_at=current.start_date if current is not None else None,
        notes=notes,
    )
