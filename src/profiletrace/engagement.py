"""
ProfileTrace engagement extractor - reactors, commenters and people lists.

Every row must resolve a profile anchor to an absolute http(s) URL; the URL
is the dedup key (first occurrence wins). Names are optional for reactors
and required for commenters: an anonymous reaction still counts, an
anonymous comment does not, and it does not claim its URL either.
"""

from .config import EngineConfig, SelectorCatalog
from .dom import Node, as_node
from .matcher import first_text
from .models import AccountProfile, EngagementProfile
from .normalize import clean_location, clean_person_name, resolve_url
from .segmenter import find_account_rows, find_anchor, find_comment_rows, find_reactor_rows


def _limit_reached(count: int, limit: int | None) -> bool:
    return limit is not None and limit > 0 and count >= limit


def _row_location(row: Node, catalog: SelectorCatalog, headline: str | None) -> str | None:
    return first_text(
        row, catalog.engagement_location, clean=lambda raw: clean_location(raw, headline)
    )


def _row_name(row: Node, tiers, anchor: Node) -> str | None:
    """Name tier first, then the anchor's own text."""
    return first_text(row, tiers, clean=clean_person_name) or clean_person_name(anchor.text())


def extract_reactors(
    root: Node,
    *,
    origin: str | None = None,
    limit: int | None = None,
    config: EngineConfig | None = None,
) -> list[EngagementProfile]:
    """
    Extract the people who reacted to a post.

    Args:
        root: Document or subtree (e.g. the reactions modal).
        origin: Base URL for relative profile links. Defaults to config.origin.
        limit: Stop after this many profiles when positive.
        config: Engine config; defaults to the built-in tables.

    Returns:
        Reactor profiles in row order, one per profile URL.
    """
    node = as_node(root)
    config = config or EngineConfig()
    catalog = config.selectors
    base = origin or config.origin

    results: list[EngagementProfile] = []
    seen: set[str] = set()

    for row in find_reactor_rows(node, catalog):
        anchor = find_anchor(row, catalog.profile_anchors)
        if anchor is None:
            continue
        profile_url = resolve_url(anchor.attr("href"), base)
        if profile_url is None or profile_url in seen:
            continue
        seen.add(profile_url)

        headline = first_text(row, catalog.engagement_headline)
        results.append(
            EngagementProfile(
                kind="reactor",
                full_name=_row_name(row, catalog.reactor_name, anchor),
                profile_url=profile_url,
                headline=headline,
                location=_row_location(row, catalog, headline),
                reaction_label=first_text(row, catalog.reaction_label),
            )
        )
        if _limit_reached(len(results), limit):
            break

    return results


def extract_comments(
    root: Node,
    *,
    origin: str | None = None,
    limit: int | None = None,
    config: EngineConfig | None = None,
) -> list[EngagementProfile]:
    """
    Extract the people who commented on a post.

    Rows without a resolvable name are skipped and leave their URL unclaimed,
    so a later row for the same profile can still be kept.
    """
    node = as_node(root)
    config = config or EngineConfig()
    catalog = config.selectors
    base = origin or config.origin

    results: list[EngagementProfile] = []
    seen: set[str] = set()

    for row in find_comment_rows(node, catalog):
        anchor = find_anchor(row, catalog.profile_anchors)
        if anchor is None:
            continue
        profile_url = resolve_url(anchor.attr("href"), base)
        if profile_url is None or profile_url in seen:
            continue

        full_name = _row_name(row, catalog.commenter_name, anchor)
        if not full_name:
            continue
        seen.add(profile_url)

        headline = first_text(row, catalog.engagement_headline)
        results.append(
            EngagementProfile(
                kind="commenter",
                full_name=full_name,
                profile_url=profile_url,
                headline=headline,
                location=_row_location(row, catalog, headline),
                comment_text=first_text(row, catalog.comment_text),
            )
        )
        if _limit_reached(len(results), limit):
            break

    return results


def extract_account_profiles(
    root: Node,
    *,
    origin: str | None = None,
    limit: int | None = None,
    config: EngineConfig | None = None,
) -> list[AccountProfile]:
    """Extract people listed on a company's people page."""
    node = as_node(root)
    config = config or EngineConfig()
    catalog = config.selectors
    base = origin or config.origin

    company_name = first_text(node, catalog.account_company_name)
    results: list[AccountProfile] = []
    seen: set[str] = set()

    for row in find_account_rows(node, catalog):
        anchor = find_anchor(row, catalog.account_anchors)
        if anchor is None:
            continue
        profile_url = resolve_url(anchor.attr("href"), base)
        if profile_url is None or profile_url in seen:
            continue

        full_name = _row_name(row, catalog.account_name, anchor)
        if not full_name:
            continue
        seen.add(profile_url)

        results.append(
            AccountProfile(
                full_name=full_name,
                profile_url=profile_url,
                headline=first_text(row, catalog.account_headline),
                location=first_text(row, catalog.account_location, clean=clean_location),
                company_name=company_name,
            )
        )
        if _limit_reached(len(results), limit):
            break

    return results
