"""
ProfileTrace analyzer - one-call analysis of a profile document.

Orchestrates field extraction, experience segmentation and the current
position resolver over one document and reports everything with
provenance plus a list of warnings. Warnings are for observability only;
nothing branches on them.
"""

from datetime import UTC, datetime

from bs4 import Tag

from .config import EngineConfig
from .current_position import resolve_current_position
from .dom import Node, as_node, parse_html
from .experience import analyze_experience_rows, extract_education
from .fields import (
    extract_contact_info,
    resolve_connections,
    resolve_followers,
    resolve_full_name,
    resolve_headline,
    resolve_location,
    resolve_profile_image,
)
from .merge import first_present
from .models import AnalysisMetadata, AnalysisResult, ProfileExtraction
from .normalize import clean_text
from .segmenter import find_education_rows, find_experience_rows

# Warning texts are part of the output contract
WARN_FULL_NAME = "Full name selector did not match"
WARN_HEADLINE = "Headline selector did not match"
WARN_LOCATION = "Location selector did not match"
WARN_PROFILE_IMAGE = "Profile image selector did not match"
WARN_NO_EXPERIENCE = "No experience entries detected"
WARN_NO_CURRENT = "Unable to determine current experience"


class ProfileAnalyzer:
    """Stateless analyzer; one instance may serve many threads."""

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()

    def analyze_html(self, html: str, *, generated_at: datetime | None = None) -> AnalysisResult:
        """Parse raw HTML (lxml) and analyze it."""
        return self.analyze_document(parse_html(html), generated_at=generated_at)

    def analyze_document(
        self, root: Node | Tag, *, generated_at: datetime | None = None
    ) -> AnalysisResult:
        """
        Analyze a parsed document or subtree.

        Args:
            root: Parsed document, element subtree, or raw BeautifulSoup tag.
            generated_at: Timestamp to stamp on the result. Pass a fixed
                value for bit-identical output across runs.

        Returns:
            AnalysisResult with field provenance, experiences and warnings.

        Raises:
            TypeError: If root is not a document or element.
        """
        node = as_node(root)
        catalog = self.config.selectors
        origin = self.config.origin
        warnings: list[str] = []

        name = resolve_full_name(node, catalog)
        headline = resolve_headline(node, catalog)
        location = resolve_location(node, catalog, headline.value)
        image = resolve_profile_image(node, catalog)

        if not name.matched:
            warnings.append(WARN_FULL_NAME)
        if not headline.matched:
            warnings.append(WARN_HEADLINE)
        if not location.matched:
            warnings.append(WARN_LOCATION)
        if not image.matched:
            warnings.append(WARN_PROFILE_IMAGE)

        experiences = analyze_experience_rows(find_experience_rows(node, catalog), catalog, origin)
        if not experiences:
            warnings.append(WARN_NO_EXPERIENCE)

        position = resolve_current_position(
            node, experiences, headline=headline.value, catalog=catalog, origin=origin
        )
        if position.experience_index is None:
            warnings.append(WARN_NO_CURRENT)

        contact = extract_contact_info(node, catalog)
        connections = resolve_connections(node, catalog)
        followers = resolve_followers(node, catalog)

        fields = [
            name.to_field("fullName"),
            headline.to_field("headline"),
            location.to_field("location"),
            image.to_field("profileImageUrl"),
            position.title,
            position.company,
            position.company_url,
            contact.email.to_field("email"),
            contact.birthday.to_field("birthday"),
            connections.text.to_field("connectionsText"),
            followers.text.to_field("followersText"),
        ]

        profile = ProfileExtraction(
            full_name=name.value,
            headline=headline.value,
            location=location.value,
            profile_image_url=image.value,
            current_title=first_present(position.title.value, headline.value),
            current_company=position.company.value,
            current_company_url=position.company_url.value,
            email=contact.email.value,
            phone_numbers=contact.phone_numbers,
            birthday=contact.birthday.value,
            current_company_started_at=position.started_at,
            experiences=[insight.to_entry() for insight in experiences],
            education=extract_education(find_education_rows(node, catalog), catalog),
            connections_text=connections.text.value,
            connection_count=connections.count,
            followers_text=followers.text.value,
            follower_count=followers.count,
        )

        title_node = node.query_first("title")
        return AnalysisResult(
            document_title=clean_text(title_node.text()) if title_node is not None else None,
            fields=fields,
            experiences=experiences,
            current_experience_index=position.experience_index,
            metadata=AnalysisMetadata(
                html_length=len(node.outer_html()),
                generated_at=generated_at or datetime.now(UTC),
                warnings=warnings,
            ),
            profile=profile,
        )

    def extract_profile_details(self, root: Node | Tag) -> ProfileExtraction:
        """Just the flattened profile record."""
        return self.analyze_document(root).profile


# =============================================================================
# MODULE-LEVEL ENTRY POINTS
# =============================================================================


def _with_origin(config: EngineConfig | None, origin: str | None) -> EngineConfig:
    config = config or EngineConfig()
    if origin:
        config = EngineConfig(origin=origin, selectors=config.selectors)
    return config


def analyze_html(
    html: str, *, config: EngineConfig | None = None, generated_at: datetime | None = None
) -> AnalysisResult:
    return ProfileAnalyzer(config).analyze_html(html, generated_at=generated_at)


def analyze_document(
    root: Node | Tag,
    *,
    config: EngineConfig | None = None,
    generated_at: datetime | None = None,
) -> AnalysisResult:
    return ProfileAnalyzer(config).analyze_document(root, generated_at=generated_at)


def extract_profile_details(
    root: Node | Tag | None = None,
    *,
    html: str | None = None,
    origin: str | None = None,
    config: EngineConfig | None = None,
) -> ProfileExtraction:
    """
    Flattened profile record from a document, subtree or raw HTML.

    Args:
        root: Parsed document or subtree. Takes precedence over html.
        html: Raw HTML to parse when no root is given.
        origin: Base URL for relative links (overrides config.origin).
        config: Engine config; defaults to the built-in tables.

    Raises:
        TypeError: If neither root nor html is given, or root is not a node.
    """
    if root is None:
        if html is None:
            raise TypeError("extract_profile_details() needs a root or html")
        root = parse_html(html)
    return ProfileAnalyzer(_with_origin(config, origin)).extract_profile_details(root)
