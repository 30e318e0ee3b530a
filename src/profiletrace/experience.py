"""
ProfileTrace experience analysis - per-row field resolution.

Turns segmented experience/education rows into entries with provenance.
Company prefers a /company/ or /school/ link over a styled span: the link
also yields the company URL.
"""

from .config import SelectorCatalog
from .dom import Node
from .matcher import TierMatch, compute_confidence, resolve_attribute, resolve_text
from .models import EducationEntry, ExperienceFields, ExperienceInsight, FieldMatch
from .normalize import (
    clean_attribute,
    clean_company_name,
    clean_location,
    clean_text,
    is_present_range,
    looks_like_date_range,
    parse_date_range_parts,
    resolve_url,
)


def _merge_tried(*matches: TierMatch) -> list[str]:
    tried: list[str] = []
    for match in matches:
        for selector in match.tried_selectors:
            if selector not in tried:
                tried.append(selector)
    return tried


def _company_field(link: TierMatch, span: TierMatch) -> FieldMatch:
    """Company name from the link text when it has any, else from the styled span."""
    tried = _merge_tried(link, span)

    link_text = clean_company_name(link.node.text()) if link.node is not None else None
    if link.matched and link_text:
        source, value = link, link_text
    elif span.matched:
        source, value = span, span.value
    else:
        return FieldMatch(
            field="company", tried_selectors=tried, notes=[*link.notes, *span.notes]
        )

    return FieldMatch(
        field="company",
        value=value,
        matched_selector=source.matched_selector,
        tried_selectors=tried,
        tier=source.tier,
        tier_index=source.tier_index,
        selector_index=source.selector_index,
        path=source.node.path() if source.node is not None else None,
        confidence=compute_confidence(source.tier_index or 0, source.selector_index or 0),
        notes=list(source.notes),
    )


def analyze_experience_row(
    row: Node, index: int, catalog: SelectorCatalog, origin: str
) -> ExperienceInsight:
    """Resolve title, company, link, dates, location and description for one row."""
    title = resolve_text(row, catalog.experience_title)
    link = resolve_attribute(
        row,
        catalog.experience_company_link,
        "href",
        clean=lambda raw: resolve_url(clean_attribute(raw), origin),
    )
    span = resolve_text(row, catalog.experience_company, clean=clean_company_name)
    date_range = resolve_text(row, catalog.experience_date)

    # The date caption and the location often share one class; never report dates twice
    def clean_row_location(raw: str | None) -> str | None:
        value = clean_location(raw)
        if value and (value == date_range.value or looks_like_date_range(value)):
            return None
        return value

    location = resolve_text(row, catalog.experience_location, clean=clean_row_location)
    description = resolve_text(row, catalog.experience_description)

    start_date, end_date = parse_date_range_parts(date_range.value)
    is_current = end_date is None or is_present_range(date_range.value)

    return ExperienceInsight(
        index=index,
        path=row.path(),
        is_current=is_current,
        fields=ExperienceFields(
            title=title.to_field("title"),
            company=_company_field(link, span),
            company_url=link.to_field("companyUrl"),
            date_range=date_range.to_field("dateRange"),
            location=location.to_field("location"),
            description=description.to_field("description"),
        ),
        start_date=start_date,
        end_date=end_date,
        raw_text=clean_text(row.text()),
    )


def analyze_experience_rows(
    rows: list[Node], catalog: SelectorCatalog, origin: str
) -> list[ExperienceInsight]:
    """Analyze rows in order, dropping rows that carry no content."""
    insights: list[ExperienceInsight] = []
    for row in rows:
        insight = analyze_experience_row(row, len(insights), catalog, origin)
        if insight.to_entry().has_content():
            insights.append(insight)
    return insights


def extract_education(rows: list[Node], catalog: SelectorCatalog) -> list[EducationEntry]:
    entries: list[EducationEntry] = []
    for row in rows:
        entry = EducationEntry(
            school=resolve_text(row, catalog.education_school).value,
            degree=resolve_text(row, catalog.education_degree).value,
            field_of_study=resolve_text(row, catalog.education_field_of_study).value,
            date_range_text=resolve_text(row, catalog.education_date).value,
        )
        if entry.has_content():
            entries.append(entry)
    return entries
