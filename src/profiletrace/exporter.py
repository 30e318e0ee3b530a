"""
ProfileTrace exporter - JSON results and markdown provenance reports.
"""

import json
from pathlib import Path

from pydantic import BaseModel

from .batch import BatchItem
from .models import AnalysisResult, FieldMatch


def export_json(result: BaseModel, output: Path) -> None:
    """Export a result model to JSON (camelCase keys)."""
    output.parent.mkdir(parents=True, exist_ok=True)
    data = result.model_dump(mode="json", by_alias=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def export_engagement_json(profiles: list[BaseModel], output: Path) -> int:
    """Export engagement or people-list profiles to a JSON array."""
    output.parent.mkdir(parents=True, exist_ok=True)
    data = [
        profile.model_dump(mode="json", by_alias=True, exclude_none=True) for profile in profiles
    ]
    with open(output, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    return len(data)


def _cell(value: object) -> str:
    """Make a value safe for a markdown table cell."""
    if value is None or value == "":
        return "-"
    return str(value).replace("|", "\\|").replace("\n", " ")


def _field_row(match: FieldMatch) -> str:
    return (
        f"| {match.field} | {_cell(match.value)} | {_cell(match.tier)} "
        f"| {_cell(match.matched_selector)} | {match.confidence:.2f} "
        f"| {_cell('; '.join(match.notes))} |\n"
    )


def render_report(result: AnalysisResult) -> str:
    """Render a markdown provenance report for one analysis."""
    profile = result.profile
    meta = result.metadata

    report = f"""# ProfileTrace Analysis Report

## Document
| Field | Value |
|---|---|
| Title | {_cell(result.document_title)} |
| HTML Length | {meta.html_length} |
| Generated | {meta.generated_at.isoformat()} |
| Experiences | {len(result.experiences)} |
| Current Experience | {_cell(result.current_experience_index)} |

## Fields
| Field | Value | Tier | Selector | Confidence | Notes |
|---|---|---|---|---|---|
"""
    for match in result.fields:
        report += _field_row(match)

    if result.experiences:
        report += """
## Experience
| # | Title | Company | Dates | Location | Current |
|---|---|---|---|---|---|
"""
        for insight in result.experiences:
            fields = insight.fields
            report += (
                f"| {insight.index} | {_cell(fields.title.value)} "
                f"| {_cell(fields.company.value)} | {_cell(fields.date_range.value)} "
                f"| {_cell(fields.location.value)} | {'yes' if insight.is_current else 'no'} |\n"
            )

    if profile.education:
        report += "\n## Education\n"
        for entry in profile.education:
            parts = [p for p in (entry.school, entry.degree, entry.field_of_study) if p]
            dates = f" ({entry.date_range_text})" if entry.date_range_text else ""
            report += f"- {', '.join(parts)}{dates}\n"

    contact = [
        ("Email", profile.email),
        ("Phones", ", ".join(profile.phone_numbers)),
        ("Birthday", profile.birthday),
        ("Connections", profile.connection_count),
        ("Followers", profile.follower_count),
    ]
    if any(value for _, value in contact):
        report += "\n## Contact & Reach\n| Field | Value |\n|---|---|\n"
        for label, value in contact:
            report += f"| {label} | {_cell(value)} |\n"

    if meta.warnings:
        report += "\n## Warnings\n"
        for warning in meta.warnings:
            report += f"- {warning}\n"

    return report


def generate_report(result: AnalysisResult, output: Path) -> None:
    """Write the markdown provenance report for one analysis."""
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        f.write(render_report(result))


def generate_batch_report(items: list[BatchItem], output: Path) -> None:
    """Write a markdown summary of a batch run."""
    output.parent.mkdir(parents=True, exist_ok=True)

    succeeded = [item for item in items if item.result is not None]
    failed = [item for item in items if item.result is None]

    report = f"""# ProfileTrace Batch Report

## Run Info
| Field | Value |
|---|---|
| Documents | {len(items)} |
| Analyzed | {len(succeeded)} |
| Failed | {len(failed)} |

## Documents
| Document | Name | Current Title | Current Company | Experiences | Warnings |
|---|---|---|---|---|---|
"""
    for item in succeeded:
        result = item.result
        profile = result.profile
        report += (
            f"| {_cell(item.name)} | {_cell(profile.full_name)} | {_cell(profile.current_title)} "
            f"| {_cell(profile.current_company)} | {len(result.experiences)} "
            f"| {len(result.metadata.warnings)} |\n"
        )

    if failed:
        report += "\n## Errors\n"
        for item in failed:
            report += f"- {item.name}: {item.error}\n"

    with open(output, "w", encoding="utf-8") as f:
        f.write(report)
