"""
ProfileTrace data models - strict Pydantic schemas for extraction results.

Design principles:
- extra="forbid" everywhere (fail fast on misspelled fields)
- Provenance is first-class: every resolved field says which selector produced it
- Absence over exceptions: unmatched fields are None, never errors
- snake_case in Python, camelCase on the wire (model_dump(by_alias=True))
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

_MODEL_CONFIG = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

EngagementKind = Literal["reactor", "commenter"]


# =============================================================================
# FIELD MATCH (provenance of one resolved field)
# =============================================================================


class FieldMatch(BaseModel):
    """Result of resolving one named field through the selector tiers."""

    model_config = _MODEL_CONFIG

    field: str = Field(default="", description="Logical field name, e.g. fullName")
    value: str | None = Field(default=None, description="Normalized value, None if unmatched")
    matched_selector: str | None = None
    tried_selectors: list[str] = Field(
        default_factory=list, description="Every selector attempted, in order"
    )
    tier: str | None = None
    tier_index: int | None = None
    selector_index: int | None = None
    path: str | None = Field(default=None, description="Diagnostic locator of the matched node")
    attribute: str | None = Field(
        default=None, description="Set when the value came from an attribute"
    )
    confidence: float = Field(default=0.1, ge=0.1, le=0.99)
    notes: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_provenance(self) -> FieldMatch:
        if self.value is not None:
            if self.matched_selector is None:
                raise ValueError("A matched value requires matched_selector")
            if self.matched_selector not in self.tried_selectors:
                raise ValueError("matched_selector must be one of tried_selectors")
        return self

    @property
    def matched(self) -> bool:
        return self.value is not None


# =============================================================================
# EXPERIENCE / EDUCATION
# =============================================================================


class ExperienceEntry(BaseModel):
    """One employment record."""

    model_config = _MODEL_CONFIG

    title: str | None = None
    company: str | None = None
    company_url: str | None = None
    location: str | None = None
    date_range_text: str | None = Field(default=None, description="Raw date range text")
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None
    is_current: bool = False

    def has_content(self) -> bool:
        """A row must carry some content to count."""
        return any((self.title, self.company, self.date_range_text, self.description))


class EducationEntry(BaseModel):
    """One education record."""

    model_config = _MODEL_CONFIG

    school: str | None = None
    degree: str | None = None
    field_of_study: str | None = None
    date_range_text: str | None = None

    def has_content(self) -> bool:
        return any((self.school, self.degree, self.field_of_study))


class ExperienceFields(BaseModel):
    """Per-field provenance for one experience row."""

    model_config = _MODEL_CONFIG

    title: FieldMatch
    company: FieldMatch
    company_url: FieldMatch
    date_range: FieldMatch
    location: FieldMatch
    description: FieldMatch


class ExperienceInsight(BaseModel):
    """An experience row with full provenance, as reported by the analyzer."""

    model_config = _MODEL_CONFIG

    index: int = Field(..., ge=0)
    path: str | None = None
    is_current: bool = False
    fields: ExperienceFields
    start_date: str | None = None
    end_date: str | None = None
    raw_text: str | None = None

    def to_entry(self) -> ExperienceEntry:
        """Flatten into the plain ExperienceEntry shape."""
        return ExperienceEntry(
            title=self.fields.title.value,
            company=self.fields.company.value,
            company_url=self.fields.company_url.value,
            location=self.fields.location.value,
            date_range_text=self.fields.date_range.value,
            start_date=self.start_date,
            end_date=self.end_date,
            description=self.fields.description.value,
            is_current=self.is_current,
        )


# =============================================================================
# PROFILE
# =============================================================================


class ProfileExtraction(BaseModel):
    """Top-level profile result."""

    model_config = _MODEL_CONFIG

    full_name: str | None = None
    headline: str | None = None
    location: str | None = None
    profile_image_url: str | None = None
    current_title: str | None = Field(
        default=None, description="Falls back to headline when no title resolves"
    )
    current_company: str | None = None
    current_company_url: str | None = None
    email: str | None = None
    phone_numbers: list[str] = Field(default_factory=list)
    birthday: str | None = None
    current_company_started_at: str | None = None
    experiences: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    connections_text: str | None = None
    connection_count: int | None = None
    followers_text: str | None = None
    follower_count: int | None = None

    def get_current_experience(self) -> ExperienceEntry | None:
        """First ongoing role, else the first role listed."""
        for entry in self.experiences:
            if entry.is_current:
                return entry
        return self.experiences[0] if self.experiences else None


# =============================================================================
# ENGAGEMENT (reactors / commenters) AND COMPANY PEOPLE LISTS
# =============================================================================


class EngagementProfile(BaseModel):
    """A reactor or commenter on a post."""

    model_config = _MODEL_CONFIG

    kind: EngagementKind
    full_name: str | None = Field(
        default=None, description="May be None for reactors; required for commenters"
    )
    profile_url: str = Field(..., min_length=1, description="Absolute profile URL")
    headline: str | None = None
    location: str | None = None
    reaction_label: str | None = None
    comment_text: str | None = None

    # Filled by merge_engagement_details() when profile details are available
    current_title: str | None = None
    current_company: str | None = None
    current_company_url: str | None = None
    profile_image_url: str | None = None
    email: str | None = None

    @model_validator(mode="after")
    def _check_kind_fields(self) -> EngagementProfile:
        if self.kind == "reactor" and self.comment_text is not None:
            raise ValueError("Reactor profiles cannot carry comment_text")
        if self.kind == "commenter":
            if self.reaction_label is not None:
                raise ValueError("Commenter profiles cannot carry reaction_label")
            if not self.full_name:
                raise ValueError("Commenter profiles require full_name")
        return self


class AccountProfile(BaseModel):
    """A person listed on a company's people page."""

    model_config = _MODEL_CONFIG

    full_name: str = Field(..., min_length=1)
    profile_url: str = Field(..., min_length=1)
    headline: str | None = None
    location: str | None = None
    company_name: str | None = None


# =============================================================================
# ANALYSIS RESULT
# =============================================================================


class AnalysisMetadata(BaseModel):
    """Diagnostics attached to an analysis."""

    model_config = _MODEL_CONFIG

    html_length: int = Field(default=0, ge=0)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    warnings: list[str] = Field(default_factory=list)


class AnalysisResult(BaseModel):
    """Everything the analyzer learned about one document."""

    model_config = _MODEL_CONFIG

    document_title: str | None = None
    fields: list[FieldMatch] = Field(default_factory=list)
    experiences: list[ExperienceInsight] = Field(default_factory=list)
    current_experience_index: int | None = None
    metadata: AnalysisMetadata = Field(default_factory=AnalysisMetadata)
    profile: ProfileExtraction = Field(default_factory=ProfileExtraction)

    def get_field(self, name: str) -> FieldMatch | None:
        """Look up a field match by its logical name."""
        for match in self.fields:
            if match.field == name:
                return match
        return None

    def get_value(self, name: str) -> str | None:
        match = self.get_field(name)
        return match.value if match else None
