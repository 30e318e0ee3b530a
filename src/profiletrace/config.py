"""
ProfileTrace configuration - selector catalogs and engine settings.

Configs are YAML files that override any subset of the built-in tables:

    origin: https://www.linkedin.com/
    selectors:
      headline:
        - name: modern
          selectors: ["div.text-body-medium"]

Keys left out keep their defaults. Every selector is compiled on load, so a
typo fails here rather than silently never matching.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import selectors as tables
from .selectors import SelectorTier, validate_selector

DEFAULT_ORIGIN = "https://www.linkedin.com/"

ENV_ORIGIN = "PROFILETRACE_ORIGIN"
ENV_CONFIG = "PROFILETRACE_CONFIG"


def _tiers(default: tuple[SelectorTier, ...]):
    return Field(default_factory=lambda: list(default))


def _rows(default: tuple[str, ...]):
    return Field(default_factory=lambda: list(default))


class SelectorCatalog(BaseModel):
    """Every tier table and row-selector list the engine consults."""

    model_config = ConfigDict(extra="forbid")

    # Top card
    full_name: list[SelectorTier] = _tiers(tables.FULL_NAME_TIERS)
    headline: list[SelectorTier] = _tiers(tables.HEADLINE_TIERS)
    location: list[SelectorTier] = _tiers(tables.LOCATION_TIERS)
    profile_image: list[SelectorTier] = _tiers(tables.PROFILE_IMAGE_TIERS)
    top_card_title: list[SelectorTier] = _tiers(tables.TOP_CARD_TITLE_TIERS)
    top_card_company: list[SelectorTier] = _tiers(tables.TOP_CARD_COMPANY_TIERS)
    top_card_company_link: list[SelectorTier] = _tiers(tables.TOP_CARD_COMPANY_LINK_TIERS)
    connections: list[SelectorTier] = _tiers(tables.CONNECTIONS_TIERS)
    followers: list[SelectorTier] = _tiers(tables.FOLLOWERS_TIERS)

    # Contact block
    contact_containers: list[str] = _rows(tables.CONTACT_CONTAINER_SELECTORS)
    email: list[SelectorTier] = _tiers(tables.EMAIL_TIERS)
    phone: list[str] = _rows(tables.PHONE_SELECTORS)
    birthday: list[SelectorTier] = _tiers(tables.BIRTHDAY_TIERS)

    # Experience
    experience_rows: list[str] = _rows(tables.EXPERIENCE_ROW_SELECTORS)
    experience_title: list[SelectorTier] = _tiers(tables.EXPERIENCE_TITLE_TIERS)
    experience_company: list[SelectorTier] = _tiers(tables.EXPERIENCE_COMPANY_TIERS)
    experience_company_link: list[SelectorTier] = _tiers(tables.EXPERIENCE_COMPANY_LINK_TIERS)
    experience_date: list[SelectorTier] = _tiers(tables.EXPERIENCE_DATE_TIERS)
    experience_location: list[SelectorTier] = _tiers(tables.EXPERIENCE_LOCATION_TIERS)
    experience_description: list[SelectorTier] = _tiers(tables.EXPERIENCE_DESCRIPTION_TIERS)

    # Education
    education_rows: list[str] = _rows(tables.EDUCATION_ROW_SELECTORS)
    education_school: list[SelectorTier] = _tiers(tables.EDUCATION_SCHOOL_TIERS)
    education_degree: list[SelectorTier] = _tiers(tables.EDUCATION_DEGREE_TIERS)
    education_field_of_study: list[SelectorTier] = _tiers(tables.EDUCATION_FIELD_OF_STUDY_TIERS)
    education_date: list[SelectorTier] = _tiers(tables.EDUCATION_DATE_TIERS)

    # Engagement
    reactor_rows: list[str] = _rows(tables.REACTOR_ROW_SELECTORS)
    comment_rows: list[str] = _rows(tables.COMMENT_ROW_SELECTORS)
    profile_anchors: list[str] = _rows(tables.PROFILE_ANCHOR_SELECTORS)
    reactor_name: list[SelectorTier] = _tiers(tables.REACTOR_NAME_TIERS)
    commenter_name: list[SelectorTier] = _tiers(tables.COMMENTER_NAME_TIERS)
    engagement_headline: list[SelectorTier] = _tiers(tables.ENGAGEMENT_HEADLINE_TIERS)
    engagement_location: list[SelectorTier] = _tiers(tables.ENGAGEMENT_LOCATION_TIERS)
    reaction_label: list[SelectorTier] = _tiers(tables.REACTION_LABEL_TIERS)
    comment_text: list[SelectorTier] = _tiers(tables.COMMENT_TEXT_TIERS)

    # Company people lists
    account_cards: list[str] = _rows(tables.ACCOUNT_CARD_SELECTORS)
    account_anchors: list[str] = _rows(tables.ACCOUNT_ANCHOR_SELECTORS)
    account_name: list[SelectorTier] = _tiers(tables.ACCOUNT_NAME_TIERS)
    account_headline: list[SelectorTier] = _tiers(tables.ACCOUNT_HEADLINE_TIERS)
    account_location: list[SelectorTier] = _tiers(tables.ACCOUNT_LOCATION_TIERS)
    account_company_name: list[SelectorTier] = _tiers(tables.ACCOUNT_COMPANY_NAME_TIERS)

    @field_validator(
        "contact_containers",
        "phone",
        "experience_rows",
        "education_rows",
        "reactor_rows",
        "comment_rows",
        "profile_anchors",
        "account_cards",
        "account_anchors",
    )
    @classmethod
    def _compile_rows(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("Row selector lists cannot be empty")
        return [validate_selector(selector) for selector in value]


class EngineConfig(BaseModel):
    """Engine settings: link origin plus the selector catalog."""

    model_config = ConfigDict(extra="forbid")

    origin: str = Field(
        default=DEFAULT_ORIGIN, description="Base URL used to resolve relative links"
    )
    selectors: SelectorCatalog = Field(default_factory=SelectorCatalog)

    @field_validator("origin")
    @classmethod
    def _check_origin(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"Origin must be an absolute http(s) URL: {value}")
        return value

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from PROFILETRACE_CONFIG / PROFILETRACE_ORIGIN.

        The YAML file (if any) is loaded first; the origin variable wins over it.
        """
        config_path = os.getenv(ENV_CONFIG)
        config = load_config(config_path) if config_path else cls()

        origin = os.getenv(ENV_ORIGIN)
        if origin:
            config = cls(origin=origin, selectors=config.selectors)
        return config


def load_config(path: str | Path) -> EngineConfig:
    """Load an engine config from YAML.

    Args:
        path: Path to the YAML file.

    Returns:
        The loaded EngineConfig, defaults filled in for missing keys.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        pydantic.ValidationError: If a key is unknown or a selector is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return EngineConfig(**data)


def save_config(config: EngineConfig, path: str | Path) -> Path:
    """Write an engine config to YAML.

    Args:
        config: The config to save.
        path: Destination file.

    Returns:
        Path to the saved file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_none=True)

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    return path
