"""ProfileTrace - explainable profile and engagement extraction from HTML snapshots."""

from .analyzer import ProfileAnalyzer, analyze_document, analyze_html, extract_profile_details
from .config import EngineConfig, SelectorCatalog, load_config, save_config
from .dom import Node, parse_html
from .engagement import extract_account_profiles, extract_comments, extract_reactors
from .matcher import compute_confidence, match_attribute, match_text
from .merge import first_present, merge_engagement_details, merge_profile_details, needs_enrichment
from .models import (
    AccountProfile,
    AnalysisResult,
    EducationEntry,
    EngagementProfile,
    ExperienceEntry,
    FieldMatch,
    ProfileExtraction,
)
from .normalize import normalize_post_url
from .selectors import SelectorTier

__version__ = "0.1.0"

__all__ = [
    "AccountProfile",
    "AnalysisResult",
    "EducationEntry",
    "EngagementProfile",
    "EngineConfig",
    "ExperienceEntry",
    "FieldMatch",
    "Node",
    "ProfileAnalyzer",
    "ProfileExtraction",
    "SelectorCatalog",
    "SelectorTier",
    "analyze_document",
    "analyze_html",
    "compute_confidence",
    "extract_account_profiles",
    "extract_comments",
    "extract_profile_details",
    "extract_reactors",
    "first_present",
    "load_config",
    "match_attribute",
    "match_text",
    "merge_engagement_details",
    "merge_profile_details",
    "needs_enrichment",
    "normalize_post_url",
    "parse_html",
    "save_config",
]
