"""
ProfileTrace merge helpers - explicit precedence across extraction sources.

Every merge is "first present value wins", applied field by field, so the
precedence of each source stays auditable.
"""

import re
from typing import Any

from .models import EngagementProfile, ProfileExtraction

_NAME_ARTIFACT_RE = re.compile(r"\bView\b.*\bprofile\b", re.IGNORECASE)
_BADGE_RE = re.compile(r"\b(?:connection|degree)\b", re.IGNORECASE)


def is_present(value: Any) -> bool:
    """None, blank strings and empty lists count as absent."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


def first_present(*values: Any) -> Any:
    """Return the first present value, or None."""
    for value in values:
        if is_present(value):
            return value
    return None


def merge_profile_details(
    primary: ProfileExtraction, fallback: ProfileExtraction
) -> ProfileExtraction:
    """Field-by-field merge; primary wins wherever it has a value."""
    merged: dict[str, Any] = {}
    for name in ProfileExtraction.model_fields:
        merged[name] = first_present(getattr(primary, name), getattr(fallback, name))
        if merged[name] is None and isinstance(getattr(primary, name), list):
            merged[name] = []
    return ProfileExtraction(**merged)


def needs_enrichment(profile: EngagementProfile) -> bool:
    """True when an engagement lead is missing something a profile page could supply."""
    name = profile.full_name or ""
    if len(name) <= 1 or _NAME_ARTIFACT_RE.search(name):
        return True
    if not profile.headline or len(profile.headline) < 2:
        return True

    location = profile.location or ""
    if (
        len(location) < 2
        or _BADGE_RE.search(location)
        or location.strip() == profile.headline.strip()
    ):
        return True

    return not (profile.current_company and profile.email and profile.profile_image_url)


def merge_engagement_details(
    profile: EngagementProfile, details: ProfileExtraction
) -> EngagementProfile:
    """Overlay profile-page details onto an engagement lead (details win)."""
    return profile.model_copy(
        update={
            "full_name": first_present(details.full_name, profile.full_name),
            "headline": first_present(details.headline, profile.headline),
            "location": first_present(details.location, profile.location),
            "current_title": first_present(
                details.current_title,
                profile.current_title,
                details.headline,
                profile.headline,
            ),
            "current_company": first_present(details.current_company, profile.current_company),
            "current_company_url": first_present(
                details.current_company_url, profile.current_company_url
            ),
            "profile_image_url": first_present(
                details.profile_image_url, profile.profile_image_url
            ),
            "email": first_present(details.email, profile.email),
        }
    )
