"""
ProfileTrace normalizer - scraping-artifact removal and value parsing.

Every function here returns None for "nothing usable" rather than raising;
a bad value on one field must never abort extraction of the others.
"""

import re
from collections.abc import Iterable
from urllib.parse import urljoin, urlparse

from .dom import Node

# "View Jane Doe's profile", "View profile" link chrome
_VIEW_PROFILE_RE = re.compile(r"\bView\b.*?\bprofile\b", re.IGNORECASE | re.DOTALL)

# "· 2nd degree connection" badges and everything after them
_DEGREE_SUFFIX_RE = re.compile(
    r"\b[1-3](?:st|nd|rd|th)?\s+degree\s+connection\b.*$", re.IGNORECASE | re.DOTALL
)

_WHITESPACE_RE = re.compile(r"\s+")

# Relationship badges mis-scraped as locations
_BADGE_RE = re.compile(r"\b(?:connections?|degree|followers?)\b", re.IGNORECASE)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_PAREN_RE = re.compile(r"\(.*?\)")
_DASH_RE = re.compile(r"[–—]")
_RANGE_SPLIT_RE = re.compile(r"\s*-\s*")
_DURATION_TAIL_RE = re.compile(r"\s*·.*$", re.DOTALL)
_PRESENT_RE = re.compile(r"present", re.IGNORECASE)
_DATE_LIKE_RE = re.compile(
    r"\b(?:19|20)\d{2}\s*[-–—]|\b\d+\s*(?:yrs?|mos?)\b|\bpresent\b", re.IGNORECASE
)

_COUNT_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)(?:\s*([kmb])\b)?", re.IGNORECASE)
_COUNT_SCALE = {"k": 1_000, "m": 1_000_000, "b": 1_000_000_000}

_EMPLOYMENT_TYPE_RE = re.compile(
    r"\s*·\s*(?:Self-employed|Full-time|Part-time|Contract|Freelance|Internship|"
    r"Seasonal|Apprenticeship|Temporary)\b.*$",
    re.IGNORECASE | re.DOTALL,
)

NAME_SEPARATORS = ("·", "|", "•")


def collapse_whitespace(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", value).strip()


def clean_text(raw: str | None) -> str | None:
    """Strip UI chrome and connection-degree suffixes, collapse whitespace."""
    if not raw:
        return None
    value = _VIEW_PROFILE_RE.sub(" ", raw)
    value = _DEGREE_SUFFIX_RE.sub(" ", value)
    value = collapse_whitespace(value)
    return value or None


def clean_attribute(raw: str | None) -> str | None:
    """Attribute values (href, src, content) only get whitespace cleanup."""
    if not raw:
        return None
    value = collapse_whitespace(raw)
    return value or None


def clean_location(raw: str | None, headline: str | None = None) -> str | None:
    """Clean a location, rejecting relationship badges and headline echoes."""
    value = clean_text(raw)
    if not value:
        return None
    if _BADGE_RE.search(value):
        return None
    if value.lower().startswith("status:"):
        return None
    if headline and value.casefold() == headline.strip().casefold():
        return None
    return value


def truncate_at_separator(value: str) -> str:
    """Cut trailing metadata introduced by ·, | or •."""
    for separator in NAME_SEPARATORS:
        index = value.find(separator)
        if index > 0:
            value = value[:index]
    return value


def clean_person_name(raw: str | None) -> str | None:
    """clean_text plus separator truncation ("Jane Doe · 2nd" -> "Jane Doe")."""
    if not raw:
        return None
    value = _VIEW_PROFILE_RE.sub(" ", raw)
    value = _DEGREE_SUFFIX_RE.sub(" ", value)
    value = truncate_at_separator(value)
    value = collapse_whitespace(value)
    return value or None


# "(3) Jane Doe | LinkedIn" unread-notification prefix in page titles
_NOTIFICATION_COUNT_RE = re.compile(r"^\s*\(\d+\+?\)\s*")

# Bare site names seen on login walls and error pages
SITE_NAMES = frozenset({"linkedin"})


def clean_full_name(raw: str | None) -> str | None:
    """clean_person_name for top-card and page-title sources; a bare site name is no name."""
    if not raw:
        return None
    value = clean_person_name(_NOTIFICATION_COUNT_RE.sub("", raw))
    if value and value.lower() in SITE_NAMES:
        return None
    return value


def clean_email(raw: str | None) -> str | None:
    """Strip a mailto: scheme and accept only local@domain.tld shapes."""
    if not raw:
        return None
    value = raw.strip()
    if value.lower().startswith("mailto:"):
        value = value[len("mailto:") :]
    # mailto links may carry ?subject=...
    value = value.split("?", 1)[0].strip()
    if not _EMAIL_RE.match(value):
        return None
    return value


def clean_company_name(raw: str | None) -> str | None:
    """Drop employment-type suffixes ("Acme · Self-employed" -> "Acme")."""
    value = clean_text(raw)
    if not value:
        return None
    value = _EMPLOYMENT_TYPE_RE.sub("", value).strip()
    return value or None


def extract_phone_numbers(nodes: Iterable[Node]) -> list[str]:
    """Phone numbers from tel: links or element text, deduped in order."""
    phones: list[str] = []
    seen: set[str] = set()
    for node in nodes:
        href = (node.attr("href") or "").strip()
        if href.lower().startswith("tel:"):
            raw = href[len("tel:") :]
        else:
            raw = node.text()
        value = collapse_whitespace(raw)
        if not value or value in seen:
            continue
        seen.add(value)
        phones.append(value)
    return phones


def parse_date_range_parts(raw: str | None) -> tuple[str | None, str | None]:
    """
    Split a free-text date range into (start, end).

    "Jan 2021 - Present · 3 yrs" -> ("Jan 2021", None)
    "May 2017 – Dec 2020 (3 yrs 8 mos)" -> ("May 2017", "Dec 2020")
    """
    if not raw:
        return None, None

    sanitized = _PAREN_RE.sub("", raw)
    sanitized = _DASH_RE.sub("-", sanitized)
    parts = _RANGE_SPLIT_RE.split(sanitized, maxsplit=1)

    start_raw = parts[0]
    end_raw = parts[1] if len(parts) > 1 else None

    start = clean_text(_DURATION_TAIL_RE.sub("", start_raw))
    end = clean_text(_DURATION_TAIL_RE.sub("", end_raw)) if end_raw is not None else None
    if end and _PRESENT_RE.search(end):
        end = None
    return start, end


def is_present_range(raw: str | None) -> bool:
    return bool(raw and _PRESENT_RE.search(raw))


def looks_like_date_range(raw: str | None) -> bool:
    """True for date captions ("Jan 2020 - Present · 4 yrs", "2015 - 2019", "3 mos")."""
    return bool(raw and _DATE_LIKE_RE.search(raw))


def parse_count_from_summary(raw: str | None) -> int | None:
    """Parse "500+ connections" -> 500, "1.2K followers" -> 1200."""
    if not raw:
        return None
    value = raw.replace("+", "").replace(",", "")
    match = _COUNT_RE.match(value)
    if not match:
        return None
    number = float(match.group(1))
    suffix = (match.group(2) or "").lower()
    return int(round(number * _COUNT_SCALE.get(suffix, 1)))


def resolve_url(href: str | None, origin: str) -> str | None:
    """Resolve href against origin; None unless the result is absolute http(s)."""
    if not href or not href.strip():
        return None
    try:
        resolved = urljoin(origin, href.strip())
        parsed = urlparse(resolved)
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    return resolved


def normalize_post_url(url: str) -> str:
    """
    Canonical post URL: absolute, no query/fragment, trailing slash.

    Relative input is resolved against https://www.linkedin.com.

    Raises:
        ValueError: If the URL is empty or cannot be parsed.
    """
    trimmed = (url or "").strip()
    if not trimmed:
        raise ValueError("Post URL cannot be empty")

    if not trimmed.startswith("http"):
        path = trimmed if trimmed.startswith("/") else f"/{trimmed}"
        trimmed = f"https://www.linkedin.com{path}"

    try:
        parsed = urlparse(trimmed)
    except ValueError as e:
        raise ValueError(f"Invalid post URL: {url}") from e
    if not parsed.netloc:
        raise ValueError(f"Invalid post URL: {url}")

    path = parsed.path or "/"
    if not path.endswith("/"):
        path = f"{path}/"
    return f"{parsed.scheme}://{parsed.netloc}{path}"
