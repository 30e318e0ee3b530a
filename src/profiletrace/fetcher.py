"""
ProfileTrace fetcher - polite snapshot loading with retries and caching.

Used by the CLI to turn a URL into HTML before handing it to the engine. The
engine itself never performs I/O.
"""

import hashlib
import json
import time
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential


@dataclass
class Snapshot:
    """An HTML document plus where it came from."""

    url: str
    success: bool
    status_code: int = 0
    html: str = ""
    error: str = ""
    from_cache: bool = False


@dataclass
class FetcherConfig:
    """Fetcher configuration."""

    timeout: float = 30.0
    delay_between_requests: float = 1.0  # Seconds between requests to same domain
    user_agent: str = "ProfileTrace/0.1 (HTML snapshot analysis)"
    cache_dir: Path | None = None  # If set, cache fetched pages here
    use_cache: bool = True  # Whether to use cached results if available


class SnapshotFetcher:
    """HTTP snapshot loader with domain throttling and a disk cache."""

    def __init__(self, config: FetcherConfig | None = None):
        self.config = config or FetcherConfig()
        self._domain_last_hit: dict[str, float] = {}
        self._cache_hits = 0
        self._cache_misses = 0

    def _get_domain(self, url: str) -> str:
        """Extract domain from URL."""
        return urlparse(url).netloc.lower()

    def _wait_for_domain(self, domain: str) -> None:
        """Wait if we've hit this domain recently."""
        last_hit = self._domain_last_hit.get(domain, 0)
        elapsed = time.time() - last_hit
        if elapsed < self.config.delay_between_requests:
            time.sleep(self.config.delay_between_requests - elapsed)
        self._domain_last_hit[domain] = time.time()

    def _url_to_cache_key(self, url: str) -> str:
        """Convert URL to a cache-safe filename."""
        return hashlib.sha256(url.encode()).hexdigest()[:16]

    def _get_cache_path(self, url: str) -> Path | None:
        if not self.config.cache_dir:
            return None
        return self.config.cache_dir / f"{self._url_to_cache_key(url)}.json"

    def _load_from_cache(self, url: str) -> Snapshot | None:
        """Try to load a cached snapshot."""
        if not self.config.use_cache:
            return None

        cache_path = self._get_cache_path(url)
        if not cache_path or not cache_path.exists():
            return None

        try:
            with open(cache_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return None

        self._cache_hits += 1
        return Snapshot(
            url=data["url"],
            success=data["success"],
            status_code=data.get("status_code", 0),
            html=data.get("html", ""),
            from_cache=True,
        )

    def _save_to_cache(self, snapshot: Snapshot) -> None:
        cache_path = self._get_cache_path(snapshot.url)
        if not cache_path:
            return

        cache_path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "url": snapshot.url,
            "success": snapshot.success,
            "status_code": snapshot.status_code,
            "html": snapshot.html,
        }
        with open(cache_path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def _fetch_with_retry(self, url: str) -> httpx.Response:
        """Fetch URL with retry logic."""
        with httpx.Client(
            timeout=self.config.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.config.user_agent},
        ) as client:
            return client.get(url)

    def fetch(self, url: str) -> Snapshot:
        """Fetch a single URL, respecting rate limits and cache."""
        cached = self._load_from_cache(url)
        if cached:
            return cached

        self._cache_misses += 1
        self._wait_for_domain(self._get_domain(url))

        try:
            resp = self._fetch_with_retry(url)
        except httpx.HTTPError as e:
            return Snapshot(url=url, success=False, error=str(e))

        snapshot = Snapshot(
            url=url,
            success=resp.status_code == 200,
            status_code=resp.status_code,
            html=resp.text,
        )
        if snapshot.success:
            self._save_to_cache(snapshot)
        else:
            snapshot.error = f"HTTP {resp.status_code}"
        return snapshot

    def get_cache_stats(self) -> dict[str, float]:
        """Get cache hit/miss statistics."""
        return {
            "hits": self._cache_hits,
            "misses": self._cache_misses,
            "hit_rate": self._cache_hits / max(1, self._cache_hits + self._cache_misses),
        }


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_source(source: str, fetcher: SnapshotFetcher | None = None) -> Snapshot:
    """
    Load HTML from a file path or an http(s) URL.

    Raises:
        FileNotFoundError: If a file path doesn't exist.
    """
    if is_url(source):
        return (fetcher or SnapshotFetcher()).fetch(source)

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Source not found: {source}")
    html = path.read_text(encoding="utf-8", errors="replace")
    return Snapshot(url=path.resolve().as_uri(), success=True, html=html)
