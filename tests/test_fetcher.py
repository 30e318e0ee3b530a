"""Tests for snapshot loading."""

from pathlib import Path

import httpx
import pytest

from profiletrace.fetcher import FetcherConfig, SnapshotFetcher, is_url, load_source

URL = "https://www.linkedin.com/in/sarah-johnson/"


def _fetcher(tmp_path: Path) -> SnapshotFetcher:
    return SnapshotFetcher(FetcherConfig(delay_between_requests=0, cache_dir=tmp_path / "cache"))


class TestLoadSource:
    """Tests for load_source."""

    def test_is_url(self) -> None:
        """Test only http(s) sources count as URLs."""
        assert is_url(URL)
        assert not is_url("snapshots/sarah.html")

    def test_file(self, modern_html: str, tmp_path: Path) -> None:
        """Test a file path is read as-is."""
        path = tmp_path / "sarah.html"
        path.write_text(modern_html, encoding="utf-8")

        snapshot = load_source(str(path))
        assert snapshot.success is True
        assert snapshot.html == modern_html
        assert snapshot.url.startswith("file://")

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing path raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_source(str(tmp_path / "missing.html"))

    def test_url_uses_fetcher(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test URLs are delegated to the given fetcher."""
        fetcher = _fetcher(tmp_path)
        monkeypatch.setattr(
            fetcher, "_fetch_with_retry", lambda url: httpx.Response(200, text="<h1>Hi</h1>")
        )
        snapshot = load_source(URL, fetcher=fetcher)
        assert snapshot.html == "<h1>Hi</h1>"


class TestSnapshotFetcher:
    """Tests for SnapshotFetcher."""

    def test_success_is_cached(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a successful fetch is served from cache the second time."""
        fetcher = _fetcher(tmp_path)
        calls: list[str] = []

        def fake_fetch(url: str) -> httpx.Response:
            calls.append(url)
            return httpx.Response(200, text="<h1>Sarah Johnson</h1>")

        monkeypatch.setattr(fetcher, "_fetch_with_retry", fake_fetch)

        first = fetcher.fetch(URL)
        second = fetcher.fetch(URL)

        assert first.success is True
        assert first.from_cache is False
        assert second.from_cache is True
        assert second.html == "<h1>Sarah Johnson</h1>"
        assert calls == [URL]
        assert fetcher.get_cache_stats()["hits"] == 1
        assert fetcher.get_cache_stats()["misses"] == 1

    def test_http_error_status(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a non-200 response is a failed, uncached snapshot."""
        fetcher = _fetcher(tmp_path)
        monkeypatch.setattr(fetcher, "_fetch_with_retry", lambda url: httpx.Response(404))

        snapshot = fetcher.fetch(URL)
        assert snapshot.success is False
        assert snapshot.status_code == 404
        assert snapshot.error == "HTTP 404"
        assert not (tmp_path / "cache").exists()

    def test_transport_error(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a transport failure is reported on the snapshot."""
        fetcher = _fetcher(tmp_path)

        def refuse(url: str) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        monkeypatch.setattr(fetcher, "_fetch_with_retry", refuse)

        snapshot = fetcher.fetch(URL)
        assert snapshot.success is False
        assert "connection refused" in snapshot.error

    def test_cache_disabled(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test use_cache=False always refetches."""
        fetcher = SnapshotFetcher(
            FetcherConfig(delay_between_requests=0, cache_dir=tmp_path, use_cache=False)
        )
        monkeypatch.setattr(
            fetcher, "_fetch_with_retry", lambda url: httpx.Response(200, text="<p>x</p>")
        )

        fetcher.fetch(URL)
        assert fetcher.fetch(URL).from_cache is False
        assert fetcher.get_cache_stats()["misses"] == 2
