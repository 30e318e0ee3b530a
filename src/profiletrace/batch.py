"""
ProfileTrace batch runner - analyze many snapshots concurrently.

The analyzer holds no mutable state, so one instance is shared across a
thread pool. Results are written incrementally as documents complete.
"""

import json
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .analyzer import ProfileAnalyzer
from .config import EngineConfig
from .logger import ProgressLogger
from .models import AnalysisResult


@dataclass
class BatchItem:
    """Outcome for one document in a batch."""

    name: str
    result: AnalysisResult | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.result is not None


class IncrementalResultWriter:
    """Write one JSON file per analyzed document as it completes (thread-safe)."""

    def __init__(self, output_dir: Path):
        self.output_dir = output_dir
        self._lock = threading.Lock()
        self._count = 0

    def write(self, name: str, result: AnalysisResult) -> Path:
        path = self.output_dir / f"{name}.json"
        data = result.model_dump(mode="json", by_alias=True)
        with self._lock:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            self._count += 1
        return path

    @property
    def count(self) -> int:
        with self._lock:
            return self._count


def analyze_many(
    documents: dict[str, str],
    config: EngineConfig | None = None,
    max_workers: int = 4,
    generated_at: datetime | None = None,
    on_result: Callable[[BatchItem], None] | None = None,
) -> list[BatchItem]:
    """
    Analyze documents in parallel.

    Args:
        documents: Mapping of document name -> raw HTML.
        config: Engine config shared by all workers.
        max_workers: Max concurrent analyses.
        generated_at: Fixed timestamp for every result (for reproducible output).
        on_result: Callback(item) called as each document completes.

    Returns:
        One BatchItem per document, in the input order.
    """
    analyzer = ProfileAnalyzer(config)

    def analyze_one(name: str, html: str) -> BatchItem:
        try:
            result = analyzer.analyze_html(html, generated_at=generated_at)
            return BatchItem(name=name, result=result)
        except Exception as e:
            return BatchItem(name=name, error=str(e))

    items: dict[str, BatchItem] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(analyze_one, name, html): name for name, html in documents.items()
        }
        for future in as_completed(futures):
            item = future.result()
            items[item.name] = item
            if on_result:
                on_result(item)

    return [items[name] for name in documents]


def run_directory(
    directory: Path,
    output_dir: Path,
    config: EngineConfig | None = None,
    max_workers: int = 4,
    logger: ProgressLogger | None = None,
) -> list[BatchItem]:
    """
    Analyze every *.html file in a directory, writing <stem>.json per document.

    Raises:
        FileNotFoundError: If the directory doesn't exist.
    """
    if not directory.is_dir():
        raise FileNotFoundError(f"Directory not found: {directory}")

    logger = logger or ProgressLogger(run_id=directory.name)
    paths = sorted(directory.glob("*.html"))
    logger.phase("Load", f"{len(paths)} HTML files from {directory}")

    documents = {path.stem: path.read_text(encoding="utf-8", errors="replace") for path in paths}
    writer = IncrementalResultWriter(output_dir)
    completed = [0]  # Use list for mutable closure
    lock = threading.Lock()

    def on_result(item: BatchItem) -> None:
        with lock:
            completed[0] += 1
            index = completed[0]
        if item.result is None:
            logger.error(f"{item.name}: {item.error}")
            return
        writer.write(item.name, item.result)
        matched = sum(1 for match in item.result.fields if match.matched)
        logger.document(item.name, index, len(documents))
        logger.fields(matched, len(item.result.fields), len(item.result.metadata.warnings))
        for warning in item.result.metadata.warnings:
            logger.skip("Warning", warning)

    logger.phase("Analyze", f"{max_workers} workers")
    items = analyze_many(documents, config=config, max_workers=max_workers, on_result=on_result)

    tiers: dict[str, int] = {}
    for item in items:
        if item.result is None:
            continue
        for match in item.result.fields:
            if match.tier:
                tiers[match.tier] = tiers.get(match.tier, 0) + 1
    if tiers:
        logger.tier_distribution(tiers)

    return items
