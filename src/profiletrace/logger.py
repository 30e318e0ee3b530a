"""
ProfileTrace structured logging - operator-grade telemetry for batch runs.

Answers two questions:
1. What phase is it in?
2. Which document is it on, and how well did it match?

The extraction engine never logs; only the CLI and batch runner do.
"""

import sys
from datetime import UTC, datetime

# Force line buffering for immediate output (important on Windows/PowerShell)
try:
    sys.stdout.reconfigure(line_buffering=True)  # type: ignore
except Exception:
    pass  # Fallback for non-reconfigurable streams


def _print(*args: object, **kwargs: object) -> None:
    """Print with immediate flush."""
    print(*args, **kwargs, flush=True)


def _eprint(*args: object, **kwargs: object) -> None:
    """Print to stderr with immediate flush."""
    print(*args, **kwargs, file=sys.stderr, flush=True)


class ProgressLogger:
    """
    Structured progress logger for ProfileTrace runs.

    Gives visibility into multi-document runs without flooding the console:
    one line per document, details only in verbose mode.
    """

    def __init__(self, run_id: str, verbose: bool = False):
        self.run_id = run_id
        self.verbose = verbose
        self.start_time = datetime.now(UTC)
        self.phase_times: dict[str, datetime] = {}

    def phase(self, name: str, detail: str = "") -> None:
        """Log a major phase transition."""
        now = datetime.now(UTC)
        self.phase_times[name] = now
        elapsed = (now - self.start_time).total_seconds()

        if detail:
            _print(f"[Phase] {name}: {detail} ({elapsed:.1f}s)")
        else:
            _print(f"[Phase] {name} ({elapsed:.1f}s)")

    def document(self, name: str, index: int, total: int, detail: str = "") -> None:
        """Log progress for one document (e.g. Doc 3/12)."""
        pct = (index / total * 100) if total > 0 else 0
        if detail:
            _print(f"  [Doc {index}/{total}] {name} - {detail} ({pct:.0f}%)")
        else:
            _print(f"  [Doc {index}/{total}] {name} ({pct:.0f}%)")

    def fields(self, matched: int, total: int, warnings: int = 0) -> None:
        """Log how many fields resolved for a document."""
        if warnings > 0:
            _print(f"    [Fields] {matched}/{total} matched ({warnings} warnings)")
        else:
            _print(f"    [Fields] {matched}/{total} matched")

    def engagement(self, kind: str, found: int) -> None:
        """Log an engagement extraction result."""
        _print(f"    [Engagement] {found} {kind}")

    def tier_distribution(self, tiers: dict[str, int]) -> None:
        """Log which tiers produced the matches."""
        tier_str = ", ".join(f"{k}={v}" for k, v in sorted(tiers.items()))
        _print(f"  [Tiers] {tier_str}")

    def skip(self, reason: str, detail: str) -> None:
        """Log a skip/drop with reason (verbose only)."""
        if self.verbose:
            _print(f"    [Skip] {reason}: {detail[:60]}...")

    def finish(self, documents: int, failed: int = 0, output_dir: str = "") -> None:
        """Log run completion."""
        elapsed = (datetime.now(UTC) - self.start_time).total_seconds()
        minutes = int(elapsed // 60)
        seconds = int(elapsed % 60)

        _print(f"\n[ProfileTrace] Run complete in {minutes}m{seconds}s")
        _print(f"  Documents: {documents}")
        if failed:
            _print(f"  Failed: {failed}")
        if output_dir:
            _print(f"  Output: {output_dir}")

    def error(self, msg: str) -> None:
        """Log an error."""
        _eprint(f"[Error] {msg}")

    def warning(self, msg: str) -> None:
        """Log a warning."""
        _eprint(f"[Warning] {msg}")
