"""Cron entry point for removing leftover staging files."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from tubely.config import load_config
from tubely.storage.staging_cleanup import cleanup_stale_staging, list_stale_staging


@dataclass(slots=True)
class CleanupSummary:
    staging_removed: int
    dry_run: bool


def perform_cleanup(
    *, dry_run: bool, max_age_minutes: int, reference_time: datetime | None = None
) -> CleanupSummary:
    """Execute cleanup logic and return summary counters."""
    config = load_config()
    staging_dir = config.asset_paths.staging
    max_age = timedelta(minutes=max_age_minutes)
    now = reference_time or datetime.now(timezone.utc)

    if dry_run:
        stale = list_stale_staging(staging_dir, max_age, now)
        return CleanupSummary(staging_removed=len(stale), dry_run=True)

    removed = cleanup_stale_staging(staging_dir, max_age, now)
    return CleanupSummary(staging_removed=removed, dry_run=False)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Remove staging files left by failed cleanups.")
    parser.add_argument("--dry-run", action="store_true", help="Only report counts without deleting files.")
    parser.add_argument(
        "--max-age-minutes",
        type=int,
        default=60,
        help="Only touch files older than this many minutes (default: 60).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or [])
    try:
        summary = perform_cleanup(dry_run=args.dry_run, max_age_minutes=args.max_age_minutes)
    except Exception as exc:
        print(f"cleanup failed: {exc}", file=sys.stderr)
        return 2

    if summary.dry_run:
        print(f"cleanup dry-run, staging_stale={summary.staging_removed}", file=sys.stdout)
    else:
        print(f"cleanup done, staging_removed={summary.staging_removed}", file=sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
