"""Sweep staging files whose best-effort deletion failed."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

logger = logging.getLogger(__name__)


def list_stale_staging(
    staging_dir: Path, max_age: timedelta, reference_time: datetime | None = None
) -> list[Path]:
    """Return staging files last modified before ``reference_time - max_age``."""
    if not staging_dir.exists():
        return []
    now = reference_time or datetime.now(timezone.utc)
    cutoff = (now - max_age).timestamp()
    stale: list[Path] = []
    for path in sorted(staging_dir.iterdir()):
        if path.is_file() and path.stat().st_mtime < cutoff:
            stale.append(path)
    return stale


def cleanup_stale_staging(
    staging_dir: Path, max_age: timedelta, reference_time: datetime | None = None
) -> int:
    removed = 0
    for path in list_stale_staging(staging_dir, max_age, reference_time):
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning(
                "storage.staging.sweep_failed", extra={"path": str(path)}, exc_info=exc
            )
            continue
        removed += 1
        logger.info("storage.staging.swept", extra={"path": str(path)})
    return removed
