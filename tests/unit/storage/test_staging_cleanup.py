import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

from tubely.storage.staging_cleanup import cleanup_stale_staging, list_stale_staging


def make_file(path: Path, *, age: timedelta, now: datetime) -> Path:
    path.write_bytes(b"partial")
    stamp = (now - age).timestamp()
    os.utime(path, (stamp, stamp))
    return path


def test_cleanup_removes_only_old_files(tmp_path: Path) -> None:
    now = datetime.now(timezone.utc)
    old = make_file(tmp_path / "old.mp4", age=timedelta(hours=2), now=now)
    fresh = make_file(tmp_path / "fresh.mp4", age=timedelta(minutes=1), now=now)

    removed = cleanup_stale_staging(tmp_path, timedelta(hours=1), now)

    assert removed == 1
    assert not old.exists()
    assert fresh.exists()


def test_list_stale_on_missing_directory(tmp_path: Path) -> None:
    assert list_stale_staging(tmp_path / "nope", timedelta(minutes=1)) == []
