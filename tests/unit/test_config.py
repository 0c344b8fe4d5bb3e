from pathlib import Path

import pytest

from tubely.config import load_config


@pytest.fixture()
def env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("JWT_SECRET", "secret")
    monkeypatch.setenv("ASSETS_ROOT", str(tmp_path / "assets"))
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{(tmp_path / 'cfg.db').as_posix()}")
    monkeypatch.setenv("S3_BUCKET", "tubely-test")
    for name in ("THUMBNAIL_STORAGE", "VIDEO_STORAGE", "THUMBNAIL_MAX_BYTES", "VIDEO_MAX_BYTES"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_load_config_defaults(env, tmp_path: Path) -> None:
    config = load_config()

    assert config.thumbnail_storage == "memory"
    assert config.video_storage == "s3"
    assert config.upload_limits.thumbnail_max_bytes == 10 * 1024 * 1024
    assert config.upload_limits.video_max_bytes == 1024 * 1024 * 1024
    assert config.upload_limits.video_content_types == ("video/mp4",)
    assert config.asset_paths.staging.is_dir()
    assert config.asset_paths.staging.parent == tmp_path / "assets"


def test_load_config_rejects_unknown_backend(env) -> None:
    env.setenv("THUMBNAIL_STORAGE", "floppy")

    with pytest.raises(ValueError):
        load_config()


def test_load_config_requires_bucket_for_s3(env) -> None:
    env.setenv("S3_BUCKET", "")

    with pytest.raises(RuntimeError):
        load_config()


def test_load_config_requires_jwt_secret(env) -> None:
    env.setenv("JWT_SECRET", "")

    with pytest.raises(RuntimeError):
        load_config()
