"""Application configuration builder."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .db.db_init import init_db

STORAGE_KINDS = ("memory", "local_disk", "data_url", "s3")
S3_KEYING_MODES = ("video_id", "random")


@dataclass(slots=True)
class AssetPaths:
    root: Path
    staging: Path


@dataclass(slots=True)
class UploadLimits:
    thumbnail_max_bytes: int
    video_max_bytes: int
    video_content_types: tuple[str, ...]


@dataclass(slots=True)
class S3Settings:
    bucket: str
    region: str
    endpoint_url: str | None = None


@dataclass(slots=True)
class AppConfig:
    asset_paths: AssetPaths
    upload_limits: UploadLimits
    s3: S3Settings
    thumbnail_storage: str
    video_storage: str
    video_s3_keying: str
    public_base_url: str
    jwt_secret: str
    database_url: str
    engine: Engine
    session_factory: sessionmaker[Session]


def _ensure_asset_paths(paths: AssetPaths) -> None:
    paths.root.mkdir(parents=True, exist_ok=True)
    paths.staging.mkdir(parents=True, exist_ok=True)


def _choice(name: str, default: str, allowed: tuple[str, ...]) -> str:
    value = os.getenv(name, default).strip().lower()
    if value not in allowed:
        raise ValueError(f"{name} must be one of {', '.join(allowed)}, got '{value}'")
    return value


def load_config() -> AppConfig:
    """Load configuration from environment (SQLite by default)."""
    jwt_secret = os.getenv("JWT_SECRET", "")
    if not jwt_secret:
        raise RuntimeError("JWT_SECRET is not configured")

    root = Path(os.getenv("ASSETS_ROOT", "assets"))
    asset_paths = AssetPaths(root=root, staging=root / ".staging")
    _ensure_asset_paths(asset_paths)

    upload_limits = UploadLimits(
        thumbnail_max_bytes=int(os.getenv("THUMBNAIL_MAX_BYTES", 10 << 20)),
        video_max_bytes=int(os.getenv("VIDEO_MAX_BYTES", 1 << 30)),
        video_content_types=("video/mp4",),
    )

    s3 = S3Settings(
        bucket=os.getenv("S3_BUCKET", ""),
        region=os.getenv("S3_REGION", "us-east-1"),
        endpoint_url=os.getenv("S3_ENDPOINT") or None,
    )
    thumbnail_storage = _choice("THUMBNAIL_STORAGE", "memory", STORAGE_KINDS)
    video_storage = _choice("VIDEO_STORAGE", "s3", STORAGE_KINDS)
    if "s3" in (thumbnail_storage, video_storage) and not s3.bucket:
        raise RuntimeError("S3_BUCKET is required for the s3 storage backend")

    database_url = os.getenv("DATABASE_URL", "sqlite:///tubely.db")
    engine = create_engine(database_url, future=True)
    session_factory: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)

    init_db(engine)

    return AppConfig(
        asset_paths=asset_paths,
        upload_limits=upload_limits,
        s3=s3,
        thumbnail_storage=thumbnail_storage,
        video_storage=video_storage,
        video_s3_keying=_choice("VIDEO_S3_KEYING", "video_id", S3_KEYING_MODES),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:8091").rstrip("/"),
        jwt_secret=jwt_secret,
        database_url=database_url,
        engine=engine,
        session_factory=session_factory,
    )
