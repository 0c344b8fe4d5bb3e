from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable
from io import BytesIO
from pathlib import Path
from typing import Any

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from starlette.datastructures import Headers, UploadFile

from tubely.config import AppConfig, AssetPaths, S3Settings, UploadLimits
from tubely.db.db_init import init_db
from tubely.videos.videos_repository import VideoRepository

TEST_JWT_SECRET = "test-signing-key"

os.environ.setdefault("JWT_SECRET", TEST_JWT_SECRET)


class FakeS3Client:
    """Records ``upload_file`` calls the way boto3's S3 client receives them."""

    def __init__(self, *, fail_with: Exception | None = None) -> None:
        self.objects: dict[tuple[str, str], tuple[bytes, str | None]] = {}
        self.staged_paths: list[Path] = []
        self.fail_with = fail_with

    def upload_file(self, filename: str, bucket: str, key: str, ExtraArgs: dict | None = None) -> None:
        path = Path(filename)
        self.staged_paths.append(path)
        assert path.exists(), "staging file must exist during the transfer"
        if self.fail_with is not None:
            raise self.fail_with
        content_type = (ExtraArgs or {}).get("ContentType")
        self.objects[(bucket, key)] = (path.read_bytes(), content_type)


def client_error(code: str = "500") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": "boom"}}, "PutObject")


@pytest.fixture()
def s3_client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture()
def failing_s3_client() -> FakeS3Client:
    return FakeS3Client(fail_with=client_error())


@pytest.fixture()
def engine(tmp_path: Path) -> Engine:
    engine = create_engine(
        f"sqlite:///{(tmp_path / 'tubely-test.db').as_posix()}",
        future=True,
        connect_args={"check_same_thread": False},
    )
    init_db(engine)
    return engine


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture()
def video_repo(session_factory) -> VideoRepository:
    return VideoRepository(session_factory)


@pytest.fixture()
def upload_factory() -> Callable[..., UploadFile]:
    def make_upload(
        data: bytes,
        *,
        content_type: str | None,
        filename: str = "upload.bin",
        declare_size: bool = True,
    ) -> UploadFile:
        headers = Headers({"content-type": content_type} if content_type else {})
        return UploadFile(
            file=BytesIO(data),
            size=len(data) if declare_size else None,
            filename=filename,
            headers=headers,
        )

    return make_upload


@pytest.fixture()
def config_factory(tmp_path: Path, engine: Engine, session_factory) -> Callable[..., AppConfig]:
    def build(**overrides: Any) -> AppConfig:
        root = tmp_path / "assets"
        paths = AssetPaths(root=root, staging=root / ".staging")
        paths.root.mkdir(parents=True, exist_ok=True)
        paths.staging.mkdir(parents=True, exist_ok=True)
        config = AppConfig(
            asset_paths=paths,
            upload_limits=UploadLimits(
                thumbnail_max_bytes=10 << 20,
                video_max_bytes=1 << 30,
                video_content_types=("video/mp4",),
            ),
            s3=S3Settings(bucket="tubely-test", region="us-east-2"),
            thumbnail_storage="memory",
            video_storage="s3",
            video_s3_keying="video_id",
            public_base_url="http://testserver",
            jwt_secret=TEST_JWT_SECRET,
            database_url=str(engine.url),
            engine=engine,
            session_factory=session_factory,
        )
        return dataclasses.replace(config, **overrides)

    return build


@pytest.fixture()
def client_factory(config_factory, s3_client) -> Callable[..., TestClient]:
    from tubely.main import create_app

    def build(*, s3: Any | None = None, **overrides: Any) -> TestClient:
        app = create_app(config_factory(**overrides), s3_client=s3 or s3_client)
        return TestClient(app)

    return build


@pytest.fixture()
def auth_header() -> Callable[[str], dict[str, str]]:
    from tubely.auth.auth_service import AuthService

    service = AuthService(signing_key=TEST_JWT_SECRET)

    def header(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {service.issue_token(user_id)}"}

    return header
