"""S3 object storage fed through a local staging file."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from boto3.exceptions import Boto3Error
from botocore.exceptions import BotoCoreError, ClientError
from starlette.datastructures import UploadFile

from ..assets.asset_errors import StorageWriteError
from ..assets.asset_models import AssetLocator, RetrievalDescriptor
from ..assets.locator import RandomAssetLocator
from .storage_base import AssetStorage, write_upload

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StagedS3AssetStorage(AssetStorage):
    """Spool the upload to ``staging_dir`` then transfer it to S3.

    The staging file only exists to hand a path to ``upload_file``; it is
    removed on every exit path and is never read back as a fallback.
    """

    staging_dir: Path
    bucket: str
    region: str
    client: Any
    staging_locator: RandomAssetLocator = field(default_factory=RandomAssetLocator)
    kind: str = "s3"

    def object_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    @asynccontextmanager
    async def staged_file(self, media_type: str, video_id: str) -> AsyncIterator[Path]:
        path = self.staging_dir / self.staging_locator.derive(media_type, video_id).key
        try:
            yield path
        finally:
            await self._discard(path, video_id)

    async def store(
        self,
        upload: UploadFile,
        media_type: str,
        locator: AssetLocator,
        video_id: str,
    ) -> RetrievalDescriptor:
        async with self.staged_file(media_type, video_id) as staged:
            try:
                written = await write_upload(upload, staged)
            except OSError as exc:
                logger.error(
                    "storage.staging.write_failed",
                    extra={"video_id": video_id, "path": str(staged)},
                    exc_info=exc,
                )
                raise StorageWriteError(f"Failed to stage upload at {staged}") from exc

            # no timeout: a stalled transfer holds the request open
            try:
                await asyncio.to_thread(
                    self.client.upload_file,
                    str(staged),
                    self.bucket,
                    locator.key,
                    ExtraArgs={"ContentType": media_type},
                )
            except (Boto3Error, BotoCoreError, ClientError, OSError) as exc:
                logger.error(
                    "storage.s3.transfer_failed",
                    extra={"video_id": video_id, "bucket": self.bucket, "key": locator.key},
                    exc_info=exc,
                )
                raise StorageWriteError(
                    f"Failed to upload {locator.key} to bucket {self.bucket}"
                ) from exc

        logger.info(
            "storage.s3.stored",
            extra={
                "video_id": video_id,
                "bucket": self.bucket,
                "key": locator.key,
                "size_bytes": written,
            },
        )
        return RetrievalDescriptor(url=self.object_url(locator.key), key=locator.key)

    @staticmethod
    async def _discard(path: Path, video_id: str) -> None:
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as exc:
            # left for scripts/cleanup_staging.py
            logger.warning(
                "storage.staging.cleanup_failed",
                extra={"video_id": video_id, "path": str(path)},
                exc_info=exc,
            )
