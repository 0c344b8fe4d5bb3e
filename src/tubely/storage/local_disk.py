"""Permanent asset storage on the local filesystem."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from starlette.datastructures import UploadFile

from ..assets.asset_errors import StorageWriteError
from ..assets.asset_models import AssetLocator, RetrievalDescriptor
from .storage_base import AssetStorage, write_upload

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LocalDiskAssetStorage(AssetStorage):
    """Write assets under ``root`` and expose them below ``/assets``."""

    root: Path
    public_base_url: str
    kind: str = "local_disk"

    def disk_path(self, locator: AssetLocator) -> Path:
        return self.root / locator.key

    def url_for(self, locator: AssetLocator) -> str:
        return f"{self.public_base_url}/assets/{locator.key}"

    async def store(
        self,
        upload: UploadFile,
        media_type: str,
        locator: AssetLocator,
        video_id: str,
    ) -> RetrievalDescriptor:
        target = self.disk_path(locator)
        try:
            written = await write_upload(upload, target)
        except OSError as exc:
            logger.error(
                "storage.disk.write_failed",
                extra={"video_id": video_id, "path": str(target)},
                exc_info=exc,
            )
            raise StorageWriteError(f"Failed to write {target}") from exc
        logger.info(
            "storage.disk.stored",
            extra={"video_id": video_id, "path": str(target), "size_bytes": written},
        )
        return RetrievalDescriptor(url=self.url_for(locator), key=locator.key)
