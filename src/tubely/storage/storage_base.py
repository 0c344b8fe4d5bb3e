"""Abstractions over asset storage backends."""

from __future__ import annotations

import asyncio
from pathlib import Path

from starlette.datastructures import UploadFile

from ..assets.asset_models import AssetLocator, RetrievalDescriptor, StoredAsset

CHUNK_SIZE = 1 * 1024 * 1024  # 1 MiB


class AssetStorage:
    """Persistence API shared by every storage backend.

    Backends are chosen once per slot when the application is wired, so the
    ingest flow never needs to know which one it talks to.
    """

    kind: str = "abstract"

    async def store(
        self,
        upload: UploadFile,
        media_type: str,
        locator: AssetLocator,
        video_id: str,
    ) -> RetrievalDescriptor:
        """Persist the upload and return a descriptor clients can resolve.

        Raises :class:`~tubely.assets.asset_errors.StorageWriteError` on any
        failure of the underlying medium.
        """

        raise NotImplementedError

    def retrieve(self, video_id: str) -> StoredAsset | None:
        """Return bytes kept server-side for ``video_id``.

        Only backends holding data in process answer; the rest return None
        because their descriptors are fetched by clients directly.
        """

        return None


async def write_upload(upload: UploadFile, target: Path, chunk_size: int = CHUNK_SIZE) -> int:
    """Stream ``upload`` into ``target`` without blocking the event loop."""
    target.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    await upload.seek(0)
    sink = await asyncio.to_thread(target.open, "wb")
    try:
        while True:
            chunk = await upload.read(chunk_size)
            if not chunk:
                break
            await asyncio.to_thread(sink.write, chunk)
            written += len(chunk)
    finally:
        await asyncio.to_thread(sink.close)
    return written


async def read_upload(upload: UploadFile) -> bytes:
    await upload.seek(0)
    return await upload.read()
