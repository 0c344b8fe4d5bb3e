"""In-process asset cache served back by the retrieval endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from starlette.datastructures import UploadFile

from ..assets.asset_errors import StorageWriteError
from ..assets.asset_models import AssetLocator, AssetSlot, RetrievalDescriptor, StoredAsset
from .storage_base import AssetStorage, read_upload

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class InMemoryAssetCache(AssetStorage):
    """Keep the latest upload per video in a process-wide mapping.

    Entries are never evicted and vanish on restart, so memory grows with the
    number of videos that ever received an upload. Use it for development or
    for small thumbnails only; it is not a durable store.
    """

    public_base_url: str
    slot: AssetSlot
    entries: dict[str, StoredAsset] = field(default_factory=dict)
    kind: str = "memory"

    def url_for(self, video_id: str) -> str:
        return f"{self.public_base_url}/api/assets/{self.slot.value}/{video_id}"

    async def store(
        self,
        upload: UploadFile,
        media_type: str,
        locator: AssetLocator,
        video_id: str,
    ) -> RetrievalDescriptor:
        try:
            data = await read_upload(upload)
        except OSError as exc:
            raise StorageWriteError(f"Failed to read upload for video {video_id}") from exc
        # last write wins for concurrent uploads to the same video
        self.entries[video_id] = StoredAsset(data=data, media_type=media_type)
        logger.info(
            "storage.memory.stored",
            extra={"video_id": video_id, "size_bytes": len(data), "entries": len(self.entries)},
        )
        return RetrievalDescriptor(url=self.url_for(video_id), key=video_id)

    def retrieve(self, video_id: str) -> StoredAsset | None:
        return self.entries.get(video_id)
