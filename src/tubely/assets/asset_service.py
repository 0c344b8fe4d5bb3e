"""Domain service tying uploaded assets to their video records."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from ..storage.storage_base import AssetStorage
from ..videos.videos_models import Video
from ..videos.videos_repository import VideoRepository
from .asset_errors import (
    AssetNotFoundError,
    ForbiddenError,
    PersistenceError,
    VideoNotFoundError,
)
from .asset_models import AssetSlot, SlotPolicy, StoredAsset
from .locator import LocatorStrategy
from .validation import UploadValidator

logger = logging.getLogger(__name__)

FormReader = Callable[[], Awaitable[Any]]

_URL_FIELDS = {
    AssetSlot.THUMBNAIL: "thumbnail_url",
    AssetSlot.VIDEO: "video_url",
}


@dataclass(slots=True)
class SlotBinding:
    """Everything needed to ingest one slot."""

    policy: SlotPolicy
    locator: LocatorStrategy
    storage: AssetStorage


@dataclass(slots=True)
class AssetService:
    """Coordinates validation, storage and record update for uploads."""

    video_repo: VideoRepository
    validator: UploadValidator
    bindings: Mapping[AssetSlot, SlotBinding]
    log: logging.Logger = field(default_factory=lambda: logger)

    def binding(self, slot: AssetSlot) -> SlotBinding:
        try:
            return self.bindings[slot]
        except KeyError as exc:
            raise RuntimeError(f"No storage configured for slot '{slot.value}'") from exc

    async def ingest(
        self,
        video_id: str,
        user_id: str,
        slot: AssetSlot,
        read_form: FormReader,
    ) -> Video:
        """Store an uploaded asset and point the video's slot URL at it.

        Cheap checks run first: the record lookup and ownership check happen
        before the multipart body is parsed, and the storage write happens
        only after validation passes. The URL field is mutated only once the
        backend reports success.

        If the final record update fails the asset stays stored while the
        record keeps its previous URL; no compensating delete is attempted.
        """
        binding = self.binding(slot)
        video = await self._load_video(video_id)
        if video.user_id != user_id:
            self.log.warning(
                "asset.upload.forbidden",
                extra={"video_id": video_id, "user_id": user_id, "slot": slot.value},
            )
            raise ForbiddenError("User is not the owner of this video")

        self.log.info(
            "asset.upload.start",
            extra={"video_id": video_id, "user_id": user_id, "slot": slot.value},
        )
        form = await read_form()
        try:
            upload = form.get(binding.policy.field_name)
            result = await self.validator.validate(binding.policy, upload)
            locator = binding.locator.derive(result.content_type, video_id)
            descriptor = await binding.storage.store(
                upload, result.content_type, locator, video_id
            )
        finally:
            await form.close()

        setattr(video, _URL_FIELDS[slot], descriptor.url)
        try:
            updated = await asyncio.to_thread(self.video_repo.update_video, video)
        except (KeyError, SQLAlchemyError) as exc:
            self.log.error(
                "asset.persist_failed",
                extra={
                    "video_id": video_id,
                    "slot": slot.value,
                    "backend": binding.storage.kind,
                    "orphaned_key": descriptor.key,
                },
                exc_info=exc,
            )
            raise PersistenceError(f"Failed to update video {video_id}") from exc

        self.log.info(
            "asset.upload.stored",
            extra={
                "video_id": video_id,
                "slot": slot.value,
                "backend": binding.storage.kind,
                "key": descriptor.key,
                "size_bytes": result.size_bytes,
                "content_type": result.content_type,
            },
        )
        return updated

    async def fetch(self, slot: AssetSlot, video_id: str) -> StoredAsset:
        """Return bytes held server-side for the video's slot."""
        await self._load_video(video_id)
        stored = self.binding(slot).storage.retrieve(video_id)
        if stored is None:
            raise AssetNotFoundError(f"No {slot.value} stored for video {video_id}")
        return stored

    async def _load_video(self, video_id: str) -> Video:
        video = await asyncio.to_thread(self.video_repo.get_video, video_id)
        if video is None:
            raise VideoNotFoundError(f"Video '{video_id}' not found")
        return video
