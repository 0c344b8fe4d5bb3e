"""Descriptor-only backend that embeds the bytes in a data URL."""

from __future__ import annotations

import base64
from dataclasses import dataclass

from starlette.datastructures import UploadFile

from ..assets.asset_errors import StorageWriteError
from ..assets.asset_models import AssetLocator, RetrievalDescriptor
from .storage_base import AssetStorage, read_upload


@dataclass(slots=True)
class DataUrlAssetEncoder(AssetStorage):
    """Nothing is stored: the URL is the data.

    The record column grows by a third more than the payload, which makes this
    a poor fit for anything but small thumbnails.
    """

    kind: str = "data_url"

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
        encoded = base64.b64encode(data).decode("ascii")
        return RetrievalDescriptor(url=f"data:{media_type};base64,{encoded}", key=locator.key)
