"""Storage backends for uploaded assets."""

from __future__ import annotations

from .data_url import DataUrlAssetEncoder
from .local_disk import LocalDiskAssetStorage
from .memory import InMemoryAssetCache
from .s3_staged import StagedS3AssetStorage
from .storage_base import AssetStorage

__all__ = [
    "AssetStorage",
    "DataUrlAssetEncoder",
    "InMemoryAssetCache",
    "LocalDiskAssetStorage",
    "StagedS3AssetStorage",
]
