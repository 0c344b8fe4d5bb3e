"""Factory for storage backends."""

from __future__ import annotations

from typing import Any

import boto3

from ..assets.asset_models import AssetSlot
from ..assets.locator import LocatorStrategy, RandomAssetLocator, VideoKeyLocator
from ..config import AppConfig
from .data_url import DataUrlAssetEncoder
from .local_disk import LocalDiskAssetStorage
from .memory import InMemoryAssetCache
from .s3_staged import StagedS3AssetStorage
from .storage_base import AssetStorage


def create_s3_client(config: AppConfig) -> Any:
    return boto3.client(
        "s3",
        region_name=config.s3.region,
        endpoint_url=config.s3.endpoint_url,
    )


def create_storage(
    kind: str,
    *,
    slot: AssetSlot,
    config: AppConfig,
    s3_client: Any | None = None,
) -> AssetStorage:
    """Instantiate the storage backend configured for ``slot``."""
    lower = kind.lower()
    if lower == "memory":
        return InMemoryAssetCache(public_base_url=config.public_base_url, slot=slot)
    if lower == "local_disk":
        return LocalDiskAssetStorage(
            root=config.asset_paths.root, public_base_url=config.public_base_url
        )
    if lower == "data_url":
        return DataUrlAssetEncoder()
    if lower == "s3":
        return StagedS3AssetStorage(
            staging_dir=config.asset_paths.staging,
            bucket=config.s3.bucket,
            region=config.s3.region,
            client=s3_client if s3_client is not None else create_s3_client(config),
        )
    raise ValueError(f"Unsupported storage backend '{kind}'")


def create_locator(kind: str, *, slot: AssetSlot, config: AppConfig) -> LocatorStrategy:
    """Pick the locator strategy matching the slot's backend."""
    if (
        slot is AssetSlot.VIDEO
        and kind.lower() == "s3"
        and config.video_s3_keying == "video_id"
    ):
        return VideoKeyLocator()
    return RandomAssetLocator()
