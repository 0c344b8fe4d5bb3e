from pathlib import Path

import pytest

from tubely.assets.asset_errors import StorageWriteError
from tubely.assets.asset_models import AssetLocator, AssetSlot
from tubely.storage.data_url import DataUrlAssetEncoder
from tubely.storage.local_disk import LocalDiskAssetStorage
from tubely.storage.memory import InMemoryAssetCache

from tests.helpers.data_urls import decode_data_url


@pytest.mark.asyncio
async def test_memory_cache_round_trip(upload_factory) -> None:
    cache = InMemoryAssetCache(public_base_url="http://localhost:8091", slot=AssetSlot.THUMBNAIL)
    data = bytes(range(256)) * 4

    descriptor = await cache.store(
        upload_factory(data, content_type="image/png"),
        "image/png",
        AssetLocator(key="ignored.png"),
        "video-1",
    )
    stored = cache.retrieve("video-1")

    assert descriptor.url == "http://localhost:8091/api/assets/thumbnail/video-1"
    assert descriptor.key == "video-1"
    assert stored is not None
    assert stored.data == data
    assert stored.media_type == "image/png"


@pytest.mark.asyncio
async def test_memory_cache_last_write_wins(upload_factory) -> None:
    cache = InMemoryAssetCache(public_base_url="http://x", slot=AssetSlot.THUMBNAIL)
    locator = AssetLocator(key="k.png")

    await cache.store(upload_factory(b"first", content_type="image/png"), "image/png", locator, "v")
    await cache.store(upload_factory(b"second", content_type="image/jpeg"), "image/jpeg", locator, "v")

    stored = cache.retrieve("v")
    assert stored is not None
    assert stored.data == b"second"
    assert stored.media_type == "image/jpeg"
    assert len(cache.entries) == 1


def test_memory_cache_miss_returns_none() -> None:
    cache = InMemoryAssetCache(public_base_url="http://x", slot=AssetSlot.VIDEO)

    assert cache.retrieve("nothing") is None


def test_memory_caches_are_independent_instances() -> None:
    thumbnails = InMemoryAssetCache(public_base_url="http://x", slot=AssetSlot.THUMBNAIL)
    videos = InMemoryAssetCache(public_base_url="http://x", slot=AssetSlot.VIDEO)

    assert thumbnails.entries is not videos.entries


@pytest.mark.asyncio
async def test_local_disk_writes_file_and_builds_public_url(tmp_path: Path, upload_factory) -> None:
    storage = LocalDiskAssetStorage(root=tmp_path, public_base_url="http://localhost:8091")
    locator = AssetLocator(key="abc.png")

    descriptor = await storage.store(
        upload_factory(b"png-bytes", content_type="image/png"), "image/png", locator, "video-1"
    )

    assert (tmp_path / "abc.png").read_bytes() == b"png-bytes"
    assert descriptor.url == "http://localhost:8091/assets/abc.png"
    assert descriptor.key == "abc.png"


@pytest.mark.asyncio
async def test_local_disk_write_failure_raises_storage_error(tmp_path: Path, upload_factory) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_bytes(b"")
    storage = LocalDiskAssetStorage(root=blocker, public_base_url="http://x")

    with pytest.raises(StorageWriteError):
        await storage.store(
            upload_factory(b"data", content_type="image/png"),
            "image/png",
            AssetLocator(key="abc.png"),
            "video-1",
        )


@pytest.mark.asyncio
async def test_data_url_decodes_to_original_bytes(upload_factory) -> None:
    data = bytes(range(256)) * 1024
    encoder = DataUrlAssetEncoder()

    descriptor = await encoder.store(
        upload_factory(data, content_type="image/png"), "image/png", AssetLocator(key="x.png"), "v"
    )

    assert descriptor.url.startswith("data:image/png;base64,")
    media_type, decoded = decode_data_url(descriptor.url)
    assert media_type == "image/png"
    assert decoded == data
    assert encoder.retrieve("v") is None


def test_decode_data_url_rejects_plain_url() -> None:
    with pytest.raises(ValueError):
        decode_data_url("https://example.com/a.png")
