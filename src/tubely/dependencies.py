"""Dependency wiring helpers."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .assets.asset_models import AssetSlot, SlotPolicy
from .assets.asset_service import AssetService, SlotBinding
from .assets.assets_api import router as assets_router
from .assets.validation import UploadValidator
from .auth.auth_service import AuthService
from .config import AppConfig
from .storage.storage_factory import create_locator, create_storage
from .videos.videos_repository import VideoRepository

logger = logging.getLogger(__name__)


def build_slot_policies(config: AppConfig) -> dict[AssetSlot, SlotPolicy]:
    limits = config.upload_limits
    return {
        AssetSlot.THUMBNAIL: SlotPolicy(
            slot=AssetSlot.THUMBNAIL,
            field_name="thumbnail",
            max_bytes=limits.thumbnail_max_bytes,
        ),
        AssetSlot.VIDEO: SlotPolicy(
            slot=AssetSlot.VIDEO,
            field_name="video",
            max_bytes=limits.video_max_bytes,
            allowed_content_types=limits.video_content_types,
        ),
    }


def build_bindings(config: AppConfig, *, s3_client: Any | None = None) -> dict[AssetSlot, SlotBinding]:
    """Select one backend per slot; the choice is fixed for the process lifetime."""
    kinds = {
        AssetSlot.THUMBNAIL: config.thumbnail_storage,
        AssetSlot.VIDEO: config.video_storage,
    }
    policies = build_slot_policies(config)
    bindings: dict[AssetSlot, SlotBinding] = {}
    for slot, kind in kinds.items():
        bindings[slot] = SlotBinding(
            policy=policies[slot],
            locator=create_locator(kind, slot=slot, config=config),
            storage=create_storage(kind, slot=slot, config=config, s3_client=s3_client),
        )
        logger.info("storage.selected", extra={"slot": slot.value, "backend": kind})
    return bindings


def include_routers(app: FastAPI, config: AppConfig, *, s3_client: Any | None = None) -> None:
    """Mount module routers and attach services."""
    video_repo = VideoRepository(config.session_factory)
    bindings = build_bindings(config, s3_client=s3_client)
    asset_service = AssetService(
        video_repo=video_repo,
        validator=UploadValidator(),
        bindings=bindings,
    )
    auth_service = AuthService(signing_key=config.jwt_secret)

    app.state.config = config
    app.state.video_repo = video_repo
    app.state.asset_service = asset_service
    app.state.auth_service = auth_service

    app.include_router(assets_router)

    if any(binding.storage.kind == "local_disk" for binding in bindings.values()):
        app.mount(
            "/assets",
            StaticFiles(directory=config.asset_paths.root),
            name="assets",
        )
