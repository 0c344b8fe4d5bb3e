"""HTTP routes for asset uploads and in-memory retrieval."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import Response

from ..auth.auth_dependencies import require_user
from .asset_errors import (
    AssetError,
    AssetNotFoundError,
    ForbiddenError,
    MissingMediaTypeError,
    MissingPayloadError,
    PayloadTooLargeError,
    PersistenceError,
    StorageWriteError,
    UnsupportedMediaError,
    VideoNotFoundError,
)
from .asset_models import AssetSlot, FailureReason
from .asset_schemas import VideoResponse
from .asset_service import AssetService

router = APIRouter(prefix="/api", tags=["assets"])
logger = logging.getLogger(__name__)

_ERROR_STATUS: list[tuple[type[AssetError], int, FailureReason]] = [
    (MissingPayloadError, status.HTTP_400_BAD_REQUEST, FailureReason.MISSING_PAYLOAD),
    (MissingMediaTypeError, status.HTTP_400_BAD_REQUEST, FailureReason.MISSING_MEDIA_TYPE),
    (UnsupportedMediaError, status.HTTP_400_BAD_REQUEST, FailureReason.UNSUPPORTED_MEDIA_TYPE),
    (PayloadTooLargeError, status.HTTP_400_BAD_REQUEST, FailureReason.PAYLOAD_TOO_LARGE),
    (ForbiddenError, status.HTTP_403_FORBIDDEN, FailureReason.FORBIDDEN),
    (VideoNotFoundError, status.HTTP_404_NOT_FOUND, FailureReason.VIDEO_NOT_FOUND),
    (AssetNotFoundError, status.HTTP_404_NOT_FOUND, FailureReason.ASSET_NOT_FOUND),
    (StorageWriteError, status.HTTP_500_INTERNAL_SERVER_ERROR, FailureReason.STORAGE_WRITE_FAILED),
    (PersistenceError, status.HTTP_500_INTERNAL_SERVER_ERROR, FailureReason.PERSISTENCE_FAILED),
]


def get_asset_service(request: Request) -> AssetService:
    """Fetch asset service from application state."""
    try:
        return request.app.state.asset_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover
        raise RuntimeError("AssetService is not configured") from exc


def _error(exc: AssetError) -> HTTPException:
    for error_type, status_code, reason in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return HTTPException(
                status_code=status_code,
                detail={"status": "error", "failure_reason": reason.value, "message": str(exc)},
            )
    raise exc


def _require_video_id(video_id: str) -> str:
    cleaned = video_id.strip()
    if not cleaned:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"status": "error", "failure_reason": FailureReason.INVALID_VIDEO_ID.value},
        )
    return cleaned


async def _ingest(
    slot: AssetSlot,
    video_id: str,
    request: Request,
    user_id: str,
    service: AssetService,
) -> VideoResponse:
    video_id = _require_video_id(video_id)
    try:
        video = await service.ingest(video_id, user_id, slot, request.form)
    except AssetError as exc:
        logger.warning(
            "asset.upload.rejected",
            extra={
                "video_id": video_id,
                "user_id": user_id,
                "slot": slot.value,
                "error": type(exc).__name__,
            },
        )
        raise _error(exc) from exc
    return VideoResponse.from_video(video)


@router.post("/thumbnail_upload/{video_id}", response_model=VideoResponse)
async def upload_thumbnail(
    video_id: str,
    request: Request,
    user_id: str = Depends(require_user),
    service: AssetService = Depends(get_asset_service),
) -> VideoResponse:
    """Store a thumbnail image for an owned video."""
    return await _ingest(AssetSlot.THUMBNAIL, video_id, request, user_id, service)


@router.post("/video_upload/{video_id}", response_model=VideoResponse)
async def upload_video(
    video_id: str,
    request: Request,
    user_id: str = Depends(require_user),
    service: AssetService = Depends(get_asset_service),
) -> VideoResponse:
    """Store the primary MP4 file for an owned video."""
    return await _ingest(AssetSlot.VIDEO, video_id, request, user_id, service)


@router.get("/assets/{slot}/{video_id}")
async def get_asset(
    slot: str,
    video_id: str,
    service: AssetService = Depends(get_asset_service),
) -> Response:
    """Serve bytes kept by the in-memory backend."""
    try:
        asset_slot = AssetSlot(slot)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "status": "error",
                "failure_reason": FailureReason.ASSET_NOT_FOUND.value,
                "message": f"Unknown asset slot '{slot}'",
            },
        ) from None
    video_id = _require_video_id(video_id)
    try:
        stored = await service.fetch(asset_slot, video_id)
    except AssetError as exc:
        raise _error(exc) from exc
    return Response(
        content=stored.data,
        media_type=stored.media_type,
        headers={"Cache-Control": "no-store"},
    )
