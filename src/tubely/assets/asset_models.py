"""Data structures for asset ingestion."""

from dataclasses import dataclass
from enum import StrEnum


class AssetSlot(StrEnum):
    """Record fields an asset can fill."""

    THUMBNAIL = "thumbnail"
    VIDEO = "video"


class FailureReason(StrEnum):
    """Failure reasons returned in error bodies."""

    INVALID_VIDEO_ID = "invalid_video_id"
    MISSING_PAYLOAD = "missing_payload"
    MISSING_MEDIA_TYPE = "missing_media_type"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    FORBIDDEN = "forbidden"
    VIDEO_NOT_FOUND = "video_not_found"
    ASSET_NOT_FOUND = "asset_not_found"
    STORAGE_WRITE_FAILED = "storage_write_failed"
    PERSISTENCE_FAILED = "persistence_failed"


@dataclass(frozen=True, slots=True)
class SlotPolicy:
    """Upload rules for one slot."""

    slot: AssetSlot
    field_name: str
    max_bytes: int
    # None accepts any non-empty declared type
    allowed_content_types: tuple[str, ...] | None = None


@dataclass(slots=True)
class UploadValidationResult:
    """Outcome of validating an uploaded file."""

    content_type: str
    size_bytes: int
    filename: str


@dataclass(frozen=True, slots=True)
class AssetLocator:
    """Backend-relative name under which bytes are stored."""

    key: str


@dataclass(frozen=True, slots=True)
class RetrievalDescriptor:
    """Client-usable reference to stored bytes."""

    url: str
    key: str


@dataclass(frozen=True, slots=True)
class StoredAsset:
    data: bytes
    media_type: str
