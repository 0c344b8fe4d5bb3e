"""Upload validation utilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from starlette.datastructures import UploadFile

from .asset_errors import (
    MissingMediaTypeError,
    MissingPayloadError,
    PayloadTooLargeError,
    UnsupportedMediaError,
)
from .asset_models import SlotPolicy, UploadValidationResult

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1 * 1024 * 1024  # 1 MiB


@dataclass(slots=True)
class UploadValidator:
    """Validate uploads against a slot policy."""

    chunk_size_bytes: int = CHUNK_SIZE

    async def validate(self, policy: SlotPolicy, upload: Any) -> UploadValidationResult:
        if not isinstance(upload, UploadFile):
            logger.warning(
                "asset.upload.missing_payload",
                extra={"slot": policy.slot.value, "field": policy.field_name},
            )
            raise MissingPayloadError(f"{policy.field_name} file missing")

        content_type = (upload.content_type or "").strip()
        if not content_type:
            raise MissingMediaTypeError(f"Missing Content-Type for {policy.slot.value}")

        allowed = policy.allowed_content_types
        if allowed is not None and content_type.lower() not in allowed:
            logger.warning(
                "asset.upload.unsupported_media",
                extra={"slot": policy.slot.value, "content_type": content_type},
            )
            raise UnsupportedMediaError(content_type)

        size = upload.size
        if size is None:
            size = await self._measure(upload, policy.max_bytes)
        if size > policy.max_bytes:
            logger.warning(
                "asset.upload.payload_too_large",
                extra={
                    "slot": policy.slot.value,
                    "size_bytes": size,
                    "limit_bytes": policy.max_bytes,
                },
            )
            raise PayloadTooLargeError(
                f"File exceeds maximum upload size of {policy.max_bytes} (bytes)"
            )

        return UploadValidationResult(
            content_type=content_type,
            size_bytes=size,
            filename=upload.filename or "upload",
        )

    async def _measure(self, upload: UploadFile, cap: int) -> int:
        """Count bytes by streaming, stopping once ``cap`` is exceeded."""
        size = 0
        try:
            while True:
                chunk = await upload.read(self.chunk_size_bytes)
                if not chunk:
                    break
                size += len(chunk)
                if size > cap:
                    break
        finally:
            await upload.seek(0)
        return size
