"""Derivation of storage locators from media types."""

from __future__ import annotations

import mimetypes
import re
import secrets
from dataclasses import dataclass
from typing import Protocol

from .asset_models import AssetLocator

DEFAULT_EXTENSION = "bin"

_KNOWN_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
    "video/mp4": "mp4",
    "video/quicktime": "mov",
    "video/webm": "webm",
}
_SAFE_EXTENSION = re.compile(r"^[a-z0-9]{1,8}$")


def extension_for(media_type: str) -> str:
    """Return a filesystem-safe extension (without dot) for ``media_type``."""
    essence = media_type.split(";", 1)[0].strip().lower()
    known = _KNOWN_EXTENSIONS.get(essence)
    if known:
        return known
    guessed = mimetypes.guess_extension(essence) or ""
    candidate = guessed.lstrip(".")
    if _SAFE_EXTENSION.match(candidate):
        return candidate
    return DEFAULT_EXTENSION


class LocatorStrategy(Protocol):
    def derive(self, media_type: str, video_id: str) -> AssetLocator: ...


@dataclass(frozen=True, slots=True)
class RandomAssetLocator:
    """Fresh 256-bit random name per upload; re-uploads never collide."""

    random_bytes: int = 32

    def derive(self, media_type: str, video_id: str) -> AssetLocator:
        name = secrets.token_hex(self.random_bytes)
        return AssetLocator(key=f"{name}.{extension_for(media_type)}")


@dataclass(frozen=True, slots=True)
class VideoKeyLocator:
    """Name fixed by the video id; a re-upload overwrites the previous object."""

    extension: str = "mp4"

    def derive(self, media_type: str, video_id: str) -> AssetLocator:
        return AssetLocator(key=f"{video_id}.{self.extension}")


__all__ = [
    "DEFAULT_EXTENSION",
    "LocatorStrategy",
    "RandomAssetLocator",
    "VideoKeyLocator",
    "extension_for",
]
