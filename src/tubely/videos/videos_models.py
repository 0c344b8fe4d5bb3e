"""Video domain dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Video:
    id: str
    user_id: str
    title: str = ""
    description: str = ""
    thumbnail_url: str | None = None
    video_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
