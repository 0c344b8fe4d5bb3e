"""Video repository backed by SQLAlchemy."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.orm import Session

from ..db.db_models import VideoModel
from .videos_models import Video


class VideoRepository:
    """Provide access to video records stored in the database."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def get_video(self, video_id: str) -> Video | None:
        with self._session_factory() as session:
            row = session.get(VideoModel, video_id)
            if row is None:
                return None
            return self._to_domain(row)

    def create_video(
        self,
        *,
        user_id: str,
        title: str = "",
        description: str = "",
        video_id: str | None = None,
    ) -> Video:
        now = datetime.utcnow()
        with self._session_factory() as session:
            row = VideoModel(
                id=video_id or uuid.uuid4().hex,
                user_id=user_id,
                title=title,
                description=description,
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._to_domain(row)

    def update_video(self, video: Video) -> Video:
        """Persist mutable fields of ``video`` and return the stored state."""
        with self._session_factory() as session:
            row = session.get(VideoModel, video.id)
            if row is None:
                raise KeyError(f"Video '{video.id}' not found")
            row.title = video.title
            row.description = video.description
            row.thumbnail_url = video.thumbnail_url
            row.video_url = video.video_url
            row.updated_at = datetime.utcnow()
            session.commit()
            session.refresh(row)
            return self._to_domain(row)

    @staticmethod
    def _to_domain(row: VideoModel) -> Video:
        return Video(
            id=row.id,
            user_id=row.user_id,
            title=row.title,
            description=row.description,
            thumbnail_url=row.thumbnail_url,
            video_url=row.video_url,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
