"""Database package."""

from .db_init import init_db
from .db_models import Base, VideoModel

__all__ = ["Base", "VideoModel", "init_db"]
