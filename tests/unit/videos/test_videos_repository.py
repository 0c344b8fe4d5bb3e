import pytest

from tubely.videos.videos_models import Video


def test_create_and_get_video(video_repo) -> None:
    created = video_repo.create_video(user_id="owner", title="Boots", description="demo")

    loaded = video_repo.get_video(created.id)

    assert loaded is not None
    assert loaded.user_id == "owner"
    assert loaded.title == "Boots"
    assert loaded.thumbnail_url is None
    assert loaded.video_url is None


def test_get_missing_video_returns_none(video_repo) -> None:
    assert video_repo.get_video("missing") is None


def test_update_video_persists_urls(video_repo) -> None:
    video = video_repo.create_video(user_id="owner", video_id="fixed-id")
    video.thumbnail_url = "http://localhost:8091/api/assets/thumbnail/fixed-id"
    video.video_url = "https://bucket.s3.us-east-1.amazonaws.com/fixed-id.mp4"

    updated = video_repo.update_video(video)

    assert updated.thumbnail_url == video.thumbnail_url
    assert video_repo.get_video("fixed-id").video_url == video.video_url


def test_update_vanished_video_raises_key_error(video_repo) -> None:
    with pytest.raises(KeyError):
        video_repo.update_video(Video(id="ghost", user_id="owner"))
