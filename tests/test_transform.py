import pytest

from src.ingestion.transform import (
    extract_video_id,
    resolve_thumbnail_url,
    transform_video,
)


@pytest.mark.unit
def test_transform_video(make_video):
    video = transform_video(make_video())

    assert video.video_id == "2680000001"
    assert video.title == "Snake Game"
    assert video.url == "https://www.twitch.tv/videos/2680000001"
    assert video.thumbnail_url.endswith("thumb0-1280x720.jpg")
    assert video.duration == "1:01:29"
    assert video.views == "42"
    assert video.date == "2026-01-26"
    assert video.started_at == "2026-01-26T22:00:00Z"
    assert video.started_at_local == "2026-01-26T17:00:00-05:00"
    assert video.local_thumbnail is None


@pytest.mark.unit
def test_transform_video_is_deterministic(make_video):
    raw = make_video()
    assert transform_video(raw) == transform_video(raw)


@pytest.mark.unit
def test_transform_video_falls_back_to_url_for_id(make_video):
    raw = make_video(video_id="2680000002")
    raw["id"] = ""

    assert transform_video(raw).video_id == "2680000002"


@pytest.mark.unit
def test_resolve_thumbnail_url_without_placeholder_is_untouched():
    url = "https://example.com/thumb.jpg"
    assert resolve_thumbnail_url(url) == url


@pytest.mark.unit
def test_extract_video_id():
    assert extract_video_id("https://www.twitch.tv/videos/123456") == "123456"
    assert extract_video_id("https://www.twitch.tv/1gofcode") is None
