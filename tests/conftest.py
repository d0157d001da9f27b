"""Shared fixtures: fake Helix payloads and a fake requests.Session."""

import json
from unittest.mock import MagicMock

import pytest


def _make_response(status_code=200, json_data=None, text=None, content=b""):
    response = MagicMock()
    response.status_code = status_code
    if json_data is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_data
    if text is None:
        text = json.dumps(json_data) if json_data is not None else ""
    response.text = text
    response.iter_content.return_value = [content] if content else []
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


def _make_video(
    video_id="2680000001",
    title="Snake Game",
    created_at="2026-01-26T22:00:00Z",
    duration="1h1m29s",
    view_count=42,
):
    return {
        "id": video_id,
        "title": title,
        "created_at": created_at,
        "duration": duration,
        "view_count": view_count,
        "thumbnail_url": (
            "https://static-cdn.jtvnw.net/cf_vods/d2nvs31859zcd8/abc/thumb/"
            "thumb0-%{width}x%{height}.jpg"
        ),
        "url": f"https://www.twitch.tv/videos/{video_id}",
    }


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects."""
    return _make_response


@pytest.fixture
def make_video():
    """Factory for raw Helix /videos items."""
    return _make_video


@pytest.fixture
def env_file(tmp_path):
    """A valid .env file with Twitch credentials."""
    path = tmp_path / ".env"
    path.write_text("TWITCH_CLIENT_ID=test-client\nTWITCH_CLIENT_SECRET=test-secret\n")
    return path


@pytest.fixture
def fake_twitch_session(make_response):
    """
    Build a fake requests.Session serving a token, one user and given video pages.

    Usage:
        session = fake_twitch_session([[video_a, video_b], [video_c]])
    """

    def factory(pages, image=b"\xff\xd8\xff\xe0jpeg", user_id="123456"):
        session = MagicMock()
        session.post.return_value = make_response(
            json_data={"access_token": "token-abc", "expires_in": 3600}
        )

        video_responses = []
        for i, page in enumerate(pages):
            pagination = {"cursor": f"cursor-{i + 1}"} if i < len(pages) - 1 else {}
            video_responses.append(
                make_response(json_data={"data": page, "pagination": pagination})
            )
        video_iter = iter(video_responses)

        def get(url, params=None, headers=None, timeout=None, stream=False):
            if url.endswith("/helix/users"):
                return make_response(json_data={"data": [{"id": user_id}]})
            if url.endswith("/helix/videos"):
                return next(video_iter)
            return make_response(content=image)

        session.get.side_effect = get
        return session

    return factory
