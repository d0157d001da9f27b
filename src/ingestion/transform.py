"""
Helix video payloads → VideoRecord.

`transform_video` is pure: no network, no filesystem. The local thumbnail
reference is filled in later, once the image is on disk.
"""

import re
from dataclasses import dataclass
from typing import Any, Optional

from .dates import DEFAULT_TIMEZONE, to_civil_date, to_offset_datetime
from .duration import format_duration

THUMBNAIL_TEMPLATE = "%{width}x%{height}"
THUMBNAIL_SIZE = "1280x720"

VIDEO_ID_PATTERN = re.compile(r"/videos/(\d+)")


@dataclass
class VideoRecord:
    """A Twitch VOD normalized for the episode content tree"""

    video_id: str
    title: str
    url: str
    thumbnail_url: str
    duration: str
    views: str
    date: str  # civil date, also the episode/thumbnail filename stem
    started_at: str
    started_at_local: str
    local_thumbnail: Optional[str] = None


def extract_video_id(url: str) -> Optional[str]:
    """Return the numeric id of a Twitch video URL, or None."""
    match = VIDEO_ID_PATTERN.search(url or "")
    return match.group(1) if match else None


def resolve_thumbnail_url(template: str, size: str = THUMBNAIL_SIZE) -> str:
    """Substitute the %{width}x%{height} placeholder with a fixed size."""
    return (template or "").replace(THUMBNAIL_TEMPLATE, size)


def transform_video(raw: dict[str, Any], timezone: str = DEFAULT_TIMEZONE) -> VideoRecord:
    """
    Map a raw Helix video object onto a VideoRecord.

    Args:
        raw: Helix `/videos` item (id, title, created_at, duration, view_count,
             thumbnail_url, url)
        timezone: IANA timezone used for the civil date and local datetime

    Returns:
        VideoRecord with local_thumbnail unset
    """
    created_at = raw["created_at"]
    url = raw.get("url", "")

    return VideoRecord(
        video_id=str(raw.get("id") or extract_video_id(url) or ""),
        title=raw.get("title", ""),
        url=url,
        thumbnail_url=resolve_thumbnail_url(raw.get("thumbnail_url", "")),
        duration=format_duration(raw.get("duration", "")),
        views=str(raw.get("view_count", 0)),
        date=to_civil_date(created_at, timezone),
        started_at=created_at,
        started_at_local=to_offset_datetime(created_at, timezone),
    )
