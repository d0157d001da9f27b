#!/usr/bin/env python3
"""
Twitch VOD → episode content sync.

Fetches the past broadcasts of a Twitch channel and, for each one:
  - downloads its thumbnail to `src/assets/episodes/{date}.jpg`
    (skipped if present, unless --force)
  - creates `src/content/episodes/{date}.md` with front matter and a
    placeholder body, or syncs title/date/twitchUrl/thumbnail into the
    existing file (tags and body are preserved)

Dates are civil dates in the show's timezone (America/New_York).

Usage:
    uv run -m src.ingestion                               # Full history
    uv run -m src.ingestion --after 2026-01-01            # Only newer videos
    uv run -m src.ingestion --after 2026-01-01 --before 2026-02-01
    uv run -m src.ingestion --force                       # Re-download thumbnails
    uv run -m src.ingestion --dry-run                     # Show what would change
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from src.content.episodes import EpisodeFileStatus, sync_episode_file
from src.logger import log_function
from src.twitch.client import TwitchClient
from src.twitch.credentials import load_credentials

from .dates import DEFAULT_TIMEZONE, get_zone, parse_utc_timestamp, to_civil_date
from .thumbnails import ensure_thumbnail, local_thumbnail_ref, thumbnail_filename
from .transform import VideoRecord, transform_video

CHANNEL_LOGIN = "1gofcode"
CONTENT_DIR = "src/content/episodes"
ASSETS_DIR = "src/assets/episodes"


@dataclass
class SyncConfig:
    """Settings for one sync run"""

    channel_login: str = CHANNEL_LOGIN
    env_file: str = ".env"
    content_dir: str = CONTENT_DIR
    assets_dir: str = ASSETS_DIR
    timezone: str = DEFAULT_TIMEZONE

    # Civil date bounds, both exclusive (YYYY-MM-DD)
    after_date: Optional[str] = None
    before_date: Optional[str] = None

    force: bool = False  # re-download existing thumbnails
    dry_run: bool = False


@dataclass
class SyncStats:
    """Counts reported at the end of a run"""

    fetched: int = 0
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    skipped: int = 0
    downloaded: int = 0
    thumbnails_skipped: int = 0

    def record(self, status: EpisodeFileStatus) -> None:
        if status is EpisodeFileStatus.CREATED:
            self.created += 1
        elif status is EpisodeFileStatus.UPDATED:
            self.updated += 1
        elif status is EpisodeFileStatus.UNCHANGED:
            self.unchanged += 1
        else:
            self.skipped += 1


def echo(message: str) -> None:
    """Progress output goes to stderr so stdout stays usable by callers."""
    print(message, file=sys.stderr)


def filter_videos(
    raw_videos: list[dict[str, Any]],
    after_date: Optional[str] = None,
    before_date: Optional[str] = None,
    timezone: str = DEFAULT_TIMEZONE,
) -> list[dict[str, Any]]:
    """
    Keep videos whose civil date is strictly between the given bounds.

    Helix has no upper-bound filter, so --before is always applied here.
    """
    filtered = []
    for video in raw_videos:
        date = to_civil_date(video["created_at"], timezone)
        if after_date and date <= after_date:
            continue
        if before_date and date >= before_date:
            continue
        filtered.append(video)
    return filtered


def latest_per_date(videos: list[VideoRecord]) -> list[VideoRecord]:
    """
    Keep one video per civil date: the one that started last.

    Episode files and thumbnails are keyed by date, so only one broadcast
    per day can own them. Order of the kept videos is preserved.
    """
    latest: dict[str, VideoRecord] = {}
    for video in videos:
        current = latest.get(video.date)
        if current is None or parse_utc_timestamp(video.started_at) > parse_utc_timestamp(
            current.started_at
        ):
            latest[video.date] = video

    kept = []
    for video in videos:
        if latest[video.date] is video:
            kept.append(video)
        else:
            logging.getLogger("sync_videos").info(
                f"Ignoring {video.video_id} ({video.title!r}): "
                f"{latest[video.date].video_id} is the latest video on {video.date}"
            )
    return kept


def sync_thumbnail(
    video: VideoRecord, config: SyncConfig, stats: SyncStats, session=None
) -> None:
    """Make sure the thumbnail of `video` is on disk and point the video at it."""
    if not video.thumbnail_url:
        return

    filename = thumbnail_filename(video)
    if config.dry_run:
        downloaded = config.force or not (Path(config.assets_dir) / filename).exists()
    else:
        _, downloaded = ensure_thumbnail(
            video, config.assets_dir, force=config.force, session=session
        )

    if downloaded:
        stats.downloaded += 1
        action = "Would download" if config.dry_run else "Downloaded"
        echo(f"✓ {action} {filename}")
    else:
        stats.thumbnails_skipped += 1
        echo(f"• Skipped {filename} (already exists, use --force to re-download)")

    video.local_thumbnail = local_thumbnail_ref(filename)


def sync_episode(video: VideoRecord, config: SyncConfig, stats: SyncStats) -> None:
    """Create or update the episode file of `video`."""
    status = sync_episode_file(config.content_dir, video, dry_run=config.dry_run)
    stats.record(status)

    prefix = "[dry run] " if config.dry_run else ""
    if status is EpisodeFileStatus.CREATED:
        echo(f"{prefix}+ Created  {video.date}.md")
    elif status is EpisodeFileStatus.UPDATED:
        echo(f"{prefix}↻ Updated  {video.date}.md")
    elif status is EpisodeFileStatus.UNCHANGED:
        echo(f"• Unchanged {video.date}.md")


def format_summary(stats: SyncStats, channel_login: str) -> str:
    counts = f"{stats.created} created, {stats.updated} updated, {stats.unchanged} unchanged"
    if stats.skipped:
        counts += f", {stats.skipped} skipped"
    return f"✓ {counts} ({stats.fetched} fetched) from {channel_login} channel"


@log_function(logger_name="sync_videos", log_execution_time=True)
def sync_videos(
    config: SyncConfig, client: Optional[TwitchClient] = None
) -> SyncStats:
    """
    Run one sync: Twitch videos → thumbnails and episode files.

    Steps run strictly in order: credentials, token, channel lookup, video
    listing (stopping early when `after_date` is set), client-side date
    filter, one video per civil date (the latest), then thumbnail + episode
    file for each video. Any error except
    an unparseable episode file aborts the run; re-running is safe since
    every step is idempotent.

    Args:
        config: Run settings
        client: TwitchClient to use (a new one is created if None)

    Returns:
        SyncStats with fetched/created/updated/unchanged counts

    Raises:
        IngestError: On configuration, API or download failures
    """
    logger = logging.getLogger("sync_videos")

    get_zone(config.timezone)
    credentials = load_credentials(config.env_file)
    client = client or TwitchClient()

    echo("Authenticating with Twitch API...")
    client.authenticate(credentials.client_id, credentials.client_secret)

    echo(f"Fetching user ID for {config.channel_login}...")
    user_id = client.resolve_channel_id(config.channel_login)

    if config.after_date:
        echo(f"Filtering: after {config.after_date}")
    if config.before_date:
        echo(f"Filtering: before {config.before_date}")

    echo(f"Fetching videos for user {user_id}...")
    raw_videos = client.list_videos(
        user_id, after_date=config.after_date, timezone=config.timezone
    )
    stats = SyncStats(fetched=len(raw_videos))

    filtered = filter_videos(
        raw_videos, config.after_date, config.before_date, config.timezone
    )
    videos = latest_per_date(
        [transform_video(raw, config.timezone) for raw in filtered]
    )
    logger.info(f"{len(videos)} of {len(raw_videos)} fetched videos selected")

    if not config.dry_run:
        Path(config.assets_dir).mkdir(parents=True, exist_ok=True)
        Path(config.content_dir).mkdir(parents=True, exist_ok=True)

    for video in videos:
        sync_thumbnail(video, config, stats, session=client.session)
        sync_episode(video, config, stats)

    logger.info(f"Sync completed: {stats}")
    return stats
