"""
Ingestion package: Twitch VODs → episode content files.

The pipeline runs in one direction:

1. Twitch API (src.twitch.client):
   - App token, channel lookup, paginated past broadcasts
2. Normalization (dates.py, duration.py, transform.py):
   - Civil date and offset datetime in the show's timezone
   - H:MM:SS durations, 1280x720 thumbnail URLs
3. Local writes:
   - Thumbnails (thumbnails.py), skipped if already downloaded
   - Episode markdown files (src.content.episodes), created or merged

Modules:
    sync_videos: run driver (SyncConfig, SyncStats, sync_videos)
    thumbnails: thumbnail download with skip-if-exists
    transform: VideoRecord and the Helix → VideoRecord mapping
    dates: UTC → local civil date / offset datetime
    duration: "1h1m29s" → "1:01:29"

Usage:
    # Sync the full history
    uv run -m src.ingestion

    # Only videos after a date, re-downloading thumbnails
    uv run -m src.ingestion --after 2026-01-01 --force
"""
