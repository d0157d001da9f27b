"""
Thumbnail downloader for episode assets.

Thumbnails are stored as `{date}.jpg` in the assets directory and are only
downloaded once: an existing file is left alone unless `force` is set, even
if the image on Twitch has changed since.

Downloads are streamed to a `.part` file next to the target and moved into
place once complete, so an interrupted run never leaves a truncated image.
"""

import logging
import os
import re
from pathlib import Path
from typing import Optional, Union

import requests

from src.logger import log_function
from src.twitch.errors import DownloadError

from .transform import THUMBNAIL_SIZE, VideoRecord

# Trailing WxH token of default (thumb0-320x180.jpg) and custom
# (custom-<uuid>-640x360.png) thumbnail names
SIZE_TOKEN_PATTERN = re.compile(r"(-|\b)(\d+x\d+)(\.\w+)$")

ASSETS_REF_PREFIX = "../../assets/episodes"
CHUNK_SIZE = 8192

logger = logging.getLogger("thumbnails")


def high_res_thumbnail_url(url: str, size: str = THUMBNAIL_SIZE) -> str:
    """Upgrade the trailing WxH token of a thumbnail URL to `size`."""
    return SIZE_TOKEN_PATTERN.sub(rf"\g<1>{size}\g<3>", url)


def thumbnail_filename(video: VideoRecord) -> str:
    """Generate filename: {date}.jpg"""
    return f"{video.date}.jpg"


def local_thumbnail_ref(filename: str) -> str:
    """Path of a thumbnail as referenced from an episode's front matter."""
    return f"{ASSETS_REF_PREFIX}/{filename}"


@log_function(logger_name="thumbnails", log_execution_time=True)
def ensure_thumbnail(
    video: VideoRecord,
    assets_dir: Union[str, Path],
    force: bool = False,
    session: Optional[requests.Session] = None,
    timeout: int = 60,
) -> tuple[Optional[Path], bool]:
    """
    Make sure the thumbnail of `video` exists in `assets_dir`.

    Args:
        video: Normalized video record
        assets_dir: Directory holding `{date}.jpg` files
        force: Re-download even if the file already exists
        session: Optional requests.Session (plain requests.get otherwise)
        timeout: Request timeout in seconds

    Returns:
        (path, downloaded): path is None when the video has no thumbnail URL,
        downloaded is True only if a request was made

    Raises:
        DownloadError: If the image request does not answer 200
    """
    if not video.thumbnail_url:
        logger.warning(f"No thumbnail URL for {video.date}, skipping")
        return None, False

    assets_path = Path(assets_dir)
    assets_path.mkdir(parents=True, exist_ok=True)
    filepath = assets_path / thumbnail_filename(video)

    if filepath.exists() and not force:
        logger.info(f"Thumbnail {filepath.name} already downloaded")
        return filepath, False

    url = high_res_thumbnail_url(video.thumbnail_url)
    getter = session.get if session is not None else requests.get
    partial_path = filepath.with_name(filepath.name + ".part")
    with getter(url, stream=True, timeout=timeout) as response:
        if response.status_code != 200:
            raise DownloadError(f"HTTP {response.status_code} for {url}")

        try:
            with open(partial_path, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
            os.replace(partial_path, filepath)
        except (OSError, requests.RequestException) as e:
            if partial_path.exists():
                partial_path.unlink()
            raise DownloadError(f"Failed to save {filepath.name}: {e}") from e

    logger.info(f"Downloaded {filepath.name} ({filepath.stat().st_size:,} bytes)")
    return filepath, True
