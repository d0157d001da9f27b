"""
Episode markdown files: creation and front matter sync.

Ownership of an episode file is split:
  - the sync owns four front matter fields: title, date, twitchUrl, thumbnail
  - the editor owns everything else (tags, extra links, notes) and the body

Updates rewrite only the owned lines and leave every other byte as it was.
Files are written whole through a temporary sibling and `os.replace`, and
only when their content actually changes.
"""

import logging
import os
import sys
from enum import Enum
from pathlib import Path
from typing import Union

from src.ingestion.transform import VideoRecord
from src.twitch.errors import FrontMatterError, ParseError

from .frontmatter import EpisodeDocument, parse_document, yaml_double_quote

SYNCED_FIELDS = ("title", "date", "twitchUrl", "thumbnail")
DEFAULT_TAGS = ["claude-code", "ai"]
PLACEHOLDER_BODY = "Show notes coming soon!"

logger = logging.getLogger("episodes")


class EpisodeFileStatus(str, Enum):
    """Outcome of syncing one episode file"""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"


def episode_filename(video: VideoRecord) -> str:
    """Generate filename: {date}.md"""
    return f"{video.date}.md"


def write_text_atomic(path: Union[str, Path], content: str) -> None:
    """Write `content` to `path` through a temp file in the same directory."""
    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp_path, path)
    except BaseException:
        if tmp_path.exists():
            tmp_path.unlink()
        raise


def read_episode_text(path: Path) -> str:
    """
    Read an episode file without translating line endings.

    Raises:
        FrontMatterError: If the file is not valid UTF-8
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise FrontMatterError(f"{path.name} is not valid UTF-8: {e}") from e


def synced_values(video: VideoRecord) -> dict[str, str]:
    """Serialized front matter values owned by the sync."""
    values = {
        "title": yaml_double_quote(video.title),
        "date": f'"{video.started_at_local}"',
        "twitchUrl": yaml_double_quote(video.url),
    }
    if video.local_thumbnail:
        values["thumbnail"] = video.local_thumbnail
    return values


def render_episode(video: VideoRecord) -> str:
    """Full text of a new episode file."""
    values = synced_values(video)
    tags = ", ".join(f'"{tag}"' for tag in DEFAULT_TAGS)

    lines = [
        "---",
        f"title: {values['title']}",
        f"date: {values['date']}",
        f"tags: [{tags}]",
        f"twitchUrl: {values['twitchUrl']}",
    ]
    if "thumbnail" in values:
        lines.append(f"thumbnail: {values['thumbnail']}")
    lines += ["---", "", PLACEHOLDER_BODY, ""]
    return "\n".join(lines)


def create_episode_file(
    path: Union[str, Path], video: VideoRecord, dry_run: bool = False
) -> EpisodeFileStatus:
    """Create a new episode file with front matter and the placeholder body."""
    if not dry_run:
        write_text_atomic(path, render_episode(video))
    return EpisodeFileStatus.CREATED


def apply_synced_fields(document: EpisodeDocument, video: VideoRecord) -> None:
    values = synced_values(video)
    for key in SYNCED_FIELDS:
        if key in values:
            document.set_field(key, values[key])


def update_episode_file(
    path: Union[str, Path], video: VideoRecord, dry_run: bool = False
) -> EpisodeFileStatus:
    """
    Sync title, date, twitchUrl and thumbnail into an existing episode file.

    Tags, any other front matter line and the whole body are preserved.

    Returns:
        UPDATED if the file content changed (written unless dry_run),
        UNCHANGED if it already matched, SKIPPED if the file could not be
        decoded or its front matter parsed (a warning is logged and printed)
    """
    path = Path(path)
    try:
        original = read_episode_text(path)
        document = parse_document(original)
    except ParseError as e:
        logger.warning(f"Could not parse front matter in {path.name}: {e}")
        print(
            f"Warning: could not parse frontmatter in {path.name}, skipping",
            file=sys.stderr,
        )
        return EpisodeFileStatus.SKIPPED

    apply_synced_fields(document, video)
    updated = document.render()
    if updated == original:
        return EpisodeFileStatus.UNCHANGED

    if not dry_run:
        write_text_atomic(path, updated)
    return EpisodeFileStatus.UPDATED


def sync_episode_file(
    episodes_dir: Union[str, Path], video: VideoRecord, dry_run: bool = False
) -> EpisodeFileStatus:
    """Create the episode file for `video`, or update it if it already exists."""
    path = Path(episodes_dir) / episode_filename(video)
    if path.exists():
        return update_episode_file(path, video, dry_run=dry_run)
    return create_episode_file(path, video, dry_run=dry_run)
