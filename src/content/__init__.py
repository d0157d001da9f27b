"""
Content package for the static site's episode files.

Modules:
    frontmatter: line-preserving parser for the `---` attributes block
    episodes: create / update episode markdown files
"""

from .episodes import (
    SYNCED_FIELDS,
    EpisodeFileStatus,
    create_episode_file,
    update_episode_file,
    sync_episode_file,
    write_text_atomic,
)
from .frontmatter import EpisodeDocument, parse_document, yaml_double_quote

__all__ = [
    "SYNCED_FIELDS",
    "EpisodeFileStatus",
    "create_episode_file",
    "update_episode_file",
    "sync_episode_file",
    "write_text_atomic",
    "EpisodeDocument",
    "parse_document",
    "yaml_double_quote",
]
