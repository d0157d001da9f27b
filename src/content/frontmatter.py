"""
Line-preserving front matter parser for episode markdown files.

An episode file looks like:

    ---
    title: "Snake Game"
    date: "2026-01-26T17:00:00-05:00"
    tags: ["claude-code", "ai"]
    ---

    Show notes...

The attributes block is kept as an ordered list of lines. Top-level
`key: value` lines carry their key; every other line (comments, list items,
blank lines, nested values) is kept as an opaque raw line. Setting a field
only rewrites that one line, so rendering a document whose fields were not
changed gives back the exact original text.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from src.twitch.errors import FrontMatterError

FENCE = "---"
KEY_PATTERN = re.compile(r"^([A-Za-z0-9_-]+):(?=\s|$)")


@dataclass
class FrontMatterLine:
    raw: str
    key: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> "FrontMatterLine":
        match = KEY_PATTERN.match(raw)
        return cls(raw=raw, key=match.group(1) if match else None)


@dataclass
class EpisodeDocument:
    """Parsed episode file: front matter lines plus the untouched body."""

    lines: list[FrontMatterLine] = field(default_factory=list)
    body: str = "\n"

    def set_field(self, key: str, value: str) -> None:
        """
        Replace the first `key` line in place, or append it to the block.

        `value` must already be serialized (quoted string, bare path, ...).
        """
        new_line = FrontMatterLine(raw=f"{key}: {value}", key=key)
        for i, line in enumerate(self.lines):
            if line.key == key:
                self.lines[i] = new_line
                return
        self.lines.append(new_line)

    def render(self) -> str:
        block = "\n".join(line.raw for line in self.lines)
        return f"{FENCE}\n{block}\n{FENCE}{self.body}"


def parse_document(text: str) -> EpisodeDocument:
    """
    Split an episode file into front matter lines and body.

    The block starts with `---` on the first line and ends at the first
    `---` line that is followed by a newline or the end of the file.
    Everything after the closing fence, including its leading newline, is
    the body.

    Raises:
        FrontMatterError: If no attributes block can be located
    """
    opening = f"{FENCE}\n"
    if not text.startswith(opening):
        raise FrontMatterError("File does not start with a front matter fence")

    closing = f"\n{FENCE}"
    end = text.find(closing, len(opening))
    while end != -1:
        after = end + len(closing)
        if after == len(text) or text[after] == "\n":
            break
        end = text.find(closing, end + 1)
    if end == -1:
        raise FrontMatterError("Front matter block is not terminated")

    block = text[len(opening) : end]
    body = text[after:] or "\n"
    return EpisodeDocument(
        lines=[FrontMatterLine.parse(raw) for raw in block.split("\n")],
        body=body,
    )


def yaml_double_quote(text: str) -> str:
    """Wrap a string in YAML double quotes, escaping backslashes and quotes."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
