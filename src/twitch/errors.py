"""
Error taxonomy for the episode sync tool.

Only ParseError is recovered locally (one episode file is skipped and the
run continues). Every other IngestError aborts the run and is reported by
the CLI with exit code 1.
"""

from typing import Optional


class IngestError(Exception):
    """Base class for all sync errors."""


class ConfigError(IngestError):
    """Missing credentials, malformed CLI dates or an unknown timezone."""


class TwitchAPIError(IngestError):
    """A Twitch endpoint answered with a non-200 status or unreadable JSON."""

    def __init__(
        self, message: str, status_code: Optional[int] = None, body: str = ""
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AuthError(TwitchAPIError):
    """The client-credentials grant was rejected."""


class NotFoundError(TwitchAPIError):
    """A channel login did not resolve to any user."""


class DownloadError(IngestError):
    """A thumbnail could not be downloaded."""


class ParseError(IngestError):
    """An existing content file could not be parsed."""


class FrontMatterError(ParseError):
    """The attributes block of an episode file could not be located."""
