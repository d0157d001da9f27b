"""
Twitch package: app credentials, the Helix API client and the error types
shared by the whole sync tool.

Modules:
    credentials: `.env` loading without touching os.environ
    client: Helix API client (token, user lookup, paginated videos)
    errors: IngestError hierarchy

The client is imported from `src.twitch.client` directly.
"""

from .credentials import TwitchCredentials, load_credentials
from .errors import (
    IngestError,
    ConfigError,
    TwitchAPIError,
    AuthError,
    NotFoundError,
    DownloadError,
    ParseError,
    FrontMatterError,
)

__all__ = [
    "TwitchCredentials",
    "load_credentials",
    "IngestError",
    "ConfigError",
    "TwitchAPIError",
    "AuthError",
    "NotFoundError",
    "DownloadError",
    "ParseError",
    "FrontMatterError",
]
