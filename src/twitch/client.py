"""
Twitch Helix API client.

Covers the three calls the episode sync needs:

1. App access token via the client-credentials grant (id.twitch.tv)
2. Channel login → user id (helix/users)
3. Past broadcasts of a channel, newest first, cursor-paginated (helix/videos)

Every non-200 answer raises immediately; there are no retries, the operator
simply re-runs the sync.

Usage:
    client = TwitchClient()
    client.authenticate(credentials.client_id, credentials.client_secret)
    user_id = client.resolve_channel_id("1gofcode")
    videos = client.list_videos(user_id, after_date="2026-01-01")
"""

import logging
from typing import Any, Iterator, Optional

import requests

from src.ingestion.dates import DEFAULT_TIMEZONE, to_civil_date
from src.logger import log_function

from .errors import AuthError, NotFoundError, TwitchAPIError

TOKEN_URL = "https://id.twitch.tv/oauth2/token"
HELIX_URL = "https://api.twitch.tv/helix"
USERS_URL = f"{HELIX_URL}/users"
VIDEOS_URL = f"{HELIX_URL}/videos"

PAGE_SIZE = 100
ERROR_BODY_LIMIT = 200

logger = logging.getLogger("twitch")


class TwitchClient:
    """A small synchronous client for the Twitch Helix API."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
        page_size: int = PAGE_SIZE,
    ):
        """
        Args:
            session: requests.Session to use (a new one is created if None)
            timeout: Per-request timeout in seconds
            page_size: Videos requested per page (Helix maximum is 100)
        """
        self.session = session or requests.Session()
        self.timeout = timeout
        self.page_size = page_size
        self.client_id: Optional[str] = None
        self.token: Optional[str] = None

    # ============ HTTP HELPERS ============
    def _parse(
        self, response: requests.Response, error_cls: type = TwitchAPIError
    ) -> dict[str, Any]:
        if response.status_code != 200:
            body = response.text[:ERROR_BODY_LIMIT]
            raise error_cls(
                f"HTTP {response.status_code}: {body}",
                status_code=response.status_code,
                body=body,
            )
        try:
            return response.json()
        except ValueError as e:
            raise TwitchAPIError(
                f"Failed to parse JSON: {e}", status_code=response.status_code
            ) from e

    def _headers(self, token: Optional[str]) -> dict[str, str]:
        token = token or self.token
        if not token or not self.client_id:
            raise AuthError("Not authenticated: call authenticate() first")
        return {"Client-ID": self.client_id, "Authorization": f"Bearer {token}"}

    def _get(
        self, url: str, params: dict[str, Any], token: Optional[str] = None
    ) -> dict[str, Any]:
        response = self.session.get(
            url, params=params, headers=self._headers(token), timeout=self.timeout
        )
        return self._parse(response)

    # ============ API CALLS ============
    @log_function(logger_name="twitch", log_execution_time=True)
    def authenticate(self, client_id: str, client_secret: str) -> str:
        """
        Exchange app credentials for a bearer token.

        Returns:
            The access token (also kept on the client for later calls)

        Raises:
            AuthError: If the token endpoint does not answer 200
        """
        response = self.session.post(
            TOKEN_URL,
            data={
                "client_id": client_id,
                "client_secret": client_secret,
                "grant_type": "client_credentials",
            },
            timeout=self.timeout,
        )
        data = self._parse(response, error_cls=AuthError)

        token = data.get("access_token")
        if not token:
            raise AuthError("Token response did not contain an access_token")

        self.client_id = client_id
        self.token = token
        return token

    @log_function(logger_name="twitch", log_execution_time=True)
    def resolve_channel_id(self, login: str, token: Optional[str] = None) -> str:
        """
        Look up the Twitch user id for a channel login name.

        Raises:
            NotFoundError: If no user matches the login
        """
        data = self._get(USERS_URL, {"login": login}, token)
        users = data.get("data") or []
        if not users:
            raise NotFoundError(f"User not found: {login}")
        return users[0]["id"]

    def iter_video_pages(
        self, channel_id: str, token: Optional[str] = None
    ) -> Iterator[list[dict[str, Any]]]:
        """
        Yield past broadcasts one page at a time, newest first.

        Pages are requested lazily: the next request is only sent when the
        consumer asks for the next page, and iteration ends when Helix stops
        returning a cursor.
        """
        cursor = None
        page_number = 0
        while True:
            params: dict[str, Any] = {
                "user_id": channel_id,
                "type": "archive",
                "first": self.page_size,
            }
            if cursor:
                params["after"] = cursor

            data = self._get(VIDEOS_URL, params, token)
            page = data.get("data") or []
            page_number += 1
            logger.debug(f"Fetched page {page_number} ({len(page)} videos)")
            yield page

            cursor = (data.get("pagination") or {}).get("cursor")
            if not cursor:
                return

    @log_function(logger_name="twitch", log_execution_time=True)
    def list_videos(
        self,
        channel_id: str,
        token: Optional[str] = None,
        after_date: Optional[str] = None,
        timezone: str = DEFAULT_TIMEZONE,
    ) -> list[dict[str, Any]]:
        """
        Collect the raw video history of a channel.

        With `after_date`, pagination stops at the first page whose oldest
        video falls on or before that civil date; only the videos strictly
        after it are kept from that page. This relies on Helix returning
        videos newest-first.

        Args:
            channel_id: Twitch user id
            token: Bearer token (defaults to the one from authenticate())
            after_date: Optional YYYY-MM-DD lower bound (exclusive)
            timezone: Timezone used to compute civil dates

        Returns:
            Raw Helix video dicts, newest first
        """
        videos: list[dict[str, Any]] = []
        for page in self.iter_video_pages(channel_id, token):
            if after_date and page:
                oldest = page[-1]
                if to_civil_date(oldest["created_at"], timezone) <= after_date:
                    videos.extend(
                        v
                        for v in page
                        if to_civil_date(v["created_at"], timezone) > after_date
                    )
                    logger.info(f"Reached videos on or before {after_date}, stopping")
                    break
            videos.extend(page)
        return videos
