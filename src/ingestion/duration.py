"""Twitch duration strings ("1h1m29s") to clock display ("1:01:29")."""

import re

DURATION_PATTERN = re.compile(r"(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s)?")


def format_duration(twitch_duration: str) -> str:
    """
    Format a Twitch duration as H:MM:SS, or M:SS when there are no hours.

    Missing components count as zero:
        "1h1m29s" -> "1:01:29"
        "45m10s"  -> "45:10"
        "30s"     -> "0:30"
        ""        -> "0:00"

    Raises:
        ValueError: If the string is not made of h/m/s components
    """
    match = DURATION_PATTERN.fullmatch((twitch_duration or "").strip())
    if not match:
        raise ValueError(f"Unrecognised duration: {twitch_duration!r}")

    hours, minutes, seconds = (int(group or 0) for group in match.groups())
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"
