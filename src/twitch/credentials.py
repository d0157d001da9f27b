"""
Twitch application credentials.

Credentials are read from a local `.env` file into a plain dict with
python-dotenv's `dotenv_values`, so `os.environ` is never modified. The
resulting TwitchCredentials object is passed explicitly to whatever needs it.

Expected `.env` content:

    TWITCH_CLIENT_ID=your_client_id_here
    TWITCH_CLIENT_SECRET=your_client_secret_here
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from dotenv import dotenv_values

from .errors import ConfigError

CLIENT_ID_KEY = "TWITCH_CLIENT_ID"
CLIENT_SECRET_KEY = "TWITCH_CLIENT_SECRET"
REGISTER_APP_URL = "https://dev.twitch.tv/console"


@dataclass(frozen=True)
class TwitchCredentials:
    """Static app credentials used for the client-credentials grant"""

    client_id: str
    client_secret: str = field(repr=False)


def load_credentials(env_file: Union[str, Path] = ".env") -> TwitchCredentials:
    """
    Load Twitch credentials from a key/value file.

    Args:
        env_file: Path to the `.env` file (default: ".env" in the working directory)

    Returns:
        TwitchCredentials with both values set

    Raises:
        ConfigError: If the file is absent or either key is missing or empty
    """
    env_path = Path(env_file)
    values = dotenv_values(env_path) if env_path.is_file() else {}

    client_id = (values.get(CLIENT_ID_KEY) or "").strip()
    client_secret = (values.get(CLIENT_SECRET_KEY) or "").strip()

    if not client_id or not client_secret:
        raise ConfigError(
            f"{CLIENT_ID_KEY} and {CLIENT_SECRET_KEY} must be set in {env_path}. "
            f"Register an app at {REGISTER_APP_URL} to get credentials."
        )

    return TwitchCredentials(client_id=client_id, client_secret=client_secret)
