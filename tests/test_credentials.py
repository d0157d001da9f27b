import os

import pytest

from src.twitch.credentials import load_credentials
from src.twitch.errors import ConfigError


@pytest.mark.unit
def test_load_credentials(env_file):
    credentials = load_credentials(env_file)

    assert credentials.client_id == "test-client"
    assert credentials.client_secret == "test-secret"
    assert "test-secret" not in repr(credentials)


@pytest.mark.unit
def test_load_credentials_does_not_touch_environment(env_file, monkeypatch):
    monkeypatch.delenv("TWITCH_CLIENT_ID", raising=False)
    monkeypatch.delenv("TWITCH_CLIENT_SECRET", raising=False)

    load_credentials(env_file)

    assert "TWITCH_CLIENT_ID" not in os.environ
    assert "TWITCH_CLIENT_SECRET" not in os.environ


@pytest.mark.unit
def test_load_credentials_ignores_comments(tmp_path):
    path = tmp_path / ".env"
    path.write_text(
        "# Twitch app\nTWITCH_CLIENT_ID=abc\n\n# secret below\nTWITCH_CLIENT_SECRET=xyz\n"
    )

    credentials = load_credentials(path)
    assert (credentials.client_id, credentials.client_secret) == ("abc", "xyz")


@pytest.mark.unit
def test_missing_file_raises_config_error(tmp_path):
    with pytest.raises(ConfigError, match="dev.twitch.tv/console"):
        load_credentials(tmp_path / "missing.env")


@pytest.mark.unit
def test_missing_secret_raises_config_error(tmp_path):
    path = tmp_path / ".env"
    path.write_text("TWITCH_CLIENT_ID=abc\nTWITCH_CLIENT_SECRET=\n")

    with pytest.raises(ConfigError, match="TWITCH_CLIENT_SECRET"):
        load_credentials(path)
