"""Tests for the `python -m src.ingestion` command line."""

from unittest.mock import patch

import pytest

from src.ingestion.__main__ import build_parser, main
from src.ingestion.sync_videos import SyncStats
from src.twitch.errors import AuthError


@pytest.fixture(autouse=True)
def in_tmp_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


@pytest.mark.unit
def test_parse_defaults():
    args = build_parser().parse_args([])

    assert args.after is None
    assert args.before is None
    assert args.force is False
    assert args.channel == "1gofcode"
    assert args.timezone == "America/New_York"


@pytest.mark.unit
def test_parse_date_flags():
    args = build_parser().parse_args(["--after", "2026-01-01", "--before", "2026-02-01", "--force"])

    assert (args.after, args.before, args.force) == ("2026-01-01", "2026-02-01", True)


@pytest.mark.unit
@pytest.mark.parametrize(
    "argv",
    [
        ["--after", "Jan 1 2026"],
        ["--after", "2026-1-1"],
        ["--before", "2026-02-30"],
        ["--after"],
    ],
)
def test_malformed_dates_exit_1(argv, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)

    assert exc_info.value.code == 1
    assert "usage:" in capsys.readouterr().err


@pytest.mark.unit
def test_success_prints_summary_to_stderr(capsys):
    stats = SyncStats(fetched=3, created=1, updated=1, unchanged=1)

    with patch("src.ingestion.__main__.sync_videos", return_value=stats) as sync:
        with pytest.raises(SystemExit) as exc_info:
            main(["--after", "2026-01-01", "--force"])

    assert exc_info.value.code == 0
    config = sync.call_args.args[0]
    assert config.after_date == "2026-01-01"
    assert config.force is True

    out, err = capsys.readouterr()
    assert out == ""
    assert "✓ 1 created, 1 updated, 1 unchanged (3 fetched) from 1gofcode channel" in err


@pytest.mark.unit
def test_missing_credentials_exit_1(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--env-file", "does-not-exist.env"])

    assert exc_info.value.code == 1
    err = capsys.readouterr().err
    assert "TWITCH_CLIENT_ID and TWITCH_CLIENT_SECRET must be set" in err
    assert "dev.twitch.tv/console" in err


@pytest.mark.unit
def test_api_failure_exit_1(capsys):
    with patch(
        "src.ingestion.__main__.sync_videos",
        side_effect=AuthError("HTTP 403: invalid client", status_code=403),
    ):
        with pytest.raises(SystemExit) as exc_info:
            main([])

    assert exc_info.value.code == 1
    assert "HTTP 403: invalid client" in capsys.readouterr().err


@pytest.mark.unit
def test_keyboard_interrupt_exit_130():
    with patch("src.ingestion.__main__.sync_videos", side_effect=KeyboardInterrupt):
        with pytest.raises(SystemExit) as exc_info:
            main([])

    assert exc_info.value.code == 130
