import pytest

from src.ingestion.duration import format_duration


@pytest.mark.unit
@pytest.mark.parametrize(
    "twitch_duration, expected",
    [
        ("30s", "0:30"),
        ("45m10s", "45:10"),
        ("1h1m29s", "1:01:29"),
        ("", "0:00"),
        ("2h", "2:00:00"),
        ("3m", "3:00"),
        ("10h5s", "10:00:05"),
    ],
)
def test_format_duration(twitch_duration, expected):
    assert format_duration(twitch_duration) == expected


@pytest.mark.unit
def test_format_duration_rejects_garbage():
    with pytest.raises(ValueError):
        format_duration("1:01:29")
