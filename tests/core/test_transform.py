from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest

from sleep_duration.errors import InvalidTimezoneError, RangeError
from sleep_duration.schema import NormalizedInstant
from sleep_duration.transform import (
    format_time_in_timezone,
    get_timezone_info,
    get_timezone_offset,
    host_timezone,
    normalize_instant,
    resolve_zone,
)

WINTER = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
SUMMER = datetime(2024, 7, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("tz_name", "moment", "expected"),
    [
        ("America/New_York", WINTER, -300),
        ("America/New_York", SUMMER, -240),
        ("Europe/London", SUMMER, 60),
        ("Asia/Kolkata", WINTER, 330),
        ("UTC", SUMMER, 0),
    ],
)
def test_get_timezone_offset(tz_name: str, moment: datetime, expected: int) -> None:
    assert get_timezone_offset(moment, tz_name) == expected


def test_get_timezone_offset_rejects_unknown_zone() -> None:
    with pytest.raises(InvalidTimezoneError):
        get_timezone_offset(WINTER, "Mars/Olympus_Mons")


@pytest.mark.parametrize("tz_name", ["", "   ", "Not/AZone", "../etc/passwd"])
def test_resolve_zone_rejects_bad_identifiers(tz_name: str) -> None:
    with pytest.raises(InvalidTimezoneError):
        resolve_zone(tz_name)


def test_get_timezone_info_reports_abbreviation() -> None:
    info = get_timezone_info("Europe/London", now=SUMMER)
    assert info.name == "Europe/London"
    assert info.offset == 60
    assert info.abbreviation == "BST"

    winter = get_timezone_info("America/New_York", now=WINTER)
    assert (winter.offset, winter.abbreviation) == (-300, "EST")


def test_get_timezone_info_rejects_unknown_zone() -> None:
    with pytest.raises(InvalidTimezoneError):
        get_timezone_info("Invalid/Zone")


def test_host_timezone_reads_tz_variable() -> None:
    assert host_timezone() == "UTC"


def test_normalize_instant_anchors_naive_values_to_host() -> None:
    result = normalize_instant(datetime(2024, 1, 15, 22, 30), "UTC", now=SUMMER)
    assert result.instant == datetime(2024, 1, 15, 22, 30, tzinfo=timezone.utc)
    assert result.timezone == "UTC"


def test_normalize_instant_shifts_by_offset_drift() -> None:
    naive = datetime(2024, 1, 15, 22, 30)
    adjusted = normalize_instant(naive, "America/New_York", now=SUMMER)
    assert adjusted.instant == datetime(2024, 1, 15, 23, 30, tzinfo=timezone.utc)

    same_season = normalize_instant(naive, "America/New_York", now=WINTER)
    assert same_season.instant == datetime(2024, 1, 15, 22, 30, tzinfo=timezone.utc)


def test_normalize_instant_without_dst_keeps_baseline() -> None:
    result = normalize_instant(
        datetime(2024, 1, 15, 22, 30), "America/New_York", handle_dst=False, now=SUMMER
    )
    assert result.instant == datetime(2024, 1, 15, 22, 30, tzinfo=timezone.utc)
    assert result.timezone == "America/New_York"


def test_normalize_instant_drift_past_datetime_max_is_range_error() -> None:
    last_evening = datetime(9999, 12, 31, 23, 30, tzinfo=timezone.utc)
    with pytest.raises(RangeError, match="by 60 minutes"):
        normalize_instant(last_evening, "America/New_York", now=SUMMER)


def test_normalize_instant_falls_back_on_unknown_zone(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="sleep_duration.transform"):
        result = normalize_instant(datetime(2024, 1, 15, 22, 30), "Nowhere/Special")
    assert result.instant == datetime(2024, 1, 15, 22, 30, tzinfo=timezone.utc)
    assert result.timezone == "UTC"
    assert "Timezone conversion failed for Nowhere/Special" in caplog.text


def test_format_time_in_timezone() -> None:
    moment = datetime(2024, 1, 16, 3, 30, 5, tzinfo=timezone.utc)
    assert format_time_in_timezone(moment, "America/New_York") == "22:30:05"
    instant = NormalizedInstant(instant=moment, timezone="UTC")
    assert format_time_in_timezone(instant, "Asia/Kolkata") == "09:00:05"


def test_format_time_in_timezone_falls_back_to_host(caplog) -> None:
    moment = datetime(2024, 1, 16, 3, 30, tzinfo=timezone.utc)
    with caplog.at_level(logging.WARNING, logger="sleep_duration.transform"):
        assert format_time_in_timezone(moment, "Bad/Zone") == "03:30:00"
    assert "Bad/Zone" in caplog.text
