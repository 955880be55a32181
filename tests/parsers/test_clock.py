from __future__ import annotations

from datetime import datetime

import pytest

from sleep_duration.errors import FormatError, RangeError
from sleep_duration.parsers import parse_time_input


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("22:30", (22, 30, 0)),
        ("7:05", (7, 5, 0)),
        ("07:15:42", (7, 15, 42)),
        ("10:30 PM", (22, 30, 0)),
        ("6:45 AM", (6, 45, 0)),
        ("6:45am", (6, 45, 0)),
        ("12:00 AM", (0, 0, 0)),
        ("12:00 pm", (12, 0, 0)),
        ("12:59:59 Am", (0, 59, 59)),
    ],
)
def test_parse_time_input_accepts_clock_strings(text: str, expected: tuple[int, int, int]) -> None:
    clock = parse_time_input(text)
    assert (clock.hour, clock.minute, clock.second) == expected


def test_parse_time_input_reads_datetime_components() -> None:
    clock = parse_time_input(datetime(2024, 5, 1, 23, 4, 5))
    assert (clock.hour, clock.minute, clock.second) == (23, 4, 5)


@pytest.mark.parametrize(
    "text",
    ["7:30xm", "730", "7:3", "abc", "", "7:30:5", "123:00", "٢٢:٣٠", "２２:３０", " 22:30", "22:30\n", "22:30 "],
)
def test_parse_time_input_rejects_unknown_formats(text: str) -> None:
    with pytest.raises(FormatError):
        parse_time_input(text)


@pytest.mark.parametrize("text", ["25:61", "24:00", "23:60", "23:59:60", "99:00"])
def test_parse_time_input_rejects_out_of_range_values(text: str) -> None:
    with pytest.raises(RangeError):
        parse_time_input(text)


def test_pm_on_late_hour_overflows_range() -> None:
    # 13 PM becomes hour 25 after the 12-hour conversion
    with pytest.raises(RangeError):
        parse_time_input("13:00 PM")


def test_parse_time_input_rejects_other_types() -> None:
    with pytest.raises(FormatError):
        parse_time_input(2230)  # type: ignore[arg-type]
