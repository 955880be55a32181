from __future__ import annotations

from datetime import date, datetime, timezone

from hypothesis import given, settings, strategies as st

from sleep_duration.calculator import CalculatorConfig, calculate_sleep_duration, validate_sleep_duration
from sleep_duration.parsers import parse_time_input
from sleep_duration.schema import SleepGuidelines

CONFIG = CalculatorConfig.build(default_date=date(2024, 1, 15), default_timezone="UTC")
NOW = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

hours_24 = st.integers(min_value=0, max_value=23)
hours_12 = st.integers(min_value=1, max_value=12)
minutes = st.integers(min_value=0, max_value=59)


@given(hours_24, minutes, st.booleans())
def test_24_hour_strings_round_trip(hour: int, minute: int, pad: bool) -> None:
    text = f"{hour:02d}:{minute:02d}" if pad else f"{hour}:{minute:02d}"
    clock = parse_time_input(text)
    assert f"{clock.hour:02d}:{clock.minute:02d}:{clock.second:02d}" == f"{hour:02d}:{minute:02d}:00"


@given(hours_12, minutes, st.sampled_from(["am", "pm", "AM", "PM", " am", " PM"]))
def test_12_hour_conversion(hour: int, minute: int, period: str) -> None:
    clock = parse_time_input(f"{hour}:{minute:02d}{period}")
    is_pm = period.strip().lower() == "pm"
    if hour == 12:
        expected = 12 if is_pm else 0
    else:
        expected = hour + 12 if is_pm else hour
    assert clock.hour == expected
    assert clock.minute == minute


@settings(max_examples=50)
@given(hours_24, minutes, hours_24, minutes)
def test_cross_midnight_duration(bed_h: int, bed_m: int, wake_h: int, wake_m: int) -> None:
    record = calculate_sleep_duration(
        f"{bed_h:02d}:{bed_m:02d}", f"{wake_h:02d}:{wake_m:02d}", CONFIG, now=NOW
    )
    bed_minutes = bed_h * 60 + bed_m
    wake_minutes = wake_h * 60 + wake_m
    if wake_minutes <= bed_minutes:
        expected = (24 * 60 - bed_minutes) + wake_minutes
    else:
        expected = wake_minutes - bed_minutes
    assert record.duration_ms > 0
    assert record.total_minutes == expected
    assert record.hours * 60 + record.minutes == expected
    assert record.wake_up_time.instant > record.bedtime.instant


@given(
    st.integers(min_value=0, max_value=24),
    minutes,
    st.floats(min_value=0, max_value=12, allow_nan=False),
)
def test_classification_is_idempotent(hours: int, minute: int, optimal: float) -> None:
    config = CONFIG.with_guidelines(optimal=optimal)
    record = calculate_sleep_duration("00:00", f"{hours % 24:02d}:{minute:02d}", config, now=NOW)
    assert validate_sleep_duration(record, config) == validate_sleep_duration(record, config)
    assert SleepGuidelines().merged(optimal=optimal).optimal == optimal
