"""Parser for bedtime/wake-up clock expressions."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Union

from ..errors import FormatError, RangeError
from ..schema import ClockTime

TimeExpression = Union[str, datetime]

TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{2})(?::(\d{2}))?(?:\s*(am|pm))?", re.IGNORECASE | re.ASCII)


def _to_24_hour(hour: int, period: str | None) -> int:
    if period == "pm" and hour != 12:
        return hour + 12
    if period == "am" and hour == 12:
        return 0
    return hour


def parse_time_input(expression: TimeExpression) -> ClockTime:
    """Parse a 12/24-hour clock string or a resolved datetime into a 24-hour triple.

    Accepted strings look like ``7:30``, ``22:30:15``, ``10:30 PM`` or ``6:45am``.
    Raises ``FormatError`` when the text does not match and ``RangeError`` when a
    component is out of bounds after the 12-hour conversion.
    """
    if isinstance(expression, datetime):
        return ClockTime(
            hour=expression.hour,
            minute=expression.minute,
            second=expression.second,
        )

    if not isinstance(expression, str):
        raise FormatError(f"Unsupported time format: {type(expression).__name__}")

    match = TIME_PATTERN.fullmatch(expression)
    if not match:
        raise FormatError(f"Invalid time format: {expression}. Use HH:MM or HH:MM:SS format")

    hour_text, minute_text, second_text, period = match.groups()
    hour = _to_24_hour(int(hour_text), period.lower() if period else None)
    minute = int(minute_text)
    second = int(second_text) if second_text else 0

    if not (0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59):
        raise RangeError(f"Invalid time values: {expression}")

    return ClockTime(hour=hour, minute=minute, second=second)
