"""Elapsed-duration computation between two normalized instants."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from .errors import RangeError
from .schema import NormalizedInstant, SleepRecord

MS_PER_MINUTE = 60_000


def advance_calendar_day(moment: NormalizedInstant) -> NormalizedInstant:
    """Move ``moment`` to the same host wall-clock time on the following day.

    Across a host DST change the step is 23 or 25 hours rather than 24.
    """
    wall_clock = moment.instant.astimezone().replace(tzinfo=None)
    try:
        next_day = (wall_clock + timedelta(days=1)).astimezone()
    except OverflowError as exc:
        raise RangeError(f"Cannot move {wall_clock.isoformat()} to the next day") from exc
    return NormalizedInstant(instant=next_day, timezone=moment.timezone)


def compute_sleep_record(
    bedtime: NormalizedInstant,
    wake_up: NormalizedInstant,
    timezone: Optional[str] = None,
) -> SleepRecord:
    """Return the sleep record spanning ``bedtime`` to ``wake_up``.

    A wake-up at or before bedtime belongs to the next calendar day.
    """
    if wake_up <= bedtime:
        wake_up = advance_calendar_day(wake_up)

    duration_ms = wake_up.epoch_ms - bedtime.epoch_ms
    total_minutes = duration_ms // MS_PER_MINUTE
    hours, minutes = divmod(total_minutes, 60)

    return SleepRecord(
        bedtime=bedtime,
        wake_up_time=wake_up,
        duration_ms=duration_ms,
        hours=hours,
        minutes=minutes,
        total_minutes=total_minutes,
        timezone=timezone,
    )
