"""Plain-text summaries of a sleep calculation."""

from __future__ import annotations

from typing import List, Optional

from ..calculator import format_sleep_duration
from ..schema import SleepRecord, SleepStatus, TimezoneInfo, ValidationResult
from ..transform import format_time_in_timezone


def render_summary(
    bedtime_text: str,
    wake_up_text: str,
    record: SleepRecord,
    verdict: ValidationResult,
    *,
    tz_info: Optional[TimezoneInfo] = None,
) -> List[str]:
    """Return the human-readable lines describing one calculation and its verdict."""
    header = f"Bedtime: {bedtime_text}, Wake-up: {wake_up_text}"
    lines = []
    if tz_info is None:
        lines.append(header)
    else:
        lines.append(f"{header}, Timezone: {tz_info.name}")
        lines.append(
            f"Bedtime ({tz_info.abbreviation}): "
            f"{format_time_in_timezone(record.bedtime, tz_info.name)}"
        )
        lines.append(
            f"Wake-up ({tz_info.abbreviation}): "
            f"{format_time_in_timezone(record.wake_up_time, tz_info.name)}"
        )

    lines.append(f"Sleep duration: {format_sleep_duration(record)}")
    lines.append(f"Status: {verdict.status.value}")
    lines.append(f"Recommendation: {verdict.recommendation}")
    if verdict.status is SleepStatus.INSUFFICIENT:
        lines.append("Warning: sleep duration is insufficient")
    else:
        lines.append(f"Sleep duration is {verdict.status.value}")
    return lines
