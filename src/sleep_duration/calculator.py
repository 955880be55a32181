"""Sleep calculator configuration, pure calculation functions and a thin facade."""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .classify import classify_sleep
from .config import Settings
from .duration import compute_sleep_record
from .errors import CalculationError
from .parsers import TimeExpression, parse_time_input
from .schema import NormalizedInstant, SleepGuidelines, SleepRecord, TimezoneInfo, ValidationResult
from .transform import format_time_in_timezone, get_timezone_info, host_timezone, normalize_instant

logger = logging.getLogger(__name__)


class CalculatorConfig(BaseModel):
    """Immutable calculator settings threaded through every calculation."""

    guidelines: SleepGuidelines = Field(default_factory=SleepGuidelines)
    default_date: date = Field(default_factory=date.today)
    default_timezone: str = Field(default_factory=host_timezone)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("default_date", mode="before")
    @staticmethod
    def validate_default_date(value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        return value

    @classmethod
    def build(
        cls,
        guidelines: Optional[Dict[str, Any]] = None,
        default_date: Optional[date] = None,
        default_timezone: Optional[str] = None,
    ) -> "CalculatorConfig":
        """Merge caller overrides onto the default guideline table and settings."""
        payload: Dict[str, Any] = {"guidelines": SleepGuidelines().merged(**(guidelines or {}))}
        if default_date is not None:
            payload["default_date"] = default_date
        if default_timezone:
            payload["default_timezone"] = default_timezone
        return cls(**payload)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CalculatorConfig":
        return cls.build(
            guidelines=settings.guidelines,
            default_date=settings.default_date,
            default_timezone=settings.default_timezone,
        )

    def with_guidelines(self, **overrides: Any) -> "CalculatorConfig":
        return self.model_copy(update={"guidelines": self.guidelines.merged(**overrides)})

    def with_default_timezone(self, tz_name: str) -> "CalculatorConfig":
        return self.model_copy(update={"default_timezone": tz_name})


def _wall_clock(expression: TimeExpression, base_date: date) -> datetime:
    # resolved instants keep their own calendar date
    if isinstance(expression, datetime):
        return expression
    clock = parse_time_input(expression)
    return datetime.combine(base_date, time(clock.hour, clock.minute, clock.second))


def calculate_sleep_duration(
    bedtime: TimeExpression,
    wake_up: TimeExpression,
    config: CalculatorConfig,
    *,
    timezone: Optional[str] = None,
    date: Optional[date] = None,
    handle_dst: bool = True,
    now: Optional[datetime] = None,
) -> SleepRecord:
    """Compute the sleep record between ``bedtime`` and ``wake_up``.

    ``timezone`` and ``date`` default to the config's values; ``now`` pins the
    reference moment used for the DST offset comparison. Any parsing, range or
    consistency failure is raised as ``CalculationError``.
    """
    tz_name = timezone or config.default_timezone
    base_date = date or config.default_date
    if isinstance(base_date, datetime):
        base_date = base_date.date()

    try:
        bed = normalize_instant(
            _wall_clock(bedtime, base_date), tz_name, handle_dst=handle_dst, now=now
        )
        wake = normalize_instant(
            _wall_clock(wake_up, base_date), tz_name, handle_dst=handle_dst, now=now
        )
        record = compute_sleep_record(bed, wake, timezone=tz_name)
    except (ValueError, OverflowError) as exc:
        raise CalculationError(f"Error calculating sleep duration: {exc}") from exc

    logger.debug(
        "Calculated %s minutes between %s and %s (%s)",
        record.total_minutes,
        record.bedtime.instant.isoformat(),
        record.wake_up_time.instant.isoformat(),
        tz_name,
    )
    return record


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count != 1 else ''}"


def format_sleep_duration(record: SleepRecord) -> str:
    """Render the record as English prose, e.g. ``8 hours and 45 minutes``."""
    if record.hours == 0:
        return _plural(record.minutes, "minute")
    if record.minutes == 0:
        return _plural(record.hours, "hour")
    return f"{_plural(record.hours, 'hour')} and {_plural(record.minutes, 'minute')}"


def validate_sleep_duration(record: SleepRecord, config: CalculatorConfig) -> ValidationResult:
    return classify_sleep(record.hours, record.minutes, config.guidelines)


class SleepCalculator:
    """Stateful convenience wrapper holding the current ``CalculatorConfig``."""

    def __init__(
        self,
        config: Optional[CalculatorConfig] = None,
        *,
        guidelines: Optional[Dict[str, Any]] = None,
        default_date: Optional[date] = None,
        default_timezone: Optional[str] = None,
    ) -> None:
        if config is None:
            config = CalculatorConfig.build(
                guidelines=guidelines,
                default_date=default_date,
                default_timezone=default_timezone,
            )
        self._config = config

    @property
    def config(self) -> CalculatorConfig:
        return self._config

    def calculate_sleep_duration(
        self,
        bedtime: TimeExpression,
        wake_up: TimeExpression,
        *,
        timezone: Optional[str] = None,
        date: Optional[date] = None,
        handle_dst: bool = True,
        now: Optional[datetime] = None,
    ) -> SleepRecord:
        return calculate_sleep_duration(
            bedtime,
            wake_up,
            self._config,
            timezone=timezone,
            date=date,
            handle_dst=handle_dst,
            now=now,
        )

    def format_sleep_duration(self, record: SleepRecord) -> str:
        return format_sleep_duration(record)

    def validate_sleep_duration(self, record: SleepRecord) -> ValidationResult:
        return validate_sleep_duration(record, self._config)

    def get_timezone_info(self, tz_name: str) -> TimezoneInfo:
        return get_timezone_info(tz_name)

    def format_time_in_timezone(self, moment: datetime | NormalizedInstant, tz_name: str) -> str:
        return format_time_in_timezone(moment, tz_name)

    def update_guidelines(self, **overrides: Any) -> None:
        self._config = self._config.with_guidelines(**overrides)

    def get_guidelines(self) -> SleepGuidelines:
        return self._config.guidelines.model_copy()

    def set_default_timezone(self, tz_name: str) -> None:
        self._config = self._config.with_default_timezone(tz_name)

    def get_default_timezone(self) -> str:
        return self._config.default_timezone
