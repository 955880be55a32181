"""Value objects shared by the parser, normalizer, duration engine and classifier."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_ONE_MS = timedelta(milliseconds=1)

DEFAULT_GUIDELINES = {
    "insufficient": 6.0,
    "adequate": 7.0,
    "optimal": 9.0,
    "excessive": 10.0,
}


class ClockTime(BaseModel):
    """Hour/minute/second triple in 24-hour form."""

    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(..., ge=0, le=59)
    second: int = Field(0, ge=0, le=59)

    model_config = ConfigDict(extra="forbid", frozen=True)


class NormalizedInstant(BaseModel):
    """Absolute point in time plus the timezone identifier used to produce it."""

    instant: datetime = Field(..., description="Timezone-aware instant, stored in UTC.")
    timezone: str = Field(..., description="Timezone identifier used for normalization.")

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("instant")
    @staticmethod
    def validate_instant(value: datetime) -> datetime:
        if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
            raise ValueError("Instant must be timezone-aware.")
        # millisecond precision
        value = value.replace(microsecond=value.microsecond // 1000 * 1000)
        return value.astimezone(timezone.utc)

    @property
    def epoch_ms(self) -> int:
        delta = self.instant - datetime(1970, 1, 1, tzinfo=timezone.utc)
        return delta // _ONE_MS

    def __le__(self, other: "NormalizedInstant") -> bool:
        return self.instant <= other.instant


class SleepRecord(BaseModel):
    """Result of a single bedtime/wake-up calculation."""

    bedtime: NormalizedInstant
    wake_up_time: NormalizedInstant
    duration_ms: int = Field(..., ge=0)
    hours: int = Field(..., ge=0)
    minutes: int = Field(..., ge=0, le=59)
    total_minutes: int = Field(..., ge=0)
    timezone: Optional[str] = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def validate_consistency(self) -> "SleepRecord":
        if self.wake_up_time.instant <= self.bedtime.instant:
            raise ValueError("wake_up_time must be after bedtime.")
        if self.duration_ms != self.wake_up_time.epoch_ms - self.bedtime.epoch_ms:
            raise ValueError("duration_ms does not match the bedtime/wake-up span.")
        if self.total_minutes != self.duration_ms // 60000:
            raise ValueError("total_minutes does not match duration_ms.")
        if self.hours * 60 + self.minutes != self.total_minutes:
            raise ValueError("hours and minutes do not add up to total_minutes.")
        return self


class SleepGuidelines(BaseModel):
    """Hour thresholds used to classify total sleep.

    Threshold ordering is not checked; an inconsistent table
    simply yields overlapping or unreachable bands.
    """

    insufficient: float = DEFAULT_GUIDELINES["insufficient"]
    adequate: float = DEFAULT_GUIDELINES["adequate"]
    optimal: float = DEFAULT_GUIDELINES["optimal"]
    excessive: float = DEFAULT_GUIDELINES["excessive"]

    model_config = ConfigDict(extra="forbid", frozen=True)

    def merged(self, **overrides: Any) -> "SleepGuidelines":
        """Return a new table with ``overrides`` applied on top of this one."""
        payload = self.model_dump()
        payload.update({key: value for key, value in overrides.items() if value is not None})
        return SleepGuidelines(**payload)


class SleepStatus(str, Enum):
    INSUFFICIENT = "insufficient"
    ADEQUATE = "adequate"
    OPTIMAL = "optimal"
    EXCESSIVE = "excessive"


class ValidationResult(BaseModel):
    status: SleepStatus
    recommendation: str
    total_hours: float

    model_config = ConfigDict(extra="forbid", frozen=True)


class TimezoneInfo(BaseModel):
    name: str
    offset: int = Field(..., description="Signed minutes such that UTC + offset = local time.")
    abbreviation: str

    model_config = ConfigDict(extra="forbid", frozen=True)
