"""Sleep duration calculation with timezone normalization and guideline classification."""

from .calculator import (
    CalculatorConfig,
    SleepCalculator,
    calculate_sleep_duration,
    format_sleep_duration,
    validate_sleep_duration,
)
from .classify import classify_sleep
from .errors import CalculationError, FormatError, InvalidTimezoneError, RangeError, SleepDurationError
from .parsers import parse_time_input
from .schema import (
    ClockTime,
    NormalizedInstant,
    SleepGuidelines,
    SleepRecord,
    SleepStatus,
    TimezoneInfo,
    ValidationResult,
)
from .transform import format_time_in_timezone, get_timezone_info, get_timezone_offset, normalize_instant

__all__ = [
    "CalculationError",
    "CalculatorConfig",
    "ClockTime",
    "FormatError",
    "InvalidTimezoneError",
    "NormalizedInstant",
    "RangeError",
    "SleepCalculator",
    "SleepDurationError",
    "SleepGuidelines",
    "SleepRecord",
    "SleepStatus",
    "TimezoneInfo",
    "ValidationResult",
    "calculate_sleep_duration",
    "classify_sleep",
    "format_sleep_duration",
    "format_time_in_timezone",
    "get_timezone_info",
    "get_timezone_offset",
    "normalize_instant",
    "parse_time_input",
    "validate_sleep_duration",
]
