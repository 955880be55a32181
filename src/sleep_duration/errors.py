"""Error kinds raised by the sleep duration toolkit."""

from __future__ import annotations


class SleepDurationError(ValueError):
    """Base class for all toolkit errors."""


class FormatError(SleepDurationError):
    """A time expression does not match any recognised clock format."""


class RangeError(SleepDurationError):
    """An hour, minute or second value falls outside its valid range."""


class InvalidTimezoneError(SleepDurationError):
    """A timezone identifier cannot be resolved."""


class CalculationError(SleepDurationError):
    """Umbrella error raised by the calculator facade, carrying the underlying error message."""
