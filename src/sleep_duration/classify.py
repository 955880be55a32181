"""Guideline-based classification of total sleep."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from .schema import SleepGuidelines, SleepStatus, ValidationResult

RECOMMENDATIONS = {
    SleepStatus.INSUFFICIENT: "You may not be getting enough sleep. Consider going to bed earlier.",
    SleepStatus.EXCESSIVE: "You may be sleeping too much. Consider adjusting your sleep schedule.",
    SleepStatus.OPTIMAL: "Great! You're getting the recommended amount of sleep.",
    SleepStatus.ADEQUATE: "Your sleep duration is adequate but could be optimized.",
}


def _round_hundredths(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _status_for(total_hours: float, guidelines: SleepGuidelines) -> SleepStatus:
    if total_hours < guidelines.insufficient:
        return SleepStatus.INSUFFICIENT
    if total_hours > guidelines.excessive:
        return SleepStatus.EXCESSIVE
    if guidelines.adequate <= total_hours <= guidelines.optimal:
        return SleepStatus.OPTIMAL
    return SleepStatus.ADEQUATE


def classify_sleep(hours: int, minutes: int, guidelines: SleepGuidelines) -> ValidationResult:
    """Classify ``hours`` + ``minutes`` of sleep against ``guidelines``.

    The floor and ceiling are checked first, then the inclusive optimal band;
    anything left over is adequate.
    """
    total_hours = hours + minutes / 60
    status = _status_for(total_hours, guidelines)
    return ValidationResult(
        status=status,
        recommendation=RECOMMENDATIONS[status],
        total_hours=_round_hundredths(total_hours),
    )
