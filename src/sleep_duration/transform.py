"""Timezone normalization utilities for bedtime and wake-up instants."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta
from datetime import timezone as dt_timezone
from pathlib import Path
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidTimezoneError, RangeError
from .schema import NormalizedInstant, TimezoneInfo

logger = logging.getLogger(__name__)

FALLBACK_TIMEZONE = "UTC"
ETC_TIMEZONE = Path("/etc/timezone")
ETC_LOCALTIME = Path("/etc/localtime")

Moment = Union[datetime, NormalizedInstant]


def resolve_zone(tz_name: str) -> ZoneInfo:
    """Return the ``ZoneInfo`` for ``tz_name`` or raise ``InvalidTimezoneError``."""
    if not isinstance(tz_name, str) or not tz_name.strip():
        raise InvalidTimezoneError(f"Invalid timezone: {tz_name!r}")
    try:
        return ZoneInfo(tz_name.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InvalidTimezoneError(f"Invalid timezone: {tz_name}") from exc


def _is_resolvable(tz_name: str) -> bool:
    try:
        resolve_zone(tz_name)
    except InvalidTimezoneError:
        return False
    return True


def host_timezone() -> str:
    """Best-effort IANA name of the host timezone."""
    candidates = [os.environ.get("TZ", "").lstrip(":")]
    if ETC_TIMEZONE.exists():
        candidates.append(ETC_TIMEZONE.read_text(encoding="utf-8").strip())
    if ETC_LOCALTIME.is_symlink():
        target = str(ETC_LOCALTIME.resolve())
        if "zoneinfo/" in target:
            candidates.append(target.split("zoneinfo/", 1)[1])

    for candidate in candidates:
        if candidate and _is_resolvable(candidate):
            return candidate
    return FALLBACK_TIMEZONE


def _anchor(moment: Moment) -> datetime:
    """Return an aware datetime, reading naive values as host-local wall-clock time."""
    if isinstance(moment, NormalizedInstant):
        return moment.instant
    if moment.tzinfo is None or moment.tzinfo.utcoffset(moment) is None:
        return moment.astimezone()
    return moment


def get_timezone_offset(moment: Moment, tz_name: str) -> int:
    """Return signed minutes such that ``UTC + offset = local`` in ``tz_name`` at ``moment``."""
    zone = resolve_zone(tz_name)
    offset = _anchor(moment).astimezone(zone).utcoffset()
    return int(offset.total_seconds() // 60)


def get_timezone_info(tz_name: str, now: Optional[datetime] = None) -> TimezoneInfo:
    """Describe ``tz_name`` as of ``now`` (defaults to the current moment)."""
    zone = resolve_zone(tz_name)
    local = _anchor(now or datetime.now(dt_timezone.utc)).astimezone(zone)
    offset = local.utcoffset()
    return TimezoneInfo(
        name=tz_name,
        offset=int(offset.total_seconds() // 60),
        abbreviation=local.tzname() or tz_name,
    )


def normalize_instant(
    moment: datetime,
    tz_name: str,
    *,
    handle_dst: bool = True,
    now: Optional[datetime] = None,
) -> NormalizedInstant:
    """Anchor ``moment`` and correct it for seasonal offset drift in ``tz_name``.

    Naive values are read as host-local time. With ``handle_dst`` the offset of
    the target instant in ``tz_name`` is compared with the offset of ``now`` in
    the same zone and the instant is shifted by the difference. This is an
    approximation: the zone's transition rules are only consulted at those two
    points.

    An unresolvable zone never fails the call; the baseline instant is returned
    tagged with the host timezone and a warning is logged.
    """
    baseline = _anchor(moment)
    if not handle_dst:
        return NormalizedInstant(instant=baseline, timezone=tz_name)

    try:
        target_offset = get_timezone_offset(baseline, tz_name)
        current_offset = get_timezone_offset(now or datetime.now(dt_timezone.utc), tz_name)
    except InvalidTimezoneError:
        logger.warning("Timezone conversion failed for %s, using local timezone", tz_name)
        return NormalizedInstant(instant=baseline, timezone=host_timezone())

    adjusted = baseline
    if target_offset != current_offset:
        drift = current_offset - target_offset
        logger.debug(
            "Offset drift of %s minutes in %s (target %s, current %s)",
            drift,
            tz_name,
            target_offset,
            current_offset,
        )
        try:
            adjusted = baseline + timedelta(minutes=drift)
        except OverflowError as exc:
            raise RangeError(f"Cannot shift {baseline.isoformat()} by {drift} minutes") from exc
    return NormalizedInstant(instant=adjusted, timezone=tz_name)


def format_time_in_timezone(moment: Moment, tz_name: str) -> str:
    """Render ``moment`` as zero-padded 24-hour ``HH:MM:SS`` in ``tz_name``."""
    anchored = _anchor(moment)
    try:
        zone = resolve_zone(tz_name)
    except InvalidTimezoneError:
        logger.warning("Cannot render time in %s, using local timezone", tz_name)
        return anchored.astimezone().strftime("%H:%M:%S")
    return anchored.astimezone(zone).strftime("%H:%M:%S")
