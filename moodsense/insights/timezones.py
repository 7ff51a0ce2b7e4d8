"""
Timezone helpers for calendar-day bucketing.

All date math in the engine goes through here. A user's IANA zone name is
resolved once; when it is missing or unknown, every computation uses the
evaluating machine's local timezone instead. That fallback is a normal,
deterministic branch and is never reported as an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from moodsense.insights import WEEKDAY_NAMES
from moodsense.insights.models import parse_timestamp
from moodsense.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ZonedParts:
    year: int
    month: int
    day: int
    hour: int
    weekday: str


def resolve_timezone(name: str | None) -> ZoneInfo | None:
    """
    Resolve an IANA zone name.

    Returns None when the name is missing or cannot be resolved, which
    callers treat as "use the machine's local time".
    """
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        logger.debug("timezone_fallback_local", requested=name, reason=str(e))
        return None


def _as_tz(time_zone: str | tzinfo | None) -> tzinfo | None:
    if time_zone is None or isinstance(time_zone, tzinfo):
        return time_zone
    return resolve_timezone(time_zone)


def to_local(value: datetime | str, time_zone: str | tzinfo | None = None) -> datetime:
    """Convert an instant to wall-clock time in the zone (or local time)."""
    instant = parse_timestamp(value)
    tz = _as_tz(time_zone)
    if tz is None:
        return instant.astimezone()
    return instant.astimezone(tz)


def get_zoned_parts(value: datetime | str, time_zone: str | tzinfo | None = None) -> ZonedParts:
    local = to_local(value, time_zone)
    return ZonedParts(
        year=local.year,
        month=local.month,
        day=local.day,
        hour=local.hour,
        # datetime.weekday() is Monday=0; WEEKDAY_NAMES starts at Sunday
        weekday=WEEKDAY_NAMES[(local.weekday() + 1) % 7],
    )


def get_day_key(value: datetime | str, time_zone: str | tzinfo | None = None) -> date:
    """Calendar day (midnight to midnight) the instant falls on in the zone."""
    parts = get_zoned_parts(value, time_zone)
    return date(parts.year, parts.month, parts.day)


def day_gap(newer: datetime | str, older: datetime | str, time_zone: str | tzinfo | None = None) -> int:
    """Whole calendar days between two instants, in the zone."""
    return (get_day_key(newer, time_zone) - get_day_key(older, time_zone)).days


__all__ = [
    "ZonedParts",
    "day_gap",
    "get_day_key",
    "get_zoned_parts",
    "resolve_timezone",
    "to_local",
]
