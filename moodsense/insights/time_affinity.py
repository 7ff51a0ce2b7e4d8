"""
Time-affinity analyzer.

Buckets check-ins by local hour and local weekday and reports the best and
worst bucket by mean score. Needs at least 7 entries overall, and a bucket
needs at least 2 samples to be ranked, so a single outlier can't claim
"you're a morning person". Time of day and day of week are ranked
independently.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import tzinfo

from moodsense.insights import WEEKDAY_NAMES
from moodsense.insights.config import InsightsConfig
from moodsense.insights.models import CheckInEntry, TimeAffinity, TimeOfDay
from moodsense.insights.stats import average
from moodsense.insights.timezones import get_zoned_parts


def time_of_day(hour: int) -> TimeOfDay:
    """morning 5-11, afternoon 12-16, evening 17-20, night 21-4."""
    if 5 <= hour < 12:
        return TimeOfDay.MORNING
    if 12 <= hour < 17:
        return TimeOfDay.AFTERNOON
    if 17 <= hour < 21:
        return TimeOfDay.EVENING
    return TimeOfDay.NIGHT


def _rank(buckets: dict, min_samples: int) -> list:
    """Bucket keys eligible for ranking, best mean first. Stable on bucket order."""
    eligible = [(key, average(scores)) for key, scores in buckets.items() if len(scores) >= min_samples]
    eligible.sort(key=lambda item: item[1], reverse=True)
    return [key for key, _ in eligible]


def analyze_time_affinity(
    entries: Sequence[CheckInEntry],
    time_zone: str | tzinfo | None = None,
    config: InsightsConfig | None = None,
) -> TimeAffinity:
    cfg = (config or InsightsConfig()).time_affinity

    if len(entries) < cfg.min_entries:
        return TimeAffinity()

    by_time: dict[TimeOfDay, list[int]] = {slot: [] for slot in TimeOfDay}
    by_day: dict[str, list[int]] = {day: [] for day in WEEKDAY_NAMES}

    for entry in entries:
        parts = get_zoned_parts(entry.created_at, time_zone)
        by_time[time_of_day(parts.hour)].append(entry.score)
        by_day[parts.weekday].append(entry.score)

    times = _rank(by_time, cfg.min_bucket_samples)
    days = _rank(by_day, cfg.min_bucket_samples)

    return TimeAffinity(
        best_time_of_day=times[0] if times else None,
        worst_time_of_day=times[-1] if times else None,
        best_day_of_week=days[0] if days else None,
        worst_day_of_week=days[-1] if days else None,
    )


__all__ = ["analyze_time_affinity", "time_of_day"]
