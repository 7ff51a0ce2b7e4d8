"""
Streak calculator.

Two independent measures over the full history (newest first):

- Check-in streak: consecutive calendar days with at least one entry, using
  day keys in the user's timezone. Several entries on one day neither break
  nor extend the run; a gap of more than one day ends it.
- Mood streaks: leading run of entries (by position, ignoring dates) with
  score <= 4 (low) or >= 7 (high).

Only one streak is reported: low_mood > high_mood > checking_in, each
needing at least 3.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import tzinfo

from moodsense.insights.config import InsightsConfig
from moodsense.insights.models import CheckInEntry, Streak, StreakType
from moodsense.insights.stats import count_leading
from moodsense.insights.timezones import get_day_key


def check_in_streak(entries: Sequence[CheckInEntry], time_zone: str | tzinfo | None = None) -> int:
    """Consecutive calendar days with a check-in, counting back from the newest entry."""
    if not entries:
        return 0

    streak = 1
    day_keys = [get_day_key(e.created_at, time_zone) for e in entries]

    for newer, older in zip(day_keys, day_keys[1:]):
        gap = (newer - older).days
        if gap == 1:
            streak += 1
        elif gap > 1:
            break

    return streak


def mood_streaks(entries: Sequence[CheckInEntry], config: InsightsConfig | None = None) -> tuple[int, int]:
    """(low run, high run) at the head of the history."""
    cfg = (config or InsightsConfig()).pattern
    scores = [e.score for e in entries]
    low = count_leading(scores, lambda s: s <= cfg.low_threshold)
    high = count_leading(scores, lambda s: s >= cfg.high_threshold)
    return low, high


def current_streak(
    entries: Sequence[CheckInEntry],
    time_zone: str | tzinfo | None = None,
    config: InsightsConfig | None = None,
) -> Streak | None:
    config = config or InsightsConfig()
    minimum = config.pattern.min_streak

    if len(entries) < 2:
        return None

    low, high = mood_streaks(entries, config)
    if low >= minimum:
        return Streak(StreakType.LOW_MOOD, low)
    if high >= minimum:
        return Streak(StreakType.HIGH_MOOD, high)

    days = check_in_streak(entries, time_zone)
    if days >= minimum:
        return Streak(StreakType.CHECKING_IN, days)

    return None


__all__ = ["check_in_streak", "current_streak", "mood_streaks"]
