"""
Pattern classifier.

Picks the single highest-priority trend for the recent window (newest
first). Checks run in a fixed order and the first match wins:

    1. streak_low   - leading run of scores <= 4, length >= 3
    2. streak_high  - leading run of scores >= 7, length >= 3
    3. declining    - s[0] < s[1] < s[2] and s[0] <= 5
    4. improving    - s[0] > s[1] > s[2]
    5. volatile     - population variance > 4
    6. stable       - population variance < 2

Low streaks come first so a concerning run is never hidden behind a
milder "volatile" or "stable" label. Ties in the 3-point checks produce no
trend at all.
"""

from __future__ import annotations

from collections.abc import Sequence

from moodsense.insights.config import InsightsConfig
from moodsense.insights.models import PatternType, Severity, TrendPattern
from moodsense.insights.stats import average, count_leading, population_variance, round_half_up

# Number of points the declining/improving checks look at
TREND_POINTS = 3

# Newest score at or below this can be reported as declining
DECLINE_CEILING = 5

# Newest score at or below this makes a decline significant
DECLINE_SIGNIFICANT = 3


def _low_streak_severity(length: int) -> Severity:
    if length >= 5:
        return Severity.SIGNIFICANT
    if length >= 4:
        return Severity.MODERATE
    return Severity.MILD


def classify_pattern(
    recent_scores: Sequence[int], config: InsightsConfig | None = None
) -> TrendPattern | None:
    """
    Classify the recent window.

    Args:
        recent_scores: Scores of the recent window, newest first
        config: Thresholds (defaults to InsightsConfig())

    Returns:
        The first matching TrendPattern, or None
    """
    cfg = (config or InsightsConfig()).pattern
    scores = list(recent_scores)

    if len(scores) < TREND_POINTS:
        return None

    low_run = count_leading(scores, lambda s: s <= cfg.low_threshold)
    if low_run >= cfg.min_streak:
        return TrendPattern(
            type=PatternType.STREAK_LOW,
            description=f"{low_run} consecutive days with mood at {cfg.low_threshold} or below",
            severity=_low_streak_severity(low_run),
            days_affected=low_run,
        )

    high_run = count_leading(scores, lambda s: s >= cfg.high_threshold)
    if high_run >= cfg.min_streak:
        return TrendPattern(
            type=PatternType.STREAK_HIGH,
            description=f"{high_run} consecutive days with mood at {cfg.high_threshold} or above",
            # A long good run is not a concern
            severity=Severity.MILD,
            days_affected=high_run,
        )

    newest, previous, oldest = scores[:TREND_POINTS]

    if newest < previous < oldest and newest <= DECLINE_CEILING:
        return TrendPattern(
            type=PatternType.DECLINING,
            description="Mood has been declining over the past few days",
            severity=Severity.SIGNIFICANT if newest <= DECLINE_SIGNIFICANT else Severity.MODERATE,
            days_affected=TREND_POINTS,
        )

    if newest > previous > oldest:
        return TrendPattern(
            type=PatternType.IMPROVING,
            description="Mood has been improving over the past few days",
            severity=Severity.MILD,
            days_affected=TREND_POINTS,
        )

    variance = population_variance(scores)

    if variance > cfg.volatile_variance:
        return TrendPattern(
            type=PatternType.VOLATILE,
            description="Mood has been fluctuating significantly",
            severity=(
                Severity.SIGNIFICANT if variance > cfg.significant_variance else Severity.MODERATE
            ),
            days_affected=len(scores),
        )

    if variance < cfg.stable_variance:
        around = int(round_half_up(average(scores)))
        return TrendPattern(
            type=PatternType.STABLE,
            description=f"Mood has been consistently around {around}",
            severity=Severity.MILD,
            days_affected=len(scores),
        )

    return None


__all__ = ["classify_pattern"]
