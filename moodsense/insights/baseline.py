"""
Baseline comparator.

difference = recent mean - all-time mean. Above +0.5 is "better", below
-0.5 is "worse", anything in between (0.5 itself included) is "same".
Classification uses the unrounded difference; the reported values are
rounded to one decimal.
"""

from __future__ import annotations

from collections.abc import Sequence

from moodsense.insights.config import InsightsConfig
from moodsense.insights.models import BaselineComparison, BaselineResult
from moodsense.insights.stats import average, round_half_up


def classify_difference(difference: float, threshold: float = 0.5) -> BaselineComparison:
    if difference > threshold:
        return BaselineComparison.BETTER
    if difference < -threshold:
        return BaselineComparison.WORSE
    return BaselineComparison.SAME


def compare_to_baseline(
    all_scores: Sequence[int],
    recent_scores: Sequence[int],
    config: InsightsConfig | None = None,
) -> BaselineResult:
    cfg = (config or InsightsConfig()).baseline

    if not all_scores:
        return BaselineResult(0.0, 0.0, BaselineComparison.SAME, 0.0)

    overall = average(all_scores)
    recent = average(recent_scores)
    difference = recent - overall

    return BaselineResult(
        average_mood=round_half_up(overall, 1),
        recent_average_mood=round_half_up(recent, 1),
        compared_to_baseline=classify_difference(difference, cfg.threshold),
        baseline_difference=round_half_up(difference, 1),
    )


__all__ = ["classify_difference", "compare_to_baseline"]
