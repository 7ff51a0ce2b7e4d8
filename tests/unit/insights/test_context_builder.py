"""Tests for moodsense/insights/context_builder.py

Key behaviors:
- No history (or unreachable storage) yields the cold-start bundle
- Every analyzer's result lands in one bundle
- Burnout snapshot only when a log source is supplied
"""

from datetime import timedelta

import pytest

from moodsense.insights.context_builder import (
    build_context,
    build_user_context,
    cold_start_bundle,
    days_since,
)
from moodsense.insights.ingestion import window_entries
from moodsense.insights.models import BaselineComparison, PatternType, StreakType


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def history(make_entries):
    """Ten daily check-ins; the newest three are low and mention work deadlines."""
    return make_entries(
        [3, 4, 2, 6, 7, 6, 5, 6, 7, 5],
        notes=["work deadline stress", "work again, deadline"],
    )


@pytest.fixture
def fetcher(history):
    def _fetch(user_id, limit):
        return history[:limit]

    return _fetch


# ─────────────────────────────────────────────────────────────────────────────
# Cold start
# ─────────────────────────────────────────────────────────────────────────────


class TestColdStart:
    def test_defaults(self):
        bundle = cold_start_bundle()

        assert bundle.is_cold_start
        assert bundle.total_check_ins == 0
        assert bundle.days_since_last_check_in == -1
        assert bundle.current_pattern is None
        assert bundle.current_streak is None
        assert bundle.recurring_themes == ()
        assert bundle.compared_to_baseline == BaselineComparison.SAME
        assert bundle.time_affinity.best_time_of_day is None

    def test_empty_history(self, mock_user_id, now):
        bundle = build_user_context(mock_user_id, fetch_entries=lambda u, n: [], now=now)
        assert bundle == cold_start_bundle()

    def test_storage_failure(self, mock_user_id, now):
        def broken(user_id, limit):
            raise ConnectionError("down")

        bundle = build_user_context(mock_user_id, fetch_entries=broken, now=now)
        assert bundle.is_cold_start

    def test_no_burnout_on_cold_start(self, mock_user_id, now):
        bundle = build_user_context(
            mock_user_id,
            fetch_entries=lambda u, n: [],
            fetch_burnout_logs=lambda u, since: [{"motivation": 2}],
            now=now,
        )
        assert bundle.burnout_snapshot is None


# ─────────────────────────────────────────────────────────────────────────────
# Full bundle
# ─────────────────────────────────────────────────────────────────────────────


class TestBuildContext:
    def test_merges_every_analyzer(self, history, now):
        bundle = build_context(window_entries(history, "UTC"), now)

        assert bundle.total_check_ins == 10
        assert bundle.average_mood == 5.1
        assert bundle.recent_average_mood == 4.7
        assert bundle.baseline_difference == -0.4
        assert bundle.compared_to_baseline == BaselineComparison.SAME
        assert bundle.days_since_last_check_in == 0
        assert bundle.last_check_in == history[0]
        assert len(bundle.recent_entries) == 7

    def test_pattern_and_streak(self, history, now):
        bundle = build_context(window_entries(history, "UTC"), now)

        assert bundle.current_pattern.type == PatternType.STREAK_LOW
        assert bundle.current_streak.type == StreakType.LOW_MOOD
        assert bundle.current_streak.days == 3

    def test_themes_and_keywords(self, history, now):
        bundle = build_context(window_entries(history, "UTC"), now)

        assert [t.theme for t in bundle.recurring_themes] == ["work stress"]
        assert bundle.triggers_identified == ("work", "deadline")
        assert bundle.preferred_coping_strategies == ()

    @pytest.mark.parametrize("zone", ["America", "A" * 5000])
    def test_unloadable_zone_still_builds_bundle(self, fetcher, mock_user_id, now, zone):
        bundle = build_user_context(mock_user_id, zone, fetch_entries=fetcher, now=now)

        assert not bundle.is_cold_start
        assert bundle.total_check_ins == 10

    def test_burnout_only_with_log_source(self, fetcher, mock_user_id, now):
        without = build_user_context(mock_user_id, "UTC", fetch_entries=fetcher, now=now)
        with_logs = build_user_context(
            mock_user_id,
            "UTC",
            fetch_entries=fetcher,
            fetch_burnout_logs=lambda u, since: [{"sleep_quality": 2}],
            now=now,
        )

        assert without.burnout_snapshot is None
        assert with_logs.burnout_snapshot.values["sleep_quality"] == 2

    def test_bundle_keys(self, fetcher, mock_user_id, now):
        data = build_user_context(mock_user_id, "UTC", fetch_entries=fetcher, now=now).to_dict()

        assert set(data) == {
            "totalCheckIns",
            "averageMood",
            "recentAverageMood",
            "lastCheckIn",
            "daysSinceLastCheckIn",
            "recentEntries",
            "currentPattern",
            "timeAffinity",
            "recurringThemes",
            "comparedToBaseline",
            "baselineDifference",
            "currentStreak",
            "preferredCopingStrategies",
            "triggersIdentified",
            "burnoutSnapshot",
        }
        assert data["currentPattern"]["type"] == "streak_low"


class TestDaysSince:
    @pytest.mark.parametrize(
        "elapsed,expected",
        [
            (timedelta(hours=5), 0),
            (timedelta(days=1, hours=23), 1),
            (timedelta(days=2), 2),
        ],
    )
    def test_floors_elapsed_days(self, now, elapsed, expected):
        assert days_since(now - elapsed, now) == expected
