"""Tests for moodsense/insights/burnout.py"""

from datetime import timedelta

from moodsense.insights.burnout import aggregate_burnout, load_burnout_snapshot


class TestAggregateBurnout:
    def test_no_logs(self):
        snapshot = aggregate_burnout([])

        assert snapshot.completeness == 0
        assert snapshot.battery_level is None
        assert all(v is None for v in snapshot.values.values())

    def test_most_recent_non_null_wins(self):
        logs = [
            {"sleep_quality": None, "overwhelm": 4},
            {"sleep_quality": 2, "overwhelm": 1, "battery_level": 55},
        ]
        snapshot = aggregate_burnout(logs)

        assert snapshot.values["sleep_quality"] == 2
        assert snapshot.values["overwhelm"] == 4
        assert snapshot.battery_level == 55

    def test_completeness_is_share_of_nine_fields(self):
        snapshot = aggregate_burnout([{"sleep_quality": 3, "motivation": 2, "focus_difficulty": 4}])
        assert snapshot.completeness == 33

    def test_battery_does_not_count_toward_completeness(self):
        assert aggregate_burnout([{"battery_level": 80}]).completeness == 0

    def test_to_dict_flat(self):
        data = aggregate_burnout([{"irritability": 5}]).to_dict()

        assert data["irritability"] == 5
        assert data["completeness"] == 11
        assert "battery_level" in data


class TestLoadBurnoutSnapshot:
    def test_uses_lookback_window(self, mock_user_id, now):
        seen = {}

        def fetch(user_id, since):
            seen["since"] = since
            return [{"motivation": 3}]

        snapshot = load_burnout_snapshot(mock_user_id, fetch, now=now)

        assert seen["since"] == now - timedelta(hours=24)
        assert snapshot.values["motivation"] == 3

    def test_fetch_failure_is_empty_snapshot(self, mock_user_id, now):
        def broken(user_id, since):
            raise RuntimeError("timeout")

        assert load_burnout_snapshot(mock_user_id, broken, now=now).completeness == 0
