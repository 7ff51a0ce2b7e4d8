"""Tests for moodsense/insights/__init__.py"""

import moodsense.insights as insights
from moodsense.insights.models import TimeOfDay
from moodsense.insights.time_affinity import time_of_day


class TestPackageConstants:
    def test_exports_paths_and_score_range_only(self):
        assert set(insights.__all__) == {
            "ARGS_DIR",
            "CONFIG_PATH",
            "DATA_DIR",
            "DB_PATH",
            "MAX_SCORE",
            "MIN_SCORE",
            "PROJECT_ROOT",
            "WEEKDAY_NAMES",
        }

    def test_time_buckets_come_from_enum(self):
        assert {time_of_day(hour) for hour in range(24)} == set(TimeOfDay)

    def test_weekdays_start_on_sunday(self):
        assert insights.WEEKDAY_NAMES[0] == "Sunday"
        assert len(insights.WEEKDAY_NAMES) == 7
