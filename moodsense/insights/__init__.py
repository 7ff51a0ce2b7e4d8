"""Insights - Behavioral pattern and context engine for mood check-ins

Philosophy:
    Remember the person, not just the moment.
    A coach who asks "how have you been?" has already failed.
    Observe the history, summarise it, hand it over - never store it.

Core Principle:
    Every analysis is recomputed from the raw check-in rows. Nothing
    derived here is persisted; the same rows always produce the same
    context bundle.

Components:
    ingestion.py: Fetch history and expose the "all" / "recent" windows
        - Storage failures degrade to an empty history (cold start)
        - Unknown timezones fall back to the machine's local calendar

    pattern_classifier.py: Single highest-priority trend for the recent window
        - Low streaks always win over milder labels
        - Declining / improving use strict 3-point monotonic checks

    streaks.py: Check-in and mood streaks
        - Calendar-day keys in the user's timezone
        - At most one streak reported

    time_affinity.py: Best/worst time of day and day of week
    theme_extractor.py: Recurring note themes and trigger/coping keywords
    baseline.py: Recent vs all-time mean
    burnout.py: Partial burnout self-report aggregation
    context_builder.py: Assemble everything into one ContextBundle
    narrative.py: Deterministic grounding text for the coaching model

Safety Rules:
    1. Never raise to the user - worst case is "no pattern detected"
    2. Never log note contents
    3. Null means "not enough data", never "no preference"

Database: data/checkins.db
    - mood_entries: Raw check-ins
    - burnout_logs: Partial burnout self-reports

Configuration: args/insights.yaml
    - History and recent window sizes
    - Pattern, affinity and theme thresholds
"""

from pathlib import Path

# Path constants
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
ARGS_DIR = PROJECT_ROOT / "args"
DB_PATH = DATA_DIR / "checkins.db"
CONFIG_PATH = ARGS_DIR / "insights.yaml"

# Score range accepted by the storage layer
MIN_SCORE = 1
MAX_SCORE = 10

# Weekday buckets, Sunday first
WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

__all__ = [
    "ARGS_DIR",
    "CONFIG_PATH",
    "DATA_DIR",
    "DB_PATH",
    "MAX_SCORE",
    "MIN_SCORE",
    "PROJECT_ROOT",
    "WEEKDAY_NAMES",
]
