"""Insights data models.

Defines the check-in record and every derived type of the analysis pipeline:
    CheckInEntry[] → TrendPattern / Streak / TimeAffinity / RecurringTheme → ContextBundle → ContextualPrompt

All derived objects are frozen; a bundle is built once per request and never
mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class PatternType(str, Enum):
    """Recent trajectory classification, in priority order."""

    STREAK_LOW = "streak_low"
    STREAK_HIGH = "streak_high"
    DECLINING = "declining"
    IMPROVING = "improving"
    VOLATILE = "volatile"
    STABLE = "stable"


class Severity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SIGNIFICANT = "significant"


class StreakType(str, Enum):
    CHECKING_IN = "checking_in"
    LOW_MOOD = "low_mood"
    HIGH_MOOD = "high_mood"


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class BaselineComparison(str, Enum):
    BETTER = "better"
    WORSE = "worse"
    SAME = "same"


class Approach(str, Enum):
    """Coaching stance handed to the generative collaborator."""

    STANDARD = "standard"
    ONBOARDING = "onboarding"
    GENTLE_SUPPORT = "gentle_support"
    CELEBRATE_MAINTAIN = "celebrate_maintain"
    BUILD_ON_CONSISTENCY = "build_on_consistency"
    PROACTIVE_CHECK = "proactive_check"


def parse_timestamp(value: datetime | str) -> datetime:
    """Parse a stored timestamp. Naive values are treated as UTC."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class CheckInEntry:
    """One user-submitted check-in, as returned by the storage layer."""

    id: str
    user_id: str
    score: int
    created_at: datetime
    note: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> CheckInEntry:
        """Build an entry from a storage row (``mood_score``/``score`` accepted)."""
        score = row["mood_score"] if "mood_score" in row else row["score"]
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            score=int(score),
            created_at=parse_timestamp(row["created_at"]),
            note=row.get("note"),
        )

    @property
    def has_note(self) -> bool:
        return bool(self.note and self.note.strip())

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "score": self.score,
            "note": self.note,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class NewCheckIn:
    """The check-in currently being submitted. Only used for narrative framing."""

    score: int
    note: str | None = None


@dataclass(frozen=True)
class TrendPattern:
    type: PatternType
    description: str
    severity: Severity
    days_affected: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "description": self.description,
            "severity": self.severity.value,
            "daysAffected": self.days_affected,
        }


@dataclass(frozen=True)
class TimeAffinity:
    """Best/worst buckets. None means too few samples, never "no preference"."""

    best_time_of_day: TimeOfDay | None = None
    worst_time_of_day: TimeOfDay | None = None
    best_day_of_week: str | None = None
    worst_day_of_week: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "bestTimeOfDay": self.best_time_of_day.value if self.best_time_of_day else None,
            "worstTimeOfDay": self.worst_time_of_day.value if self.worst_time_of_day else None,
            "bestDayOfWeek": self.best_day_of_week,
            "worstDayOfWeek": self.worst_day_of_week,
        }


@dataclass(frozen=True)
class RecurringTheme:
    theme: str
    frequency: int
    sentiment: Sentiment
    last_mentioned: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "theme": self.theme,
            "frequency": self.frequency,
            "sentiment": self.sentiment.value,
            "lastMentioned": self.last_mentioned.isoformat(),
        }


@dataclass(frozen=True)
class Streak:
    type: StreakType
    days: int

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "days": self.days}


@dataclass(frozen=True)
class BaselineResult:
    average_mood: float
    recent_average_mood: float
    compared_to_baseline: BaselineComparison
    baseline_difference: float


BURNOUT_FIELDS = (
    "sleep_quality",
    "energy_level",
    "physical_tension",
    "irritability",
    "overwhelm",
    "motivation",
    "focus_difficulty",
    "forgetfulness",
    "decision_fatigue",
)


@dataclass(frozen=True)
class BurnoutSnapshot:
    """Most recent non-null value per burnout field over the lookback window."""

    values: dict[str, int | None] = field(
        default_factory=lambda: {name: None for name in BURNOUT_FIELDS}
    )
    battery_level: int | None = None
    completeness: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            **{name: self.values.get(name) for name in BURNOUT_FIELDS},
            "battery_level": self.battery_level,
            "completeness": self.completeness,
        }


@dataclass(frozen=True)
class ContextBundle:
    """Complete structured output of one analysis."""

    total_check_ins: int = 0
    average_mood: float = 0.0
    recent_average_mood: float = 0.0
    last_check_in: CheckInEntry | None = None
    days_since_last_check_in: int = -1
    recent_entries: tuple[CheckInEntry, ...] = ()
    current_pattern: TrendPattern | None = None
    time_affinity: TimeAffinity = field(default_factory=TimeAffinity)
    recurring_themes: tuple[RecurringTheme, ...] = ()
    compared_to_baseline: BaselineComparison = BaselineComparison.SAME
    baseline_difference: float = 0.0
    current_streak: Streak | None = None
    preferred_coping_strategies: tuple[str, ...] = ()
    triggers_identified: tuple[str, ...] = ()
    burnout_snapshot: BurnoutSnapshot | None = None

    @property
    def is_cold_start(self) -> bool:
        return self.total_check_ins == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalCheckIns": self.total_check_ins,
            "averageMood": self.average_mood,
            "recentAverageMood": self.recent_average_mood,
            "lastCheckIn": self.last_check_in.to_dict() if self.last_check_in else None,
            "daysSinceLastCheckIn": self.days_since_last_check_in,
            "recentEntries": [e.to_dict() for e in self.recent_entries],
            "currentPattern": self.current_pattern.to_dict() if self.current_pattern else None,
            "timeAffinity": self.time_affinity.to_dict(),
            "recurringThemes": [t.to_dict() for t in self.recurring_themes],
            "comparedToBaseline": self.compared_to_baseline.value,
            "baselineDifference": self.baseline_difference,
            "currentStreak": self.current_streak.to_dict() if self.current_streak else None,
            "preferredCopingStrategies": list(self.preferred_coping_strategies),
            "triggersIdentified": list(self.triggers_identified),
            "burnoutSnapshot": self.burnout_snapshot.to_dict() if self.burnout_snapshot else None,
        }


@dataclass(frozen=True)
class ContextualPrompt:
    """Grounding text for the coaching model. Never shown to the user as-is."""

    system_context: str
    historical_insights: str
    current_situation: str
    suggested_approach: Approach
    approach_instructions: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "systemContext": self.system_context,
            "historicalInsights": self.historical_insights,
            "currentSituation": self.current_situation,
            "suggestedApproach": self.suggested_approach.value,
            "approachInstructions": self.approach_instructions,
        }
