"""
Contextual narrative generator.

Renders a ContextBundle into the grounding text handed to the coaching
model. Everything here is a fixed rule-to-sentence mapping; no text is
generated. The output is context for the model, never a reply shown to the
user.

Three blocks are produced:
    system_context      - what we know about this user
    current_situation   - the check-in being submitted, against the last one
    suggested_approach  - a coaching stance tag plus its instruction text
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone

from moodsense.insights.config import InsightsConfig
from moodsense.insights.models import (
    Approach,
    BaselineComparison,
    ContextBundle,
    ContextualPrompt,
    NewCheckIn,
    PatternType,
    Sentiment,
    Severity,
    StreakType,
    TrendPattern,
    parse_timestamp,
)

APPROACH_INSTRUCTIONS: dict[Approach, str] = {
    Approach.STANDARD: "Provide personalized support based on their specific situation.",
    Approach.ONBOARDING: (
        "Welcome them warmly! Explain you'll learn their patterns over time. Focus on this moment."
    ),
    Approach.GENTLE_SUPPORT: (
        "This person has been struggling. Be extra gentle. Suggest SMALLER steps than usual. "
        "Acknowledge the difficulty of consecutive hard days."
    ),
    Approach.CELEBRATE_MAINTAIN: (
        "They're doing well! Help them identify and maintain what's working. "
        "Don't fix what isn't broken."
    ),
    Approach.BUILD_ON_CONSISTENCY: (
        "They keep showing up. Acknowledge the habit briefly and connect today's mood to their recent history."
    ),
    Approach.PROACTIVE_CHECK: (
        "Mood is trending down. Gently acknowledge the pattern without being alarmist. "
        "Offer concrete, tiny support."
    ),
}

PERSONA = (
    "You are a warm, experienced ADHD coach who KNOWS this person's history. "
    "You remember their patterns, struggles, and wins. "
    'Never ask generic questions like "How have you been?" - you already know.'
)

LOW_MOOD_ALERT = 3
HIGH_MOOD_NOTE = 8


def format_time_ago(value: datetime | str, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    hours = math.floor((now - parse_timestamp(value)).total_seconds() / 3600)
    days = hours // 24

    if hours < 1:
        return "just now"
    if hours < 24:
        return f"{hours}h ago"
    if days == 1:
        return "yesterday"
    if days < 7:
        return f"{days} days ago"
    return f"{days // 7} week{'s' if days >= 14 else ''} ago"


def _snippet(text: str, limit: int) -> str:
    cleaned = re.sub(r"\s+", " ", text).strip()
    return cleaned[:limit] + ("..." if len(cleaned) > limit else "")


def _pattern_insight(pattern: TrendPattern) -> str:
    strong = pattern.severity == Severity.SIGNIFICANT

    if pattern.type == PatternType.STREAK_LOW:
        if strong:
            return (
                f"Pattern detected: {pattern.description}. This is a sustained hard stretch; "
                "approach with extra care and keep every suggestion tiny."
            )
        return f"Pattern detected: {pattern.description}. Approach with extra care."
    if pattern.type == PatternType.STREAK_HIGH:
        return f"Positive run: {pattern.description}. Help them notice what is driving it."
    if pattern.type == PatternType.DECLINING:
        if strong:
            return (
                f"Trend alert: {pattern.description} and is now very low. "
                "Proactive, gentle support is needed."
            )
        return f"Trend alert: {pattern.description}. May need proactive support."
    if pattern.type == PatternType.IMPROVING:
        return f"Positive trend: {pattern.description}. Reinforce what's working."
    if pattern.type == PatternType.VOLATILE:
        if strong:
            return (
                f"Volatility noted: {pattern.description}, with large swings. "
                "Prioritise grounding and routine over big changes."
            )
        return f"Volatility noted: {pattern.description}. Focus on stability strategies."
    return f"Steady state: {pattern.description}."


def historical_insights(
    bundle: ContextBundle,
    now: datetime | None = None,
    config: InsightsConfig | None = None,
) -> list[str]:
    """Ordered insight sentences for every populated field of the bundle."""
    cfg = (config or InsightsConfig()).narrative

    if bundle.is_cold_start:
        return [
            "This is the user's first check-in. Welcome them warmly and explain what you can help with."
        ]

    insights: list[str] = []
    streak = bundle.current_streak

    if streak is not None:
        if streak.type == StreakType.LOW_MOOD:
            insights.append(f"IMPORTANT: User has marked low mood (≤4) for {streak.days} consecutive days.")
        elif streak.type == StreakType.HIGH_MOOD:
            insights.append(f"User has been feeling good (≥7) for {streak.days} consecutive days.")
        else:
            insights.append(f"Great consistency: {streak.days}-day check-in streak!")

    if bundle.current_pattern is not None:
        insights.append(_pattern_insight(bundle.current_pattern))

    if bundle.compared_to_baseline != BaselineComparison.SAME:
        direction = "above" if bundle.compared_to_baseline == BaselineComparison.BETTER else "below"
        insights.append(
            f"Recent mood is {abs(bundle.baseline_difference)} points {direction} "
            f"their usual baseline of {bundle.average_mood}."
        )

    negative = [t.theme for t in bundle.recurring_themes if t.sentiment == Sentiment.NEGATIVE][:2]
    if negative:
        insights.append(f"Recurring challenges: {' and '.join(negative)}.")

    positive = [t.theme for t in bundle.recurring_themes if t.sentiment == Sentiment.POSITIVE][:2]
    if positive:
        insights.append(f"Recurring bright spots: {' and '.join(positive)}.")

    if bundle.triggers_identified:
        insights.append(f"Words that show up on hard days: {', '.join(bundle.triggers_identified)}.")
    if bundle.preferred_coping_strategies:
        insights.append(f"Words that show up on good days: {', '.join(bundle.preferred_coping_strategies)}.")

    affinity = bundle.time_affinity
    if affinity.worst_time_of_day is not None:
        insights.append(f"They tend to struggle more in the {affinity.worst_time_of_day.value}.")
    if affinity.best_time_of_day is not None and affinity.best_time_of_day != affinity.worst_time_of_day:
        insights.append(f"They usually feel best in the {affinity.best_time_of_day.value}.")
    if affinity.worst_day_of_week is not None and affinity.worst_day_of_week != affinity.best_day_of_week:
        insights.append(
            f"{affinity.worst_day_of_week}s tend to be harder than {affinity.best_day_of_week}s."
        )

    snapshot = bundle.burnout_snapshot
    if snapshot is not None and snapshot.completeness > 0:
        insights.append(f"Burnout check is {snapshot.completeness}% complete for the last day.")

    if bundle.days_since_last_check_in > cfg.days_away_threshold:
        insights.append(f"It's been {bundle.days_since_last_check_in} days since their last check-in.")

    last = bundle.last_check_in
    if last is not None and last.has_note:
        insights.append(
            f"Last check-in ({format_time_ago(last.created_at, now)}): "
            f'"{_snippet(last.note, cfg.note_snippet_length)}" (mood: {last.score}/10)'
        )

    return insights


def choose_approach(bundle: ContextBundle) -> Approach:
    if bundle.is_cold_start:
        return Approach.ONBOARDING

    approach = Approach.STANDARD
    streak = bundle.current_streak
    if streak is not None:
        approach = {
            StreakType.LOW_MOOD: Approach.GENTLE_SUPPORT,
            StreakType.HIGH_MOOD: Approach.CELEBRATE_MAINTAIN,
            StreakType.CHECKING_IN: Approach.BUILD_ON_CONSISTENCY,
        }[streak.type]

    if bundle.current_pattern is not None and bundle.current_pattern.type == PatternType.DECLINING:
        approach = Approach.PROACTIVE_CHECK

    return approach


def current_situation(bundle: ContextBundle, check_in: NewCheckIn | None) -> str:
    if check_in is None:
        return ""

    note = (check_in.note or "").strip() or "(no note provided)"
    lines = [
        "CURRENT CHECK-IN:",
        f"- Mood score: {check_in.score}/10",
        f'- What they shared: "{note}"',
    ]
    if bundle.last_check_in is not None:
        change = check_in.score - bundle.last_check_in.score
        lines.append(f"- Change from last time: {'+' if change > 0 else ''}{change} points")
    if check_in.score <= LOW_MOOD_ALERT:
        lines.append("- LOW MOOD ALERT: Be extra gentle and supportive")
    if check_in.score >= HIGH_MOOD_NOTE:
        lines.append("- HIGH MOOD: Celebrate and help them capture what's working")

    return "\n".join(lines)


def generate_contextual_prompt(
    bundle: ContextBundle,
    check_in: NewCheckIn | None = None,
    now: datetime | None = None,
    config: InsightsConfig | None = None,
) -> ContextualPrompt:
    insights = historical_insights(bundle, now, config)
    approach = choose_approach(bundle)

    knowledge = [
        f"- Total check-ins: {bundle.total_check_ins}",
        f"- Average mood: {bundle.average_mood}/10",
        f"- Recent average (7 days): {bundle.recent_average_mood}/10",
        *(f"- {insight}" for insight in insights),
    ]
    system_context = f"{PERSONA}\n\nYOUR KNOWLEDGE ABOUT THIS USER:\n" + "\n".join(knowledge)

    return ContextualPrompt(
        system_context=system_context,
        historical_insights=" ".join(insights),
        current_situation=current_situation(bundle, check_in),
        suggested_approach=approach,
        approach_instructions=APPROACH_INSTRUCTIONS[approach],
    )


def fallback_advice(bundle: ContextBundle, score: int) -> str:
    """Supportive one-liner for when no model call is made."""
    if bundle.is_cold_start:
        return (
            "Good on you for starting this, even a quick check-in counts. If you've got nothing to "
            "write today, just pick one tiny comfort action (water, food, fresh air) and call that a win."
        )

    if score <= 3:
        streak = bundle.current_streak
        streak_bit = ""
        if streak is not None and streak.type == StreakType.LOW_MOOD and streak.days >= 2:
            streak_bit = f"This looks like it's been a rough couple of days ({streak.days} in a row). "
        return (
            f"{streak_bit}Keep it frictionless today, do one body-level reset first (drink water, "
            "step outside for 60 seconds), then reassess. Checking in while you feel like this is "
            "effort, it still counts."
        )

    if score <= 5:
        baseline_bit = ""
        if bundle.compared_to_baseline == BaselineComparison.WORSE:
            baseline_bit = f"You're a bit below your usual baseline ({bundle.average_mood}/10). "
        return (
            f"{baseline_bit}If you don't have words right now, pick one small task you can finish "
            "in under 3 minutes and stop there. Momentum beats motivation on days like this."
        )

    if score <= 7:
        return (
            "You're in a steadier zone today, that's useful. Choose one \"annoying but important\" "
            "thing and do the first 2 minutes only, just to lower the mental barrier."
        )

    return (
        "You're running hot today, nice. Bank it by doing one quick thing Future You will thank "
        "you for (prep tomorrow's first step, clear one tiny admin task), then stop before you burn it all."
    )


__all__ = [
    "APPROACH_INSTRUCTIONS",
    "choose_approach",
    "current_situation",
    "fallback_advice",
    "format_time_ago",
    "generate_contextual_prompt",
    "historical_insights",
]
