"""
Tool: Context Builder
Purpose: Assemble a user's check-in history into one immutable ContextBundle

Pipeline:
    ingest → {pattern, streak, time affinity, themes, baseline} → ContextBundle

Each analyzer reads the same windowed entries and returns its own result;
only this module knows the full bundle schema. A user with no history (or
whose history could not be fetched) gets the cold-start bundle without any
analyzer running.

Usage:
    # Build the context bundle for a user
    python -m moodsense.insights.context_builder --action context --user alice --timezone Europe/London

    # Build the coaching prompt for a new check-in
    python -m moodsense.insights.context_builder --action prompt --user alice --score 4 --note "rough day"

    # Record the check-in, then build the prompt
    python -m moodsense.insights.context_builder --action record --user alice --score 4 --note "rough day"

    # Fallback advice (no model call)
    python -m moodsense.insights.context_builder --action advice --user alice --score 3

Dependencies:
    - pyyaml, pydantic (configuration)
    - structlog (logging)

Output:
    JSON result with success status and data
"""

from __future__ import annotations

import argparse
import json
import math
import sys
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from moodsense.insights import MAX_SCORE, MIN_SCORE, checkin_store
from moodsense.insights.baseline import compare_to_baseline
from moodsense.insights.burnout import BurnoutFetcher, load_burnout_snapshot
from moodsense.insights.config import InsightsConfig, load_config
from moodsense.insights.ingestion import EntryFetcher, EntryWindow, ingest
from moodsense.insights.models import ContextBundle, NewCheckIn
from moodsense.insights.narrative import fallback_advice, generate_contextual_prompt
from moodsense.insights.pattern_classifier import classify_pattern
from moodsense.insights.streaks import current_streak
from moodsense.insights.theme_extractor import extract_recurring_themes, triggers_and_coping
from moodsense.insights.time_affinity import analyze_time_affinity
from moodsense.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def cold_start_bundle() -> ContextBundle:
    """Bundle for a user with no history: every derived field at its default."""
    return ContextBundle()


def days_since(last: datetime, now: datetime) -> int:
    return math.floor((now - last).total_seconds() / SECONDS_PER_DAY)


def build_context(
    window: EntryWindow,
    now: datetime | None = None,
    config: InsightsConfig | None = None,
) -> ContextBundle:
    """Run every analyzer over an already-fetched window and merge the results."""
    if window.is_empty:
        return cold_start_bundle()

    config = config or InsightsConfig()
    now = now or datetime.now(timezone.utc)
    entries = window.entries
    last = entries[0]

    baseline = compare_to_baseline(window.scores, window.recent_scores, config)
    triggers, coping = triggers_and_coping(entries, config)

    return ContextBundle(
        total_check_ins=len(entries),
        average_mood=baseline.average_mood,
        recent_average_mood=baseline.recent_average_mood,
        last_check_in=last,
        days_since_last_check_in=days_since(last.created_at, now),
        recent_entries=window.recent,
        current_pattern=classify_pattern(window.recent_scores, config),
        time_affinity=analyze_time_affinity(entries, window.time_zone, config),
        recurring_themes=tuple(extract_recurring_themes(entries, config)),
        compared_to_baseline=baseline.compared_to_baseline,
        baseline_difference=baseline.baseline_difference,
        current_streak=current_streak(entries, window.time_zone, config),
        preferred_coping_strategies=tuple(coping),
        triggers_identified=tuple(triggers),
    )


def build_user_context(
    user_id: str,
    time_zone: str | None = None,
    fetch_entries: EntryFetcher | None = None,
    fetch_burnout_logs: BurnoutFetcher | None = None,
    now: datetime | None = None,
    config: InsightsConfig | None = None,
) -> ContextBundle:
    """
    Build the full context bundle for a user.

    Args:
        user_id: User identifier
        time_zone: IANA zone name; missing or unknown means machine local time
        fetch_entries: Storage collaborator (defaults to the SQLite store)
        fetch_burnout_logs: Optional burnout log source; no snapshot when omitted
        now: Evaluation time (defaults to now, UTC)
        config: Thresholds (defaults to InsightsConfig())

    Returns:
        A fresh ContextBundle. Never raises for missing data.
    """
    config = config or InsightsConfig()
    now = now or datetime.now(timezone.utc)

    window = ingest(user_id, time_zone, fetch_entries, config)
    bundle = build_context(window, now, config)

    if not bundle.is_cold_start and fetch_burnout_logs is not None:
        snapshot = load_burnout_snapshot(user_id, fetch_burnout_logs, now, config)
        bundle = replace(bundle, burnout_snapshot=snapshot)

    logger.debug(
        "context_built",
        user_id=user_id,
        total_check_ins=bundle.total_check_ins,
        pattern=bundle.current_pattern.type.value if bundle.current_pattern else None,
        streak=bundle.current_streak.type.value if bundle.current_streak else None,
        local_time_fallback=window.uses_local_time,
    )
    return bundle


def main():
    parser = argparse.ArgumentParser(
        description="Context Builder - Summarise check-in history for coaching",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--action", required=True, choices=["context", "prompt", "record", "advice"], help="Action to perform"
    )
    parser.add_argument("--user", required=True, help="User ID")
    parser.add_argument("--timezone", help="IANA timezone (e.g. Europe/London)")
    parser.add_argument("--score", type=int, help="Mood score of the new check-in (1-10)")
    parser.add_argument("--note", help="Note of the new check-in")

    args = parser.parse_args()
    setup_logging()
    config = load_config()
    result: dict[str, Any] | None = None

    if args.action != "context" and (args.score is None or not MIN_SCORE <= args.score <= MAX_SCORE):
        print(json.dumps({"success": False, "error": f"--score {MIN_SCORE}-{MAX_SCORE} required"}))
        sys.exit(1)

    bundle = build_user_context(
        args.user,
        time_zone=args.timezone,
        fetch_burnout_logs=checkin_store.fetch_burnout_logs,
        config=config,
    )

    if args.action == "context":
        result = {"success": True, "context": bundle.to_dict()}

    elif args.action in ("prompt", "record"):
        # Context reflects history before this check-in is stored
        prompt = generate_contextual_prompt(bundle, NewCheckIn(args.score, args.note), config=config)
        result = {"success": True, "prompt": prompt.to_dict()}
        if args.action == "record":
            result["recorded"] = checkin_store.record_check_in(args.user, args.score, args.note)["entry"]

    elif args.action == "advice":
        result = {"success": True, "advice": fallback_advice(bundle, args.score)}

    if result:
        print(json.dumps(result, indent=2, default=str))
        if not result.get("success"):
            sys.exit(1)


if __name__ == "__main__":
    main()
