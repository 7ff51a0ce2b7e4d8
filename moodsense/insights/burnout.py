"""
Burnout snapshot.

Burnout self-reports arrive in fragments: a sleep rating here, an overwhelm
rating there. This folds the last day's fragments into one snapshot by
taking the most recent non-null value for each field.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timedelta, timezone
from typing import Any

from moodsense.insights.config import InsightsConfig
from moodsense.insights.models import BURNOUT_FIELDS, BurnoutSnapshot
from moodsense.logging_config import get_logger

logger = get_logger(__name__)

BurnoutFetcher = Callable[[str, datetime], Sequence[dict[str, Any]]]


def aggregate_burnout(logs: Sequence[dict[str, Any]]) -> BurnoutSnapshot:
    """Fold logs (newest first) into a snapshot."""
    values: dict[str, int | None] = {}
    for name in BURNOUT_FIELDS:
        values[name] = next((log[name] for log in logs if log.get(name) is not None), None)

    battery = next((log["battery_level"] for log in logs if log.get("battery_level") is not None), None)
    filled = sum(1 for v in values.values() if v is not None)

    return BurnoutSnapshot(
        values=values,
        battery_level=battery,
        completeness=round(filled / len(BURNOUT_FIELDS) * 100),
    )


def load_burnout_snapshot(
    user_id: str,
    fetch_logs: BurnoutFetcher,
    now: datetime | None = None,
    config: InsightsConfig | None = None,
) -> BurnoutSnapshot:
    cfg = (config or InsightsConfig()).burnout
    now = now or datetime.now(timezone.utc)
    since = now - timedelta(hours=cfg.lookback_hours)

    try:
        logs = list(fetch_logs(user_id, since))
    except Exception as e:
        logger.warning("burnout_fetch_failed", user_id=user_id, error=str(e))
        logs = []

    return aggregate_burnout(logs)


__all__ = ["BurnoutFetcher", "aggregate_burnout", "load_burnout_snapshot"]
