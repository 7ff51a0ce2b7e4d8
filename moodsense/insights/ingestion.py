"""
Entry ingestion and windowing.

Fetches a user's most recent check-ins through the storage collaborator and
exposes the two views every analyzer works from:

    all     - up to ``history_limit`` entries (default 30), newest first
    recent  - the first ``recent_window`` of those (default 7)

Storage failures are recovered here as an empty history, which routes the
request through the cold-start path instead of surfacing an error.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from moodsense.insights import checkin_store
from moodsense.insights.config import InsightsConfig
from moodsense.insights.models import CheckInEntry
from moodsense.insights.timezones import resolve_timezone
from moodsense.logging_config import get_logger

logger = get_logger(__name__)

EntryFetcher = Callable[[str, int], Sequence[CheckInEntry]]


@dataclass(frozen=True)
class EntryWindow:
    entries: tuple[CheckInEntry, ...]
    recent: tuple[CheckInEntry, ...]
    time_zone: ZoneInfo | None = None

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def uses_local_time(self) -> bool:
        return self.time_zone is None

    @property
    def scores(self) -> list[int]:
        return [e.score for e in self.entries]

    @property
    def recent_scores(self) -> list[int]:
        return [e.score for e in self.recent]


def window_entries(
    entries: Sequence[CheckInEntry],
    time_zone: str | None = None,
    config: InsightsConfig | None = None,
) -> EntryWindow:
    """Build the all/recent views over entries already ordered newest-first."""
    config = config or InsightsConfig()
    kept = tuple(entries[: config.history_limit])
    return EntryWindow(
        entries=kept,
        recent=kept[: config.recent_window],
        time_zone=resolve_timezone(time_zone),
    )


def fetch_history(
    user_id: str,
    limit: int,
    fetch_entries: EntryFetcher | None = None,
) -> list[CheckInEntry]:
    """Fetch history, treating any storage failure as "no entries yet"."""
    fetch = fetch_entries or checkin_store.fetch_entries
    try:
        return list(fetch(user_id, limit))
    except Exception as e:
        logger.warning("history_fetch_failed", user_id=user_id, error=str(e))
        return []


def ingest(
    user_id: str,
    time_zone: str | None = None,
    fetch_entries: EntryFetcher | None = None,
    config: InsightsConfig | None = None,
) -> EntryWindow:
    config = config or InsightsConfig()
    entries = fetch_history(user_id, config.history_limit, fetch_entries)
    return window_entries(entries, time_zone, config)


__all__ = ["EntryFetcher", "EntryWindow", "fetch_history", "ingest", "window_entries"]
