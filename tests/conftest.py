"""Shared test fixtures for MoodSense tests.

This module provides common fixtures used across all test modules:
- Database isolation with temporary files
- Standard test user data
- A factory for newest-first check-in histories

Usage:
    def test_something(make_entries):
        entries = make_entries([3, 4, 2])
        ...
"""

import os
import tempfile
from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from moodsense.insights.models import CheckInEntry


# ─────────────────────────────────────────────────────────────────────────────
# Path Constants
# ─────────────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).parent.parent
PACKAGE_DIR = PROJECT_ROOT / "moodsense"

# Fixed evaluation time: Saturday 2026-03-14 12:00 UTC
NOW = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)


# ─────────────────────────────────────────────────────────────────────────────
# Database Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def temp_db() -> Generator[Path, None, None]:
    """Create a temporary database file for testing.

    The database file is automatically deleted after the test completes.

    Yields:
        Path to the temporary database file
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    yield db_path

    # Cleanup
    if db_path.exists():
        os.unlink(db_path)


@pytest.fixture
def store(temp_db):
    """Check-in store module patched to use the temporary database."""
    with patch("moodsense.insights.checkin_store.DB_PATH", temp_db):
        from moodsense.insights import checkin_store

        # Force table creation
        conn = checkin_store.get_connection()
        conn.close()

        yield checkin_store


# ─────────────────────────────────────────────────────────────────────────────
# User Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def mock_user_id() -> str:
    """Standard test user ID."""
    return "test_user_123"


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation time."""
    return NOW


# ─────────────────────────────────────────────────────────────────────────────
# Check-in Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def make_entries(mock_user_id: str) -> Callable[..., list[CheckInEntry]]:
    """Factory for a newest-first history.

    Entry i is created ``step * i`` before ``start``. ``notes`` may be shorter
    than ``scores``; missing notes are None.
    """

    def _make(
        scores: list[int],
        notes: list[str | None] | None = None,
        start: datetime = NOW,
        step: timedelta = timedelta(days=1),
    ) -> list[CheckInEntry]:
        notes = notes or []
        return [
            CheckInEntry(
                id=f"entry_{i}",
                user_id=mock_user_id,
                score=score,
                note=notes[i] if i < len(notes) else None,
                created_at=start - step * i,
            )
            for i, score in enumerate(scores)
        ]

    return _make


@pytest.fixture
def make_entry(mock_user_id: str) -> Callable[..., CheckInEntry]:
    """Factory for a single entry at an explicit time."""

    def _make(score: int, created_at: datetime, note: str | None = None, entry_id: str = "e") -> CheckInEntry:
        return CheckInEntry(
            id=entry_id, user_id=mock_user_id, score=score, note=note, created_at=created_at
        )

    return _make
