"""
Tool: Check-in Store
Purpose: SQLite-backed storage collaborator for mood check-ins and burnout logs

The insights engine only ever reads from storage; this module is the
reference implementation of that boundary. It guarantees the invariants the
engine relies on: scores are integers in 1-10, every row has a timestamp,
and history is returned newest-first.

Usage:
    # Record a check-in
    python -m moodsense.insights.checkin_store --action record --user alice --score 6 --note "ok day"

    # List recent check-ins
    python -m moodsense.insights.checkin_store --action list --user alice --limit 10

    # Record a partial burnout log
    python -m moodsense.insights.checkin_store --action record-burnout --user alice \\
        --values '{"sleep_quality": 3, "battery_level": 40}'

Dependencies:
    - sqlite3 (stdlib)

Output:
    JSON result with success status and data
"""

import argparse
import json
import sqlite3
import sys
import uuid
from datetime import datetime, timezone
from typing import Any

from moodsense.insights import DB_PATH, MAX_SCORE, MIN_SCORE
from moodsense.insights.models import BURNOUT_FIELDS, CheckInEntry, parse_timestamp


def get_connection() -> sqlite3.Connection:
    """Get database connection, creating tables if needed."""
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(DB_PATH))
    conn.row_factory = sqlite3.Row

    cursor = conn.cursor()

    # Raw check-ins
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS mood_entries (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            mood_score INTEGER NOT NULL CHECK(mood_score BETWEEN 1 AND 10),
            note TEXT,
            created_at TEXT NOT NULL
        )
    """)

    # Partial burnout self-reports (any subset of fields per row)
    cursor.execute(f"""
        CREATE TABLE IF NOT EXISTS burnout_logs (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            {", ".join(f"{name} INTEGER" for name in BURNOUT_FIELDS)},
            battery_level INTEGER,
            created_at TEXT NOT NULL
        )
    """)

    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_mood_entries_user ON mood_entries(user_id, created_at)"
    )
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_burnout_logs_user ON burnout_logs(user_id, created_at)"
    )

    conn.commit()
    return conn


def _utc_iso(ts: datetime | None) -> str:
    value = parse_timestamp(ts or datetime.now(timezone.utc))
    # Fixed-width UTC text so ORDER BY created_at is chronological
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f+00:00")


def record_check_in(
    user_id: str,
    score: int,
    note: str | None = None,
    created_at: datetime | None = None,
) -> dict[str, Any]:
    """
    Store a check-in.

    Args:
        user_id: User identifier
        score: Mood score, integer 1-10
        note: Optional free text
        created_at: When it happened (defaults to now, UTC)

    Returns:
        dict with success status and the stored entry

    Raises:
        ValueError: if the score is outside 1-10
    """
    if isinstance(score, bool) or not isinstance(score, int) or not MIN_SCORE <= score <= MAX_SCORE:
        raise ValueError(f"score must be an integer {MIN_SCORE}-{MAX_SCORE}, got {score!r}")

    entry_id = str(uuid.uuid4())[:8]
    stamp = _utc_iso(created_at)

    conn = get_connection()
    cursor = conn.cursor()
    cursor.execute(
        """
        INSERT INTO mood_entries (id, user_id, mood_score, note, created_at)
        VALUES (?, ?, ?, ?, ?)
    """,
        (entry_id, user_id, score, note, stamp),
    )
    conn.commit()
    conn.close()

    entry = CheckInEntry(
        id=entry_id, user_id=user_id, score=score, note=note, created_at=parse_timestamp(stamp)
    )
    return {"success": True, "entry": entry.to_dict()}


def fetch_entries(user_id: str, limit: int = 30) -> list[CheckInEntry]:
    """Most recent check-ins for a user, newest first."""
    conn = get_connection()
    cursor = conn.cursor()
    cursor.execute(
        """
        SELECT * FROM mood_entries
        WHERE user_id = ?
        ORDER BY created_at DESC
        LIMIT ?
    """,
        (user_id, limit),
    )
    rows = cursor.fetchall()
    conn.close()

    return [CheckInEntry.from_row(dict(row)) for row in rows]


def record_burnout_log(
    user_id: str,
    values: dict[str, int | None],
    created_at: datetime | None = None,
) -> dict[str, Any]:
    """
    Store a partial burnout log. Unknown field names are ignored.

    Returns:
        dict with success status and the fields that were stored
    """
    columns = [name for name in (*BURNOUT_FIELDS, "battery_level") if values.get(name) is not None]
    log_id = str(uuid.uuid4())[:8]

    conn = get_connection()
    cursor = conn.cursor()
    cursor.execute(
        f"""
        INSERT INTO burnout_logs (id, user_id, created_at{"".join(f", {c}" for c in columns)})
        VALUES (?, ?, ?{", ?" * len(columns)})
    """,
        (log_id, user_id, _utc_iso(created_at), *[int(values[c]) for c in columns]),
    )
    conn.commit()
    conn.close()

    return {"success": True, "log_id": log_id, "fields": columns}


def fetch_burnout_logs(user_id: str, since: datetime) -> list[dict[str, Any]]:
    """Burnout logs newer than ``since``, newest first."""
    conn = get_connection()
    cursor = conn.cursor()
    cursor.execute(
        """
        SELECT * FROM burnout_logs
        WHERE user_id = ? AND created_at >= ?
        ORDER BY created_at DESC
    """,
        (user_id, _utc_iso(since)),
    )
    rows = [dict(row) for row in cursor.fetchall()]
    conn.close()
    return rows


def main():
    parser = argparse.ArgumentParser(description="Check-in Store - record and list check-ins")
    parser.add_argument(
        "--action", required=True, choices=["record", "list", "record-burnout"], help="Action to perform"
    )
    parser.add_argument("--user", required=True, help="User ID")
    parser.add_argument("--score", type=int, help="Mood score 1-10")
    parser.add_argument("--note", help="Optional note")
    parser.add_argument("--limit", type=int, default=30, help="How many check-ins to list")
    parser.add_argument("--values", help="JSON burnout values")

    args = parser.parse_args()
    result = None

    if args.action == "record":
        if args.score is None:
            print(json.dumps({"success": False, "error": "--score required"}))
            sys.exit(1)
        try:
            result = record_check_in(args.user, args.score, args.note)
        except ValueError as e:
            result = {"success": False, "error": str(e)}

    elif args.action == "list":
        entries = fetch_entries(args.user, args.limit)
        result = {"success": True, "entries": [e.to_dict() for e in entries]}

    elif args.action == "record-burnout":
        try:
            values = json.loads(args.values or "")
        except json.JSONDecodeError:
            print(json.dumps({"success": False, "error": "--values must be JSON"}))
            sys.exit(1)
        result = record_burnout_log(args.user, values)

    if result:
        print(json.dumps(result, indent=2, default=str))
        if not result.get("success"):
            sys.exit(1)


if __name__ == "__main__":
    main()
