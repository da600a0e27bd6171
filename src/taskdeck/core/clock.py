# src/taskdeck/core/clock.py

"""
Time helpers shared by storage, repository, forms and the list view.

Timestamps are stored as ISO-8601 UTC strings with millisecond precision
and a "Z" suffix (2026-10-19T08:30:00.000Z), so they sort as plain text too.
Due dates are calendar dates (YYYY-MM-DD).
"""

from __future__ import annotations

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_instant(raw: str | None) -> datetime | None:
    """
    Parse a stored date or timestamp into an aware UTC datetime.

    Date-only values mean midnight UTC, naive timestamps are taken as UTC.
    Returns None for missing or unparseable values.
    """
    if not raw:
        return None
    try:
        moment = datetime.fromisoformat(raw.strip())
        if moment.tzinfo is None:
            return moment.replace(tzinfo=UTC)
        # Offsets at the ends of the calendar (0001-01-01+05:00) overflow here.
        return moment.astimezone(UTC)
    except (ValueError, OverflowError):
        return None


def parse_due_date(raw: str | None) -> date | None:
    moment = parse_instant(raw)
    return moment.date() if moment is not None else None
