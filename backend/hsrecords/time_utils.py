from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def combine_local_date_time(date_value: str, time_value: str) -> datetime:
    """
    Build a naive local timestamp from a date string and a time-of-day.

    Only the first 10 characters of ``date_value`` are used, so a full
    ISO datetime ("2025-03-14T00:00:00.000Z") contributes just its date.
    ``time_value`` is "HH:MM" or "HH:MM:SS".

    Raises ValueError if the pair does not form a valid timestamp.
    """
    date_part = str(date_value).strip()[:10]
    time_part = str(time_value).strip()
    if len(date_part) != 10 or not time_part:
        raise ValueError(f"Invalid date/time: {date_value!r} {time_value!r}")

    dt = datetime.fromisoformat(f"{date_part}T{time_part}")
    if dt.tzinfo is not None:
        raise ValueError("Time of day must not carry a timezone offset")
    return dt


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Serializes datetime to ISO-8601 with trailing 'Z'.
    If dt is naive, it is treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt_utc = dt.astimezone(timezone.utc).replace(microsecond=0)
    return dt_utc.isoformat().replace("+00:00", "Z")


def to_local_iso(dt: Optional[datetime]) -> Optional[str]:
    """Serializes a naive local timestamp without any zone designator."""
    if dt is None:
        return None
    return dt.replace(microsecond=0).isoformat()
