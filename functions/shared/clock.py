"""
UTC time helpers. Timestamps are ISO 8601 strings with millisecond precision
and a trailing "Z", so they sort lexically.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def utc_now_iso() -> str:
    return to_iso(utc_now())


def today_iso() -> str:
    return utc_now().date().isoformat()


def parse_date(value: str) -> date:
    """Parses a YYYY-MM-DD string. Raises ValueError on anything else."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def previous_day_iso(value: str) -> str:
    return (parse_date(value) - timedelta(days=1)).isoformat()


def parse_iso(value: str) -> datetime:
    """Parses an ISO timestamp. Naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
