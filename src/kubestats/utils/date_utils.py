import re
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

# cAdvisor serializes Go time.Time values with up to nanosecond precision.
_FRACTION_RE = re.compile(r"\.(\d{6})\d+")

_DURATION_RE = re.compile(r"^(\d+)([smh])$")
_DURATION_UNITS = {"s": "seconds", "m": "minutes", "h": "hours"}


def parse_iso_date(date_str: str) -> Optional[datetime]:
    """
    Parses an RFC 3339 / ISO 8601 date string into a datetime object.
    Handles the 'Z' suffix by replacing it with '+00:00' and truncates
    sub-microsecond fractions, which datetime.fromisoformat() rejects.

    Args:
        date_str: The ISO date string to parse.

    Returns:
        A datetime object or None if parsing fails.
    """
    if not date_str:
        return None

    try:
        if date_str.endswith("Z"):
            date_str = date_str[:-1] + "+00:00"
        date_str = _FRACTION_RE.sub(r".\1", date_str, count=1)

        return datetime.fromisoformat(date_str)
    except ValueError:
        return None


def ensure_utc(dt: Union[datetime, str]) -> datetime:
    """
    Ensures a datetime object is timezone-aware and in UTC.
    If input is a string, it parses it first.
    If input is naive, it assumes UTC.
    """
    if isinstance(dt, str):
        parsed = parse_iso_date(dt)
        if not parsed:
            raise ValueError(f"Invalid date string: {dt}")
        dt = parsed

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    return dt


def to_iso_z(dt: datetime) -> str:
    """
    Converts a datetime to an ISO 8601 string with 'Z' suffix for UTC.
    """
    return ensure_utc(dt).isoformat().replace("+00:00", "Z")


def parse_duration(value: str) -> timedelta:
    """Parses a Prometheus-style duration such as '30s', '5m' or '1h'."""
    match = _DURATION_RE.match((value or "").strip().lower())
    if not match:
        raise ValueError(f"Invalid duration format: '{value}'. Use 's', 'm', or 'h'.")
    amount, unit = int(match.group(1)), match.group(2)
    return timedelta(**{_DURATION_UNITS[unit]: amount})
