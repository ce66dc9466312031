from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional

_CLOCK_RE = re.compile(r"([01]\d|2[0-3]):[0-5]\d")


def utcnow() -> datetime:
    """Current UTC time, naive; the form every stored timestamp uses."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    return utcnow().date()


def local_now() -> datetime:
    """Site wall-clock time (naive, machine timezone) for HH:MM fields and lateness."""
    return datetime.now()


def bump_timestamp(previous: Optional[datetime]) -> datetime:
    """
    Return a fresh timestamp strictly later than `previous`.

    Two writes inside the same clock tick would otherwise share an
    updated_at value.
    """
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def parse_iso_date(value) -> Optional[date]:
    """
    Parse a calendar day.

    - None / "" -> None
    - date -> unchanged
    - datetime -> its date part
    - "YYYY-MM-DD" (or a full ISO timestamp) -> date
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if not s:
        return None
    if len(s) > 10:
        return parse_iso_datetime(s).date()
    return date.fromisoformat(s)


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Read an ISO-8601 timestamp as a naive UTC datetime.

    Blank input gives None. Offsets (including a trailing Z) are converted to
    UTC; a timestamp without one is taken to be UTC already.
    """
    text = (value or "").strip()
    if not text:
        return None
    parsed = datetime.fromisoformat(text[:-1] + "+00:00" if text.endswith("Z") else text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_clock(dt: datetime) -> str:
    """HH:MM wall-clock string, as stored on purchases and attendance."""
    return dt.strftime("%H:%M")


def is_clock(value: str) -> bool:
    """True for a 24-hour HH:MM string such as format_clock produces."""
    return bool(_CLOCK_RE.fullmatch(value or ""))


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """Stored timestamps are naive UTC; render them with a Z suffix."""
    if dt is None:
        return None
    aware = dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
    return aware.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def to_iso_date(d: Optional[date]) -> Optional[str]:
    return d.isoformat() if d is not None else None
