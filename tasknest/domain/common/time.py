from __future__ import annotations

from datetime import datetime, timezone


def ensure_aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return dt


def to_iso(dt: datetime) -> str:
    """ISO 8601 in UTC, so stored timestamps sort correctly as text."""
    ensure_aware(dt)
    return dt.astimezone(timezone.utc).isoformat()


def from_iso(s: str) -> datetime:
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return ensure_aware(datetime.fromisoformat(s))
