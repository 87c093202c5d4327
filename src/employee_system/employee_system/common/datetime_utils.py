from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time (timezone-aware).

    Note: Wrapped so tests can patch it and get stable audit timestamps.
    """
    return datetime.now(timezone.utc)


def to_iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()
