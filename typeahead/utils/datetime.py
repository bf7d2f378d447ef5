"""Time utilities with timezone-aware defaults."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC time with tzinfo."""

    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render ``value`` as ``YYYY-MM-DD HH:MM`` for history listings."""

    return value.strftime("%Y-%m-%d %H:%M")


__all__ = ["format_timestamp", "utc_now"]
