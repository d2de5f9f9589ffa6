"""Shared service-layer helper functions."""

from __future__ import annotations

import datetime as dt
from datetime import UTC, datetime


def today() -> dt.date:
    """Today's date (UTC)."""
    return datetime.now(UTC).date()


def parse_iso_date(value: str, *, name: str = "date") -> dt.date:
    """Parse ``YYYY-MM-DD``; raises ValueError naming *name* on failure."""
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        msg = f"Invalid {name} {value!r}: expected YYYY-MM-DD"
        raise ValueError(msg) from exc
