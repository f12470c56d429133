"""Default time sources, injectable into handlers for testing."""

from __future__ import annotations

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def today() -> date:
    return date.today()
