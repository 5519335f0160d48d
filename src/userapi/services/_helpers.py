"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, date, datetime


def today_utc() -> date:
    """Today's calendar date in UTC."""
    return datetime.now(UTC).date()
