"""
Record Helpers
==============
Small shared operations over collections of MoodRecord: ordering,
windowing, and calendar-day conversion in the reference timezone.

Everything here is pure. "now" is always passed in, never read from the
clock, so results are reproducible in tests.
"""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Iterable, Optional, Sequence

from moody.config import get_settings
from moody.models.mood import MoodRecord


def resolve_tz(tz: Optional[tzinfo] = None) -> tzinfo:
    """Return *tz*, or the configured reference timezone if not given."""
    if tz is not None:
        return tz
    return get_settings().tzinfo


def as_aware(moment: datetime) -> datetime:
    """Treat a naive datetime as UTC, the same rule MoodRecord applies."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def local_day(moment: datetime, tz: tzinfo) -> date:
    """Calendar day of *moment* as seen in *tz*."""
    return as_aware(moment).astimezone(tz).date()


def local_midnight(day: date, tz: tzinfo) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=tz)


def sort_newest_first(records: Iterable[MoodRecord]) -> list[MoodRecord]:
    """Stable descending sort by timestamp.

    This is the order the record store returns and the order callers
    should pass when most-common-mood tie-breaking must be deterministic.
    """
    return sorted(records, key=lambda r: r.timestamp, reverse=True)


def filter_since(records: Iterable[MoodRecord], start: datetime) -> list[MoodRecord]:
    """Records with ``timestamp >= start``, input order preserved."""
    start = as_aware(start)
    return [r for r in records if r.timestamp >= start]


def mean_value(records: Sequence[MoodRecord]) -> float:
    """Arithmetic mean of ``value``; 0.0 for an empty sequence."""
    if not records:
        return 0.0
    return sum(r.value for r in records) / len(records)
