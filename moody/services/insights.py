"""
Insights Engine
===============
Headline mood statistics for one user over a lookback window:

    average_mood      mean of every record's value
    most_common_mood  most frequent label (first seen wins a tie)
    total_entries     record count
    current_streak    consecutive calendar days with a record, counting
                      back from today
    mood_trend        last 7 days vs the 7 days before, with a 0.3 band

The caller supplies records already filtered to the window (the store's
"timestamp >= now - window_days" query), plus "now" and the window size.
Empty input is a normal state and yields zeros / "No data" / "stable".

Records are assumed valid (MoodRecord enforces 1–5 at construction).
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Sequence

from moody.config import get_settings
from moody.models.insights import NO_DATA_LABEL, MoodInsights, MoodTrend
from moody.models.mood import MoodRecord
from moody.services.records import as_aware, local_day, mean_value, resolve_tz

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Hysteresis band: weekly averages closer than this are "stable".
TREND_THRESHOLD = 0.3
LAST_WEEK_DAYS = 7
PREVIOUS_WEEK_DAYS = 14

_ONE_DAY = timedelta(days=1)


def compute_insights(
    records: Sequence[MoodRecord],
    now: datetime,
    window_days: Optional[int] = None,
    tz: Optional[tzinfo] = None,
) -> MoodInsights:
    """Compute MoodInsights for *records* as of *now*.

    *window_days* bounds the streak walk and should match the window the
    records were fetched with; it defaults to ``insights_window_days``.
    Calendar days are taken in *tz*, or the configured reference timezone.
    """
    if not records:
        return MoodInsights(
            average_mood=0.0,
            most_common_mood=NO_DATA_LABEL,
            current_streak=0,
            total_entries=0,
            mood_trend="stable",
        )

    now = as_aware(now)
    zone = resolve_tz(tz)
    if window_days is None:
        window_days = get_settings().insights_window_days

    insights = MoodInsights(
        average_mood=mean_value(records),
        most_common_mood=most_common_mood(records),
        current_streak=current_streak(records, now, window_days, zone),
        total_entries=len(records),
        mood_trend=mood_trend(records, now),
    )
    logger.debug(
        "Insights over %d records: avg=%.2f streak=%d trend=%s",
        insights.total_entries,
        insights.average_mood,
        insights.current_streak,
        insights.mood_trend,
    )
    return insights


def most_common_mood(records: Sequence[MoodRecord]) -> str:
    """Most frequent label. Ties go to the label encountered first."""
    if not records:
        return NO_DATA_LABEL
    # Counter keeps insertion order and most_common(1) returns the first
    # maximal entry, which gives the first-encountered tie-break.
    counts = Counter(r.mood_label for r in records)
    return counts.most_common(1)[0][0]


def current_streak(
    records: Sequence[MoodRecord],
    now: datetime,
    window_days: int,
    tz: Optional[tzinfo] = None,
) -> int:
    """Count consecutive days with a record, walking back from today.

    Stops at the first empty day, so older entries beyond a gap never
    count. At most *window_days* days are examined.
    """
    zone = resolve_tz(tz)
    logged_days = {local_day(r.timestamp, zone) for r in records}
    today = local_day(now, zone)

    streak = 0
    for offset in range(max(window_days, 0)):
        if today - timedelta(days=offset) not in logged_days:
            break
        streak += 1
    return streak


def days_ago(record: MoodRecord, now: datetime) -> int:
    """Whole days elapsed between the record and *now*, floored."""
    return (as_aware(now) - record.timestamp) // _ONE_DAY


def mood_trend(records: Sequence[MoodRecord], now: datetime) -> MoodTrend:
    """Compare the last 7 days' average with the 7 days before that."""
    last_week: list[MoodRecord] = []
    previous_week: list[MoodRecord] = []
    for record in records:
        age = days_ago(record, now)
        if age <= LAST_WEEK_DAYS:
            last_week.append(record)
        elif age <= PREVIOUS_WEEK_DAYS:
            previous_week.append(record)

    if not last_week or not previous_week:
        return "stable"

    last_avg = mean_value(last_week)
    previous_avg = mean_value(previous_week)

    if last_avg > previous_avg + TREND_THRESHOLD:
        return "improving"
    if last_avg < previous_avg - TREND_THRESHOLD:
        return "declining"
    return "stable"
