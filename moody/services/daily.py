"""
Daily Mood Series
=================
Average mood per calendar day for the last N days, oldest first, for
the stats chart. Days without a check-in are kept with ``average = 0``
and ``count = 0`` so the chart always has N points.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Sequence

import pandas as pd

from moody.models.insights import DailyMoodPoint
from moody.models.mood import MoodRecord
from moody.services.records import local_day, resolve_tz

logger = logging.getLogger(__name__)

DEFAULT_CHART_DAYS = 7


def compute_daily_averages(
    records: Sequence[MoodRecord],
    now: datetime,
    days: int = DEFAULT_CHART_DAYS,
    tz: Optional[tzinfo] = None,
) -> list[DailyMoodPoint]:
    """One DailyMoodPoint per day in the *days* days ending today."""
    if days < 1:
        return []

    zone = resolve_tz(tz)
    today = local_day(now, zone)
    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]

    # --------------------------------------------------------------
    # Group by local calendar date
    # --------------------------------------------------------------
    if records:
        mood_df = pd.DataFrame(
            {
                "date": [local_day(r.timestamp, zone) for r in records],
                "value": [r.value for r in records],
            }
        )
        daily = mood_df.groupby("date")["value"].agg(["mean", "count"])
    else:
        daily = pd.DataFrame(columns=["mean", "count"])

    points: list[DailyMoodPoint] = []
    for day in window:
        if day in daily.index:
            row = daily.loc[day]
            average, count = float(row["mean"]), int(row["count"])
        else:
            average, count = 0.0, 0
        points.append(
            DailyMoodPoint(
                date=day,
                weekday=day.strftime("%a"),
                average=average,
                count=count,
            )
        )

    logger.debug(
        "Daily series %s..%s: %d of %d days logged",
        window[0], window[-1], sum(1 for p in points if p.count), days,
    )
    return points
