"""
Comparison Service
==================
Current vs previous window averages.

Two flavours:

  compute_period_comparison   rolling windows of a fixed length
                              (day=1, week=7, month=30, year=365 days)
                              ending at "now"
  compute_day_over_day        calendar today vs calendar yesterday in the
                              reference timezone

Either average is 0 when its window has no records. Consumers must show
that as "no data", not as a very low mood; ``has_current_data`` /
``has_previous_data`` on the result disambiguate.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Sequence, Union

from moody.models.insights import Granularity, PeriodComparison
from moody.models.mood import MoodRecord
from moody.services.records import (
    as_aware,
    local_day,
    local_midnight,
    mean_value,
    resolve_tz,
)

logger = logging.getLogger(__name__)

PERIOD_LABELS: dict[Granularity, tuple[str, str]] = {
    Granularity.DAY: ("Today", "Yesterday"),
    Granularity.WEEK: ("This Week", "Previous Week"),
    Granularity.MONTH: ("This Month", "Previous Month"),
    Granularity.YEAR: ("This Year", "Previous Year"),
}


def _latest(records: Sequence[MoodRecord]) -> Optional[MoodRecord]:
    if not records:
        return None
    return max(records, key=lambda r: r.timestamp)


def _compare(
    current: Sequence[MoodRecord],
    previous: Sequence[MoodRecord],
    current_label: str,
    previous_label: str,
) -> PeriodComparison:
    return PeriodComparison(
        current_avg=mean_value(current),
        previous_avg=mean_value(previous),
        current_label=current_label,
        previous_label=previous_label,
        current_mood=_latest(current),
        previous_mood=_latest(previous),
    )


def compute_period_comparison(
    records: Sequence[MoodRecord],
    granularity: Union[Granularity, str],
    now: datetime,
) -> PeriodComparison:
    """Compare the last N days with the N days before them.

    *records* should be the user's full history; windowing happens here.
    Raises ValueError for an unknown granularity.
    """
    granularity = Granularity(granularity)
    now = as_aware(now)
    length = timedelta(days=granularity.days)
    current_start = now - length
    previous_start = now - 2 * length

    current = [r for r in records if r.timestamp >= current_start]
    previous = [r for r in records if previous_start <= r.timestamp < current_start]

    logger.debug(
        "%s comparison: %d current, %d previous records",
        granularity.value, len(current), len(previous),
    )

    current_label, previous_label = PERIOD_LABELS[granularity]
    return _compare(current, previous, current_label, previous_label)


def compute_day_over_day(
    records: Sequence[MoodRecord],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> PeriodComparison:
    """Compare calendar today with calendar yesterday.

    Unlike the rolling ``day`` granularity, boundaries fall on local
    midnight, so an entry at 23:59 yesterday never counts as today.
    """
    zone = resolve_tz(tz)
    today = local_day(now, zone)
    today_start = local_midnight(today, zone)
    yesterday_start = local_midnight(today - timedelta(days=1), zone)

    current = [r for r in records if r.timestamp >= today_start]
    previous = [r for r in records if yesterday_start <= r.timestamp < today_start]

    current_label, previous_label = PERIOD_LABELS[Granularity.DAY]
    return _compare(current, previous, current_label, previous_label)
