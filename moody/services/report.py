"""
Report Builder
==============
Assembles the data behind an exported mood report for one period:
headline insights, the period comparison, the level distribution and
the most recent entries. Layout and markup belong to the renderer; this
module only decides what goes in.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Sequence, Union

from moody.models.insights import Granularity, MoodReport, MoodTrend
from moody.models.mood import MoodRecord
from moody.services.comparison import compute_period_comparison
from moody.services.distribution import compute_distribution
from moody.services.insights import compute_insights
from moody.services.records import as_aware, filter_since, sort_newest_first

logger = logging.getLogger(__name__)

# The report lists this many recent entries at most.
MAX_REPORT_ENTRIES = 15

_TREND_EMOJI: dict[str, str] = {
    "improving": "📈",
    "declining": "📉",
    "stable": "➡️",
}

_TREND_COLOR: dict[str, str] = {
    "improving": "#4caf50",
    "declining": "#f44336",
    "stable": "#ffc107",
}


def trend_emoji(trend: MoodTrend) -> str:
    return _TREND_EMOJI.get(trend, _TREND_EMOJI["stable"])


def trend_color(trend: MoodTrend) -> str:
    return _TREND_COLOR.get(trend, _TREND_COLOR["stable"])


def build_report(
    records: Sequence[MoodRecord],
    granularity: Union[Granularity, str],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> MoodReport:
    """Build the report payload for the period ending at *now*.

    *records* is the user's full history. Insights, distribution and the
    entry list cover only the period; the comparison also looks at the
    period before it.
    """
    granularity = Granularity(granularity)
    now = as_aware(now)

    history = sort_newest_first(records)
    in_period = filter_since(history, now - timedelta(days=granularity.days))

    report = MoodReport(
        period=granularity,
        generated_at=now,
        insights=compute_insights(in_period, now, granularity.days, tz),
        comparison=compute_period_comparison(history, granularity, now),
        distribution=compute_distribution(in_period),
        entries=in_period[:MAX_REPORT_ENTRIES],
    )
    logger.info(
        "Built %s report: %d entries in period, %d listed",
        granularity.value, len(in_period), len(report.entries),
    )
    return report
