"""
Insights Schemas
================
Result models returned by the insights engine. These are the contract
between the engine and whatever renders it (mobile stats screen, the
exported report).

All models serialise with camelCase aliases (``averageMood``,
``currentAvg``, ...) when dumped with ``by_alias=True``, matching the
keys report consumers already read.

A ``0`` average in any of these models means "no data", never "worst
mood". The scale starts at 1, so a real average is never 0.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from moody.models.mood import MoodRecord

MoodTrend = Literal["improving", "declining", "stable"]

NO_DATA_LABEL = "No data"


class Granularity(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def days(self) -> int:
        """Fixed day count. Not calendar-accurate for month/year."""
        return PERIOD_DAYS[self]


PERIOD_DAYS: dict[Granularity, int] = {
    Granularity.DAY: 1,
    Granularity.WEEK: 7,
    Granularity.MONTH: 30,
    Granularity.YEAR: 365,
}


class _InsightsModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ---------------------------------------------------------------------------
# Summary statistics
# ---------------------------------------------------------------------------

class MoodInsights(_InsightsModel):
    """Headline statistics for one user over a lookback window."""

    average_mood: float = Field(
        ...,
        description="Mean mood value, or 0 when there are no records.",
    )
    most_common_mood: str = Field(
        ...,
        description="Most frequent label, or 'No data' when there are no records.",
    )
    current_streak: int = Field(..., ge=0)
    total_entries: int = Field(..., ge=0)
    mood_trend: MoodTrend


# ---------------------------------------------------------------------------
# Distribution
# ---------------------------------------------------------------------------

class DistributionEntry(_InsightsModel):
    """Share of records at one mood level. Only observed levels are emitted."""

    value: int
    label: str
    color: str
    emoji: str = ""
    count: int = Field(..., ge=1)
    percentage: float = Field(..., description="0–100, rounded to one decimal.")


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

class PeriodComparison(_InsightsModel):
    """Current window average vs the immediately preceding window."""

    current_avg: float
    previous_avg: float
    current_label: str
    previous_label: str
    current_mood: Optional[MoodRecord] = Field(
        default=None,
        description="Most recent record in the current window, if any.",
    )
    previous_mood: Optional[MoodRecord] = Field(
        default=None,
        description="Most recent record in the previous window, if any.",
    )

    @property
    def has_current_data(self) -> bool:
        return self.current_mood is not None

    @property
    def has_previous_data(self) -> bool:
        return self.previous_mood is not None


# ---------------------------------------------------------------------------
# Daily series
# ---------------------------------------------------------------------------

class DailyMoodPoint(_InsightsModel):
    """One calendar day's average mood, for the weekly chart."""

    date: date
    weekday: str = Field(..., description="Short weekday label, e.g. 'Mon'.")
    average: float = Field(..., description="Mean of that day's records, 0 if none.")
    count: int = Field(..., ge=0)


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

class MoodReport(_InsightsModel):
    """Everything the report renderer needs for one period, minus layout."""

    period: Granularity
    generated_at: datetime
    insights: MoodInsights
    comparison: PeriodComparison
    distribution: list[DistributionEntry]
    entries: list[MoodRecord] = Field(
        default_factory=list,
        description="Newest-first records in the period, capped for display.",
    )
