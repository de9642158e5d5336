"""
Tests for period comparisons
============================
Covers:
- compute_period_comparison: no data in either window → 0 / 0
- Rolling week windows: current, previous, and excluded older records
- Window boundaries: start of each window is inclusive
- Granularity mapping: day=1, week=7, month=30, year=365
- Labels per granularity, string or enum granularity accepted
- Unknown granularity → ValueError
- current_mood / previous_mood are the latest record of each window
- compute_day_over_day: calendar midnight boundaries, not rolling 24h

Run: pytest tests/test_comparison.py -v
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from moody.models.insights import PERIOD_DAYS, Granularity
from moody.models.mood import MoodRecord
from moody.services.comparison import compute_day_over_day, compute_period_comparison

UTC = timezone.utc
NOW = datetime(2026, 3, 15, 18, 0, tzinfo=UTC)


def _at(ts: datetime, value: int, label: str = "Neutral") -> MoodRecord:
    return MoodRecord(mood_label=label, value=value, timestamp=ts)


def _ago(delta: timedelta, value: int, label: str = "Neutral") -> MoodRecord:
    return _at(NOW - delta, value, label)


class TestPeriodComparison:

    def test_no_records_gives_zero_averages(self):
        result = compute_period_comparison([], "week", NOW)
        assert result.current_avg == 0
        assert result.previous_avg == 0
        assert result.current_mood is None
        assert result.previous_mood is None
        assert not result.has_current_data
        assert not result.has_previous_data

    def test_week_windows(self):
        records = [
            _ago(timedelta(days=1), 4),
            _ago(timedelta(days=3), 2),
            _ago(timedelta(days=10), 5),
            _ago(timedelta(days=20), 1),  # outside both windows
        ]
        result = compute_period_comparison(records, Granularity.WEEK, NOW)
        assert result.current_avg == pytest.approx(3.0)
        assert result.previous_avg == pytest.approx(5.0)

    def test_only_previous_window_has_data(self):
        result = compute_period_comparison([_ago(timedelta(days=9), 4)], "week", NOW)
        assert result.current_avg == 0
        assert result.previous_avg == 4
        assert result.has_previous_data

    def test_window_starts_are_inclusive(self):
        records = [
            _ago(timedelta(days=7), 5),   # exactly current start → current
            _ago(timedelta(days=14), 1),  # exactly previous start → previous
        ]
        result = compute_period_comparison(records, "week", NOW)
        assert result.current_avg == 5
        assert result.previous_avg == 1

    def test_granularity_day_counts(self):
        assert PERIOD_DAYS == {
            Granularity.DAY: 1,
            Granularity.WEEK: 7,
            Granularity.MONTH: 30,
            Granularity.YEAR: 365,
        }

    @pytest.mark.parametrize(
        "granularity, inside, previous",
        [
            ("day", timedelta(hours=20), timedelta(hours=30)),
            ("week", timedelta(days=6), timedelta(days=13)),
            ("month", timedelta(days=29), timedelta(days=59)),
            ("year", timedelta(days=364), timedelta(days=729)),
        ],
    )
    def test_each_granularity_uses_fixed_length(self, granularity, inside, previous):
        records = [_ago(inside, 5), _ago(previous, 2)]
        result = compute_period_comparison(records, granularity, NOW)
        assert result.current_avg == 5
        assert result.previous_avg == 2

    @pytest.mark.parametrize(
        "granularity, labels",
        [
            ("day", ("Today", "Yesterday")),
            ("week", ("This Week", "Previous Week")),
            ("month", ("This Month", "Previous Month")),
            ("year", ("This Year", "Previous Year")),
        ],
    )
    def test_labels(self, granularity, labels):
        result = compute_period_comparison([], granularity, NOW)
        assert (result.current_label, result.previous_label) == labels

    def test_unknown_granularity_raises(self):
        with pytest.raises(ValueError):
            compute_period_comparison([], "fortnight", NOW)

    def test_latest_record_per_window(self):
        records = [
            _ago(timedelta(days=2), 3, "Neutral"),
            _ago(timedelta(days=1), 5, "Very Happy"),
            _ago(timedelta(days=12), 2, "Sad"),
            _ago(timedelta(days=8), 4, "Happy"),
        ]
        result = compute_period_comparison(records, "week", NOW)
        assert result.current_mood.mood_label == "Very Happy"
        assert result.previous_mood.mood_label == "Happy"

    def test_is_pure(self):
        records = [_ago(timedelta(days=d), (d % 5) + 1) for d in range(30)]
        first = compute_period_comparison(records, "month", NOW)
        second = compute_period_comparison(records, "month", NOW)
        assert first == second


class TestDayOverDay:

    _RECORDS = [
        _at(datetime(2026, 3, 15, 9, 0, tzinfo=UTC), 5),
        _at(datetime(2026, 3, 14, 23, 59, tzinfo=UTC), 1),
        _at(datetime(2026, 3, 14, 8, 0, tzinfo=UTC), 3),
        _at(datetime(2026, 3, 13, 12, 0, tzinfo=UTC), 4),
    ]

    def test_calendar_today_and_yesterday(self):
        result = compute_day_over_day(self._RECORDS, NOW, UTC)
        assert result.current_avg == 5
        assert result.previous_avg == pytest.approx(2.0)
        assert (result.current_label, result.previous_label) == ("Today", "Yesterday")

    def test_differs_from_rolling_day(self):
        # Rolling 24h pulls yesterday 23:59 into the current window.
        rolling = compute_period_comparison(self._RECORDS, "day", NOW)
        assert rolling.current_avg == pytest.approx(3.0)

    def test_no_entries_today(self):
        result = compute_day_over_day(self._RECORDS[1:], NOW, UTC)
        assert result.current_avg == 0
        assert result.current_mood is None
        assert result.previous_mood.value == 1
