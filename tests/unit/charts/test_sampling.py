"""Tests for date enumeration and downsampling."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from dateutil.relativedelta import relativedelta

from stockfolio.charts.sampling import enumerate_dates, sample_dates
from stockfolio.charts.timeframe import ChartTimeframe


class TestEnumerateDates:
    def test_inclusive_bounds(self) -> None:
        start = datetime(2024, 3, 1, tzinfo=UTC)
        dates = enumerate_dates(start, datetime(2024, 3, 5, tzinfo=UTC), relativedelta(days=1))

        assert len(dates) == 5
        assert dates[0] == start
        assert dates[-1] == datetime(2024, 3, 5, tzinfo=UTC)

    def test_month_steps_stay_anchored(self) -> None:
        start = datetime(2024, 1, 31, tzinfo=UTC)
        dates = enumerate_dates(start, datetime(2024, 3, 31, tzinfo=UTC), relativedelta(months=1))

        assert [d.day for d in dates] == [31, 29, 31]

    def test_start_after_end_is_empty(self) -> None:
        start = datetime(2024, 3, 2, tzinfo=UTC)
        assert enumerate_dates(start, datetime(2024, 3, 1, tzinfo=UTC), relativedelta(days=1)) == []


class TestSampleDates:
    def test_short_input_unchanged(self) -> None:
        assert sample_dates([1, 2, 3], 5) == [1, 2, 3]

    def test_exact_budget_unchanged(self) -> None:
        assert sample_dates(list(range(7)), 7) == list(range(7))

    def test_fixed_stride_keeps_last(self) -> None:
        assert sample_dates(list(range(10)), 3) == [0, 3, 6, 9]

    def test_last_not_duplicated(self) -> None:
        assert sample_dates(list(range(9)), 3) == [0, 3, 6, 8]
        assert sample_dates(list(range(7)), 3) == [0, 2, 4, 6]

    def test_rejects_non_positive_budget(self) -> None:
        with pytest.raises(ValueError):
            sample_dates([1, 2], 0)

    @pytest.mark.parametrize("length", range(1, 120))
    @pytest.mark.parametrize("max_count", [1, 7, 12, 20, 24, 30])
    def test_bounded_and_ends_on_last(self, length: int, max_count: int) -> None:
        """Sampling never exceeds the budget by more than the kept last item."""
        items = list(range(length))
        sampled = sample_dates(items, max_count)

        assert len(sampled) <= max_count + 1
        assert sampled[0] == 0
        assert sampled[-1] == length - 1
        assert sampled.count(length - 1) == 1
        assert sampled == sorted(sampled)

    @pytest.mark.parametrize("timeframe", list(ChartTimeframe))
    def test_every_timeframe_within_budget(self, timeframe: ChartTimeframe) -> None:
        now = datetime(2024, 3, 15, 16, tzinfo=UTC)
        dates = enumerate_dates(timeframe.start_date(now), now, timeframe.step)
        sampled = sample_dates(dates, timeframe.max_points)

        assert len(sampled) <= timeframe.max_points + 1
        assert sampled[-1] == now
