"""Tests for chart timeframes."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from stockfolio.charts.timeframe import ChartTimeframe


class TestChartTimeframe:
    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("1D", ChartTimeframe.ONE_DAY),
            ("1m", ChartTimeframe.ONE_MONTH),
            (" all ", ChartTimeframe.ALL),
        ],
    )
    def test_parse(self, label: str, expected: ChartTimeframe) -> None:
        assert ChartTimeframe.parse(label) is expected

    def test_parse_unknown(self) -> None:
        with pytest.raises(ValueError, match="expected one of: 1D, 1W, 1M, 3M, 1Y, ALL"):
            ChartTimeframe.parse("2W")

    def test_point_budgets(self) -> None:
        assert [t.max_points for t in ChartTimeframe] == [24, 7, 30, 12, 12, 20]

    @pytest.mark.parametrize(
        ("timeframe", "start"),
        [
            (ChartTimeframe.ONE_DAY, datetime(2024, 3, 14, 12, tzinfo=UTC)),
            (ChartTimeframe.ONE_WEEK, datetime(2024, 3, 8, 12, tzinfo=UTC)),
            (ChartTimeframe.ONE_MONTH, datetime(2024, 2, 15, 12, tzinfo=UTC)),
            (ChartTimeframe.THREE_MONTHS, datetime(2023, 12, 15, 12, tzinfo=UTC)),
            (ChartTimeframe.ONE_YEAR, datetime(2023, 3, 15, 12, tzinfo=UTC)),
            (ChartTimeframe.ALL, datetime(2019, 3, 15, 12, tzinfo=UTC)),
        ],
    )
    def test_start_date(self, timeframe: ChartTimeframe, start: datetime) -> None:
        assert timeframe.start_date(datetime(2024, 3, 15, 12, tzinfo=UTC)) == start
