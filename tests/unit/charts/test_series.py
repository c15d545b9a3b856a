"""Tests for chart series analytics."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from stockfolio.charts.series import ChartPoint, ChartSeries
from stockfolio.charts.timeframe import ChartTimeframe

START = datetime(2024, 3, 1, tzinfo=UTC)


def _series(*prices: float) -> ChartSeries:
    points = tuple(
        ChartPoint(date=START + timedelta(days=i), price=price) for i, price in enumerate(prices)
    )
    return ChartSeries(symbol="AAPL", timeframe=ChartTimeframe.ONE_WEEK, points=points)


class TestChartSeries:
    def test_empty(self) -> None:
        series = _series()
        assert len(series) == 0
        assert series.first is None
        assert series.last is None
        assert series.price_change == 0.0
        assert series.nearest_point(START) is None
        assert series.price_range() == (0.0, 100.0)

    def test_price_change(self) -> None:
        assert _series(100.0, 90.0, 120.0).price_change == pytest.approx(20.0)

    def test_nearest_point(self) -> None:
        series = _series(100.0, 110.0, 120.0)
        point = series.nearest_point(START + timedelta(days=1, hours=5))
        assert point is not None
        assert point.price == 110.0

    def test_changes_since_first(self) -> None:
        series = _series(100.0, 110.0, 125.0)
        last = series.last
        assert last is not None
        assert series.change_since_first(last) == pytest.approx(25.0)
        assert series.percent_change_since_first(last) == pytest.approx(0.25)

    def test_percent_change_without_positive_base(self) -> None:
        series = _series(0.0, 10.0)
        assert series.percent_change_since_first(series.points[1]) is None

    def test_price_range_is_padded(self) -> None:
        low, high = _series(100.0, 200.0).price_range()
        assert low == pytest.approx(90.0)
        assert high == pytest.approx(210.0)

    def test_synthetic_count(self) -> None:
        series = ChartSeries(
            symbol="AAPL",
            timeframe=ChartTimeframe.ONE_DAY,
            points=(
                ChartPoint(START, 1.0),
                ChartPoint(START + timedelta(hours=1), 1.0, synthetic=True),
            ),
        )
        assert series.synthetic_count == 1
