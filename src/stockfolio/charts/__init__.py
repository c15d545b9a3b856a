"""Price chart series: timeframes, sampling, building and chart state."""

from stockfolio.charts.builder import ChartSeriesBuilder, synthetic_price
from stockfolio.charts.sampling import enumerate_dates, sample_dates
from stockfolio.charts.series import ChartPoint, ChartSeries
from stockfolio.charts.state import ChartController, ChartState
from stockfolio.charts.timeframe import ChartTimeframe

__all__ = [
    "ChartController",
    "ChartPoint",
    "ChartSeries",
    "ChartSeriesBuilder",
    "ChartState",
    "ChartTimeframe",
    "enumerate_dates",
    "sample_dates",
    "synthetic_price",
]
