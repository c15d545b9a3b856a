"""Chart series value types and read-only analytics for the chart surface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from stockfolio.constants import CHART_RANGE_PADDING

if TYPE_CHECKING:
    from datetime import datetime

    from stockfolio.charts.timeframe import ChartTimeframe


@dataclass(frozen=True)
class ChartPoint:
    """One (date, price) sample. `synthetic` marks points generated without provider data."""

    date: datetime
    price: float
    synthetic: bool = False


@dataclass(frozen=True)
class ChartSeries:
    """Points for one position and timeframe, ordered by date ascending."""

    symbol: str
    timeframe: ChartTimeframe
    points: tuple[ChartPoint, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    @property
    def first(self) -> ChartPoint | None:
        return self.points[0] if self.points else None

    @property
    def last(self) -> ChartPoint | None:
        return self.points[-1] if self.points else None

    @property
    def synthetic_count(self) -> int:
        return sum(1 for p in self.points if p.synthetic)

    @property
    def price_change(self) -> float:
        """Last price minus first price (0.0 when empty)."""
        if not self.points:
            return 0.0
        return self.points[-1].price - self.points[0].price

    def nearest_point(self, when: datetime) -> ChartPoint | None:
        """Point closest in time to `when` (first one wins on ties)."""
        if not self.points:
            return None
        return min(self.points, key=lambda p: abs((p.date - when).total_seconds()))

    def change_since_first(self, point: ChartPoint) -> float | None:
        """Absolute price change from the first point to `point`."""
        first = self.first
        if first is None:
            return None
        return point.price - first.price

    def percent_change_since_first(self, point: ChartPoint) -> float | None:
        """Fractional change from the first point to `point`; None if the first price is <= 0."""
        first = self.first
        if first is None or first.price <= 0:
            return None
        return (point.price - first.price) / first.price

    def price_range(self, padding: float = CHART_RANGE_PADDING) -> tuple[float, float]:
        """Display range: min/max price widened by `padding` of the span. (0, 100) if empty."""
        if not self.points:
            return (0.0, 100.0)
        prices = [p.price for p in self.points]
        low, high = min(prices), max(prices)
        pad = (high - low) * padding
        return (low - pad, high + pad)
