"""Chart timeframes: look-back window, bucketing granularity and point budget."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from dateutil.relativedelta import relativedelta

if TYPE_CHECKING:
    from datetime import datetime


class ChartTimeframe(str, Enum):
    """Selectable chart windows."""

    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    ONE_YEAR = "1Y"
    ALL = "ALL"

    @classmethod
    def parse(cls, label: str) -> ChartTimeframe:
        """Parse a timeframe label case-insensitively (e.g. "1m", "all")."""
        try:
            return cls(label.strip().upper())
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown timeframe {label!r} (expected one of: {valid})") from None

    @property
    def lookback(self) -> relativedelta:
        """Offset from now to the start of the window."""
        return _LOOKBACK[self]

    @property
    def step(self) -> relativedelta:
        """Spacing between enumerated candidate dates."""
        return _STEP[self]

    @property
    def max_points(self) -> int:
        """Target number of sampled points."""
        return _MAX_POINTS[self]

    def start_date(self, now: datetime) -> datetime:
        """Start of the window ending at `now`."""
        return now - self.lookback


_LOOKBACK: dict[ChartTimeframe, relativedelta] = {
    ChartTimeframe.ONE_DAY: relativedelta(days=1),
    ChartTimeframe.ONE_WEEK: relativedelta(days=7),
    ChartTimeframe.ONE_MONTH: relativedelta(months=1),
    ChartTimeframe.THREE_MONTHS: relativedelta(months=3),
    ChartTimeframe.ONE_YEAR: relativedelta(years=1),
    ChartTimeframe.ALL: relativedelta(years=5),
}

_STEP: dict[ChartTimeframe, relativedelta] = {
    ChartTimeframe.ONE_DAY: relativedelta(hours=1),
    ChartTimeframe.ONE_WEEK: relativedelta(days=1),
    ChartTimeframe.ONE_MONTH: relativedelta(days=1),
    ChartTimeframe.THREE_MONTHS: relativedelta(weeks=1),
    ChartTimeframe.ONE_YEAR: relativedelta(months=1),
    ChartTimeframe.ALL: relativedelta(months=1),
}

_MAX_POINTS: dict[ChartTimeframe, int] = {
    ChartTimeframe.ONE_DAY: 24,  # hourly
    ChartTimeframe.ONE_WEEK: 7,  # daily
    ChartTimeframe.ONE_MONTH: 30,  # daily
    ChartTimeframe.THREE_MONTHS: 12,  # weekly
    ChartTimeframe.ONE_YEAR: 12,  # monthly
    ChartTimeframe.ALL: 20,  # roughly quarterly after sampling
}
