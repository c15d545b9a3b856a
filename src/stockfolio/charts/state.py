"""Explicit chart state with subscription callbacks, and its controller.

Screens hold a `ChartState` by reference and subscribe to it; the controller is
the only writer.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

from stockfolio.charts.timeframe import ChartTimeframe
from stockfolio.constants import CHART_AUTO_REFRESH_SECONDS

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from datetime import datetime

    from stockfolio.charts.builder import ChartSeriesBuilder
    from stockfolio.charts.series import ChartPoint, ChartSeries
    from stockfolio.portfolio.models import Position

    ChartListener = Callable[["ChartState"], None]

logger = structlog.get_logger()


@dataclass
class ChartState:
    """Observable chart screen state."""

    timeframe: ChartTimeframe = ChartTimeframe.ONE_MONTH
    series: ChartSeries | None = None
    selected_date: datetime | None = None
    is_loading: bool = False
    error_message: str | None = None
    _listeners: list[ChartListener] = field(default_factory=list, repr=False, compare=False)

    def subscribe(self, listener: ChartListener) -> Callable[[], None]:
        """Register a change callback. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **changes: Any) -> None:
        """Apply field changes and notify subscribers once."""
        for name, value in changes.items():
            if name.startswith("_") or not hasattr(self, name):
                raise AttributeError(f"ChartState has no field {name!r}")
            setattr(self, name, value)
        for listener in list(self._listeners):
            listener(self)

    @property
    def selected_point(self) -> ChartPoint | None:
        if self.series is None or self.selected_date is None:
            return None
        return self.series.nearest_point(self.selected_date)

    @property
    def selected_price_change(self) -> float | None:
        point = self.selected_point
        if point is None or self.series is None:
            return None
        return self.series.change_since_first(point)

    @property
    def selected_percent_change(self) -> float | None:
        point = self.selected_point
        if point is None or self.series is None:
            return None
        return self.series.percent_change_since_first(point)


class ChartController:
    """Loads series into a `ChartState` for one position."""

    def __init__(
        self,
        builder: ChartSeriesBuilder,
        position: Position,
        state: ChartState | None = None,
    ) -> None:
        self._builder = builder
        self._position = position
        self.state = state or ChartState()
        self._refresh_task: asyncio.Task[None] | None = None

    async def load(self) -> ChartSeries | None:
        """
        Build the series for the current timeframe and select its most recent point.

        A failed build leaves the previous series in place, sets `error_message` and
        returns None.
        """
        self.state.update(is_loading=True, error_message=None)
        try:
            series = await self._builder.build(self._position, self.state.timeframe)
        except Exception as e:
            logger.warning("Chart load failed", symbol=self._position.symbol, error=str(e))
            self.state.update(is_loading=False, error_message=f"Failed to load chart: {e}")
            return None
        last = series.last
        self.state.update(
            series=series,
            selected_date=last.date if last else None,
            is_loading=False,
        )
        return series

    async def select_timeframe(self, timeframe: ChartTimeframe) -> bool:
        """Switch timeframe and reload. Ignored while loading or if unchanged."""
        if timeframe == self.state.timeframe or self.state.is_loading:
            return False
        self.state.update(timeframe=timeframe)
        await self.load()
        return True

    def select_date(self, when: datetime | None) -> None:
        self.state.update(selected_date=when)

    async def auto_refresh(
        self,
        interval: float = CHART_AUTO_REFRESH_SECONDS,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        """Reload every `interval` seconds while the intraday (1D) timeframe is shown."""
        while True:
            await sleep(interval)
            if self.state.timeframe is ChartTimeframe.ONE_DAY and not self.state.is_loading:
                logger.debug("Auto-refreshing intraday chart", symbol=self._position.symbol)
                await self.load()

    def start_auto_refresh(
        self, interval: float = CHART_AUTO_REFRESH_SECONDS
    ) -> asyncio.Task[None]:
        """Run `auto_refresh` as a background task (requires a running loop)."""
        self.stop_auto_refresh()
        self._refresh_task = asyncio.get_running_loop().create_task(self.auto_refresh(interval))
        return self._refresh_task

    def stop_auto_refresh(self) -> None:
        if self._refresh_task is not None:
            self._refresh_task.cancel()
            self._refresh_task = None
