"""Chart series builder with synthetic fallback when the provider degrades."""

from __future__ import annotations

import asyncio
import random
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol

import structlog

from stockfolio.api.exceptions import InvalidDataError, QuoteError, RateLimitError
from stockfolio.charts.sampling import enumerate_dates, sample_dates
from stockfolio.charts.series import ChartPoint, ChartSeries
from stockfolio.constants import (
    CHART_REQUEST_DELAY_SECONDS,
    SYNTHETIC_MIN_PRICE,
    SYNTHETIC_NOISE_AMPLITUDE,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from datetime import date

    from stockfolio.charts.timeframe import ChartTimeframe
    from stockfolio.portfolio.models import Position

logger = structlog.get_logger()

# Failures that mean the provider is unusable for the rest of a build.
DEGRADING_ERRORS: tuple[type[QuoteError], ...] = (RateLimitError, InvalidDataError)


class HistoricalPriceProvider(Protocol):
    """Anything that can look up a daily close (e.g. `QuoteClient`)."""

    async def fetch_historical_close(self, symbol: str, on: date | datetime) -> float: ...


def synthetic_price(
    current_price: float,
    trend: float,
    index: int,
    total: int,
    noise: float,
) -> float:
    """
    Price for a generated point: `current * (1 + trend * progress + noise)`, floored at 0.01.

    `trend` is the position's gain/loss as a fraction and `progress = index / total`.
    """
    progress = index / total if total else 0.0
    price = current_price * (1.0 + trend * progress + noise)
    return max(price, SYNTHETIC_MIN_PRICE)


class ChartSeriesBuilder:
    """
    Builds a sampled price series for a position and timeframe.

    Each sampled date is looked up through the provider, with a short delay after
    every successful call. The first rate-limit or unparseable-response failure puts
    the build into degraded mode: that date and every later one get a synthetic point
    and no further calls are made. Degraded mode lasts for one build only.
    """

    def __init__(
        self,
        provider: HistoricalPriceProvider,
        *,
        request_delay: float = CHART_REQUEST_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._provider = provider
        self._request_delay = request_delay
        self._sleep = sleep
        self._rng = rng or random.Random()
        self._clock = clock or (lambda: datetime.now(UTC))

    def candidate_dates(self, timeframe: ChartTimeframe, now: datetime) -> list[datetime]:
        """Sampled dates for a timeframe ending at `now`."""
        dates = enumerate_dates(timeframe.start_date(now), now, timeframe.step)
        return sample_dates(dates, timeframe.max_points)

    def synthetic_point(
        self, position: Position, when: datetime, index: int, total: int
    ) -> ChartPoint:
        """Generated point trending toward the position's current gain/loss."""
        noise = self._rng.uniform(-SYNTHETIC_NOISE_AMPLITUDE, SYNTHETIC_NOISE_AMPLITUDE)
        price = synthetic_price(
            position.current_price,
            position.gain_loss_percent / 100,
            index,
            total,
            noise,
        )
        return ChartPoint(date=when, price=price, synthetic=True)

    async def build(self, position: Position, timeframe: ChartTimeframe) -> ChartSeries:
        """
        Build the series. Never raises a `QuoteError`; worst case it is fully synthetic.
        """
        now = self._clock()
        dates = self.candidate_dates(timeframe, now)
        total = len(dates)
        points: list[ChartPoint] = []
        degraded = False

        for index, when in enumerate(dates):
            if degraded:
                points.append(self.synthetic_point(position, when, index, total))
                continue

            try:
                price = await self._provider.fetch_historical_close(position.symbol, when)
            except DEGRADING_ERRORS as e:
                logger.warning(
                    "Quote provider degraded; switching to synthetic data",
                    symbol=position.symbol,
                    timeframe=timeframe.value,
                    error=str(e),
                )
                degraded = True
                points.append(self.synthetic_point(position, when, index, total))
                continue
            except QuoteError as e:
                logger.debug(
                    "Historical price unavailable; using synthetic point",
                    symbol=position.symbol,
                    date=when.isoformat(),
                    error=str(e),
                )
                points.append(self.synthetic_point(position, when, index, total))
                continue

            points.append(ChartPoint(date=when, price=price))
            await self._sleep(self._request_delay)

        points.sort(key=lambda p: p.date)
        series = ChartSeries(symbol=position.symbol, timeframe=timeframe, points=tuple(points))
        logger.info(
            "Built chart series",
            symbol=position.symbol,
            timeframe=timeframe.value,
            points=len(series),
            synthetic=series.synthetic_count,
        )
        return series
