"""Quote provider client - current quotes, company names and daily closes."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any

import httpx
import pytz
import structlog
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from stockfolio.api.config import APIConfig, get_config
from stockfolio.api.exceptions import (
    InvalidDataError,
    InvalidURLError,
    NoPriceDataError,
    QuoteAPIError,
    QuoteError,
    QuoteTransportError,
    RateLimitError,
)
from stockfolio.api.models import (
    CompanyOverview,
    GlobalQuote,
    ProviderNotice,
    QuoteResponse,
    TimeSeriesResponse,
)
from stockfolio.constants import (
    HISTORICAL_LOOKBACK_DAYS,
    PROVIDER_DATE_FORMAT,
    PROVIDER_TIMEZONE,
)

if TYPE_CHECKING:
    from collections.abc import Mapping


logger = structlog.get_logger()

_SYMBOL_PATTERN = re.compile(r"^[A-Za-z0-9.\-=^:]{1,24}$")
_QUOTE_KEY = "Global Quote"
_TIME_SERIES_KEY = "Time Series (Daily)"
_PROVIDER_TZ = pytz.timezone(PROVIDER_TIMEZONE)


def _provider_day(on: date | datetime) -> date:
    """Trading day of `on` on the provider's exchange calendar.

    Aware datetimes are converted to exchange time first; naive ones are taken as-is.
    """
    if isinstance(on, datetime):
        if on.tzinfo is not None:
            on = on.astimezone(_PROVIDER_TZ)
        return on.date()
    return on


class QuoteClient:
    """
    Async client for the Alpha Vantage query API.

    One instance may serve many concurrent requests; it holds no per-symbol state.
    """

    def __init__(
        self,
        config: APIConfig | None = None,
        timeout: float | None = None,
        max_retries: int = 1,
    ) -> None:
        self._config = config or get_config()
        self._client = httpx.AsyncClient(
            timeout=timeout if timeout is not None else self._config.timeout,
            headers={"Accept": "application/json"},
        )
        self._max_retries = max(1, max_retries)

    async def __aenter__(self) -> QuoteClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    @staticmethod
    def _validate_symbol(symbol: str) -> str:
        cleaned = symbol.strip()
        if not _SYMBOL_PATTERN.match(cleaned):
            raise InvalidURLError(symbol)
        return cleaned

    async def _query(self, function: str, symbol: str, **extra: str) -> dict[str, Any]:
        """
        Issue one provider query and return the decoded JSON object.

        Network and timeout failures are retried up to `max_retries` attempts in total.

        Raises:
            InvalidURLError: If the request URL cannot be built.
            RateLimitError: On HTTP 429.
            QuoteAPIError: On any other HTTP error status.
            InvalidDataError: If the body is not a JSON object.
            QuoteTransportError: On network or timeout failure.
        """
        params: dict[str, str] = {
            "function": function,
            "symbol": self._validate_symbol(symbol),
            "apikey": self._config.api_key,
            **extra,
        }

        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type((httpx.NetworkError, httpx.TimeoutException)),
                stop=stop_after_attempt(self._max_retries),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                reraise=True,
            ):
                with attempt:
                    response = await self._client.get(self._config.query_url, params=params)
        except httpx.InvalidURL as e:
            raise InvalidURLError(symbol) from e
        except httpx.HTTPError as e:
            logger.warning("Quote request failed", function=function, symbol=symbol, error=str(e))
            raise QuoteTransportError(str(e) or type(e).__name__) from e

        if response.status_code == 429:
            raise RateLimitError(response.text or "Rate limit exceeded")
        if response.status_code >= 400:
            raise QuoteAPIError(status_code=response.status_code, message=response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise InvalidDataError() from e
        if not isinstance(data, dict):
            raise InvalidDataError()
        return data

    @staticmethod
    def _require_envelope(data: Mapping[str, Any], key: str) -> None:
        """Raise the right error when the expected envelope key is missing."""
        if key in data:
            return
        try:
            notice = ProviderNotice.model_validate(data)
        except ValidationError as e:
            raise InvalidDataError() from e
        if notice.rate_limit_message:
            logger.warning("Quote provider throttled request", notice=notice.rate_limit_message)
            raise RateLimitError(notice.rate_limit_message)
        if notice.error_message:
            raise InvalidDataError(notice.error_message)
        raise InvalidDataError()

    # ==================== Quotes ====================

    async def fetch_quote(self, symbol: str) -> GlobalQuote:
        """Fetch the latest GLOBAL_QUOTE record for a symbol."""
        data = await self._query("GLOBAL_QUOTE", symbol)
        self._require_envelope(data, _QUOTE_KEY)
        try:
            return QuoteResponse.model_validate(data).global_quote
        except ValidationError as e:
            raise InvalidDataError() from e

    async def fetch_current_price(self, symbol: str) -> float:
        """
        Fetch the latest traded price for a symbol.

        Raises:
            NoPriceDataError: If the quote has no numeric price.
            InvalidURLError: If the symbol cannot form a request.
            QuoteTransportError: On network, HTTP or decoding failure.
        """
        quote = await self.fetch_quote(symbol)
        price = quote.price_value
        if price is None:
            raise NoPriceDataError(symbol)
        logger.debug("Fetched current price", symbol=symbol, price=price)
        return price

    async def fetch_company_name(self, symbol: str) -> str:
        """Fetch the company name, falling back to the symbol itself. Never raises QuoteError."""
        try:
            data = await self._query("OVERVIEW", symbol)
            overview = CompanyOverview.model_validate(data)
        except (QuoteError, ValidationError) as e:
            logger.warning("Company name lookup failed; using symbol", symbol=symbol, error=str(e))
            return symbol
        if overview.name and overview.name.strip():
            return overview.name.strip()
        return symbol

    # ==================== History ====================

    async def fetch_time_series(self, symbol: str) -> TimeSeriesResponse:
        """Fetch the TIME_SERIES_DAILY response for a symbol."""
        data = await self._query(
            "TIME_SERIES_DAILY", symbol, outputsize=self._config.outputsize
        )
        self._require_envelope(data, _TIME_SERIES_KEY)
        try:
            return TimeSeriesResponse.model_validate(data)
        except ValidationError as e:
            raise InvalidDataError() from e

    async def fetch_historical_close(self, symbol: str, on: date | datetime) -> float:
        """
        Fetch the daily close for `on`, tolerating market-closed gaps.

        Tries the exact day, then walks back one calendar day at a time for up to
        HISTORICAL_LOOKBACK_DAYS days. If none of those days has a close, the current
        price is returned instead.
        """
        day = _provider_day(on)
        series = await self.fetch_time_series(symbol)

        for offset in range(HISTORICAL_LOOKBACK_DAYS + 1):
            key = (day - timedelta(days=offset)).strftime(PROVIDER_DATE_FORMAT)
            price = series.close_on(key)
            if price is not None:
                if offset:
                    logger.debug(
                        "Using nearest earlier close",
                        symbol=symbol,
                        requested=day.isoformat(),
                        used=key,
                    )
                return price

        logger.info("No historical close found; using current price", symbol=symbol, on=str(day))
        return await self.fetch_current_price(symbol)
