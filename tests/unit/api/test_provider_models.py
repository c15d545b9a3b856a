"""Tests for provider response models."""

from __future__ import annotations

import pytest

from stockfolio.api.models import (
    CompanyOverview,
    ProviderNotice,
    QuoteResponse,
    TimeSeriesResponse,
    parse_price,
)
from tests.payloads import overview_payload, quote_payload, time_series_payload


class TestParsePrice:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("150.2500", 150.25), ("0", 0.0), ("  12.5 ", 12.5)],
    )
    def test_numeric(self, raw: str, expected: float) -> None:
        assert parse_price(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", [None, "", "n/a", "nan", "inf"])
    def test_unusable(self, raw: str | None) -> None:
        assert parse_price(raw) is None


class TestResponseModels:
    def test_global_quote_aliases(self) -> None:
        quote = QuoteResponse.model_validate(quote_payload("99.10")).global_quote
        assert quote.symbol == "AAPL"
        assert quote.price_value == pytest.approx(99.10)
        assert quote.change_percent == "0.8389%"

    def test_overview_ignores_unknown_fields(self) -> None:
        overview = CompanyOverview.model_validate({**overview_payload(), "PERatio": "30"})
        assert overview.name == "Apple Inc"

    def test_time_series_close_lookup(self) -> None:
        series = TimeSeriesResponse.model_validate(time_series_payload({"2024-03-01": "10.5"}))
        assert series.close_on("2024-03-01") == pytest.approx(10.5)
        assert series.close_on("2024-03-02") is None

    def test_notice_prefers_note_then_information(self) -> None:
        assert ProviderNotice.model_validate({"Note": "a"}).rate_limit_message == "a"
        assert ProviderNotice.model_validate({"Information": "b"}).rate_limit_message == "b"
        assert ProviderNotice.model_validate({}).rate_limit_message is None
