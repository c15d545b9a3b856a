"""Tests for scene bar layout."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from stockfolio.scene.layout import BarTone, layout_bars

if TYPE_CHECKING:
    from collections.abc import Callable

    from stockfolio.portfolio.models import Position


class TestLayoutBars:
    def test_empty(self) -> None:
        assert layout_bars([]) == []

    def test_grid_wraps_after_four_columns(self, make_position: Callable[..., Position]) -> None:
        positions = [make_position(f"S{i}") for i in range(6)]

        bars = layout_bars(positions)

        assert [round(b.x, 6) for b in bars] == [-0.3, -0.15, 0.0, 0.15, -0.3, -0.15]
        assert [round(b.z, 6) for b in bars] == [0.0, 0.0, 0.0, 0.0, 0.15, 0.15]

    def test_fewer_positions_than_columns(self, make_position: Callable[..., Position]) -> None:
        bars = layout_bars([make_position("A"), make_position("B")])
        assert [round(b.x, 6) for b in bars] == [-0.15, 0.0]

    def test_heights_follow_value_share(self, make_position: Callable[..., Position]) -> None:
        big = make_position("BIG", current_price=30.0, trades=[(10, 10.0)])
        small = make_position("SMALL", current_price=10.0, trades=[(10, 10.0)])

        bars = layout_bars([big, small])

        assert bars[0].weight == pytest.approx(0.75)
        assert bars[0].height == pytest.approx(0.75 * 0.5 + 0.05)
        assert bars[1].height == pytest.approx(0.25 * 0.5 + 0.05)
        assert bars[0].y == pytest.approx(bars[0].height / 2)

    def test_zero_total_gives_minimum_heights(
        self, make_position: Callable[..., Position]
    ) -> None:
        bars = layout_bars([make_position(current_price=0.0)])
        assert bars[0].height == pytest.approx(0.05)
        assert bars[0].weight == 0.0

    def test_tones(self, make_position: Callable[..., Position]) -> None:
        gain = make_position("G", current_price=120.0, trades=[(1, 100.0)])
        loss = make_position("L", current_price=80.0, trades=[(1, 100.0)])
        flat = make_position("F", current_price=100.0, trades=[(1, 100.0)])

        assert [b.tone for b in layout_bars([gain, loss, flat])] == [
            BarTone.GAIN,
            BarTone.LOSS,
            BarTone.FLAT,
        ]
