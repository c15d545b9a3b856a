"""Tests for scene placement and timed selection."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from stockfolio.scene.selection import PlaneAnchor, SelectionController

if TYPE_CHECKING:
    from collections.abc import Callable

    from stockfolio.portfolio.models import Position


@pytest.fixture
def positions(make_position: Callable[..., Position]) -> list[Position]:
    return [make_position("AAPL"), make_position("MSFT")]


class TestPlacement:
    def test_first_horizontal_anchor_places(self, positions: list[Position]) -> None:
        controller = SelectionController(positions)

        controller.on_anchor_detected(PlaneAnchor("wall", horizontal=False))
        assert not controller.is_placed

        controller.on_anchor_detected(PlaneAnchor("floor"))
        controller.on_anchor_detected(PlaneAnchor("table"))

        assert controller.anchor == PlaneAnchor("floor")
        assert [b.symbol for b in controller.bars] == ["AAPL", "MSFT"]

    def test_reset_allows_replacement(self, positions: list[Position]) -> None:
        controller = SelectionController(positions)
        controller.on_anchor_detected(PlaneAnchor("floor"))

        controller.reset()
        controller.on_anchor_detected(PlaneAnchor("table"))

        assert controller.anchor == PlaneAnchor("table")

    def test_update_positions_relayouts(
        self, positions: list[Position], make_position: Callable[..., Position]
    ) -> None:
        controller = SelectionController(positions)
        controller.on_anchor_detected(PlaneAnchor("floor"))

        controller.update_positions([*positions, make_position("NVDA")])

        assert len(controller.bars) == 3


class TestSelection:
    @pytest.mark.asyncio
    async def test_tap_selects_and_notifies(self, positions: list[Position]) -> None:
        controller = SelectionController(positions)
        seen: list[str | None] = []
        controller.subscribe(lambda p: seen.append(p.symbol if p else None))

        controller.on_tap("MSFT")
        controller.dismiss()

        assert seen == ["MSFT", None]

    @pytest.mark.asyncio
    async def test_missed_or_unknown_tap_is_ignored(self, positions: list[Position]) -> None:
        controller = SelectionController(positions)

        controller.on_tap(None)
        controller.on_tap("TSLA")

        assert controller.selected is None

    @pytest.mark.asyncio
    async def test_selection_auto_dismisses(self, positions: list[Position]) -> None:
        controller = SelectionController(positions, dismiss_after=0.01)

        controller.on_tap("AAPL")
        assert controller.selected is positions[0]
        await asyncio.sleep(0.05)

        assert controller.selected is None

    @pytest.mark.asyncio
    async def test_reselect_cancels_previous_timer(self, positions: list[Position]) -> None:
        controller = SelectionController(positions, dismiss_after=0.2)

        controller.on_tap("AAPL")
        await asyncio.sleep(0.1)
        controller.on_tap("MSFT")
        await asyncio.sleep(0.15)

        # The AAPL timer would have fired by now; MSFT's has not.
        assert controller.selected is positions[1]
        await asyncio.sleep(0.15)
        assert controller.selected is None

    @pytest.mark.asyncio
    async def test_manual_dismiss_cancels_timer(self, positions: list[Position]) -> None:
        controller = SelectionController(positions, dismiss_after=0.01)
        seen: list[str | None] = []
        controller.subscribe(lambda p: seen.append(p.symbol if p else None))

        controller.on_tap("AAPL")
        controller.dismiss()
        await asyncio.sleep(0.03)

        assert seen == ["AAPL", None]
