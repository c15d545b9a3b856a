"""Scene interaction: anchor placement and tapped-position selection.

The rendering host forwards its session and gesture callbacks to a
`SceneEventListener`; everything else here is host-agnostic.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import structlog

from stockfolio.constants import SELECTION_AUTO_DISMISS_SECONDS
from stockfolio.scene.layout import BarSpec, layout_bars

if TYPE_CHECKING:
    import uuid
    from collections.abc import Callable, Sequence

    from stockfolio.portfolio.models import Position

    SelectionListener = Callable[[Position | None], None]

logger = structlog.get_logger()


@dataclass(frozen=True)
class PlaneAnchor:
    """A detected surface reported by the host."""

    id: str
    horizontal: bool = True


class SceneEventListener(Protocol):
    """Callbacks a rendering host delivers to the core."""

    def on_anchor_detected(self, anchor: PlaneAnchor) -> None: ...

    def on_tap(self, symbol: str | None) -> None: ...


class SelectionController:
    """
    Tracks scene placement and the currently selected position.

    A selection dismisses itself after `dismiss_after` seconds. The pending timer is
    keyed by the selected position's id and is cancelled when the selection changes
    or is dismissed first. Timers need a running asyncio loop.
    """

    def __init__(
        self,
        positions: Sequence[Position],
        dismiss_after: float = SELECTION_AUTO_DISMISS_SECONDS,
    ) -> None:
        self._positions = list(positions)
        self._dismiss_after = dismiss_after
        self._pending: dict[uuid.UUID, asyncio.TimerHandle] = {}
        self._listeners: list[SelectionListener] = []
        self.anchor: PlaneAnchor | None = None
        self.bars: list[BarSpec] = []
        self.selected: Position | None = None

    @property
    def is_placed(self) -> bool:
        return self.anchor is not None

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        """Register a selection-change callback. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.selected)

    # ==================== SceneEventListener ====================

    def on_anchor_detected(self, anchor: PlaneAnchor) -> None:
        """Place the portfolio on the first horizontal plane; later anchors are ignored."""
        if self.anchor is not None or not anchor.horizontal:
            return
        self.anchor = anchor
        self.bars = layout_bars(self._positions)
        logger.info("Placed portfolio", anchor=anchor.id, bars=len(self.bars))

    def on_tap(self, symbol: str | None) -> None:
        """Select the tapped position. Misses and unknown symbols are ignored."""
        if symbol is None:
            logger.debug("Tap missed all bars")
            return
        position = next((p for p in self._positions if p.symbol == symbol), None)
        if position is None:
            logger.debug("Tap on unknown symbol", symbol=symbol)
            return
        self.select(position)

    # ==================== Selection ====================

    def _cancel_pending(self) -> None:
        for handle in self._pending.values():
            handle.cancel()
        self._pending.clear()

    def select(self, position: Position) -> None:
        """Select a position and (re)start its auto-dismiss timer."""
        self._cancel_pending()
        self.selected = position
        loop = asyncio.get_running_loop()
        self._pending[position.id] = loop.call_later(
            self._dismiss_after, self._expire, position.id
        )
        self._notify()

    def _expire(self, position_id: uuid.UUID) -> None:
        self._pending.pop(position_id, None)
        if self.selected is not None and self.selected.id == position_id:
            self.dismiss()

    def dismiss(self) -> None:
        """Clear the selection and cancel any pending timer."""
        self._cancel_pending()
        if self.selected is None:
            return
        self.selected = None
        self._notify()

    def reset(self) -> None:
        """Drop the selection and placement so the next anchor places the portfolio again."""
        self.dismiss()
        self.anchor = None
        self.bars = []

    def update_positions(self, positions: Sequence[Position]) -> None:
        """Replace the known positions; the layout is recomputed if already placed."""
        self._positions = list(positions)
        if self.anchor is not None:
            self.bars = layout_bars(self._positions)
