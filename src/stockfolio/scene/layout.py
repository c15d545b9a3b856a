"""Bar layout for the 3D portfolio scene (data only, no geometry)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from stockfolio.constants import (
    SCENE_BAR_SPACING,
    SCENE_BAR_WIDTH,
    SCENE_HEIGHT_SCALE,
    SCENE_LABEL_OFFSET,
    SCENE_MAX_COLUMNS,
    SCENE_MIN_BAR_HEIGHT,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from stockfolio.portfolio.models import Position


class BarTone(str, Enum):
    """Bar colouring by performance."""

    GAIN = "gain"
    LOSS = "loss"
    FLAT = "flat"

    @classmethod
    def for_change(cls, gain_loss_percent: float) -> BarTone:
        if gain_loss_percent > 0:
            return cls.GAIN
        if gain_loss_percent < 0:
            return cls.LOSS
        return cls.FLAT


@dataclass(frozen=True)
class BarSpec:
    """Placement of one position's bar relative to the portfolio anchor (scene units)."""

    symbol: str
    x: float
    z: float
    height: float
    weight: float
    tone: BarTone
    width: float = SCENE_BAR_WIDTH

    @property
    def y(self) -> float:
        """Bar centre height (bars stand on the anchor plane)."""
        return self.height / 2

    @property
    def label_y(self) -> float:
        return self.height + SCENE_LABEL_OFFSET


def layout_bars(positions: Sequence[Position]) -> list[BarSpec]:
    """
    Lay positions out on a grid of at most SCENE_MAX_COLUMNS columns.

    Bar height grows with the position's share of total value; an empty or
    non-positive total gives every bar the minimum height.
    """
    if not positions:
        return []

    total = sum(p.current_value for p in positions)
    columns = min(len(positions), SCENE_MAX_COLUMNS)
    bars: list[BarSpec] = []
    for index, position in enumerate(positions):
        row, col = divmod(index, columns)
        weight = max(position.current_value / total, 0.0) if total > 0 else 0.0
        bars.append(
            BarSpec(
                symbol=position.symbol,
                x=(col - columns / 2) * SCENE_BAR_SPACING,
                z=row * SCENE_BAR_SPACING,
                height=weight * SCENE_HEIGHT_SCALE + SCENE_MIN_BAR_HEIGHT,
                weight=weight,
                tone=BarTone.for_change(position.gain_loss_percent),
            )
        )
    return bars
