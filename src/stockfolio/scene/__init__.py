"""Data support for the 3D portfolio scene: bar layout and selection."""

from stockfolio.scene.layout import BarSpec, BarTone, layout_bars
from stockfolio.scene.selection import PlaneAnchor, SceneEventListener, SelectionController

__all__ = [
    "BarSpec",
    "BarTone",
    "PlaneAnchor",
    "SceneEventListener",
    "SelectionController",
    "layout_bars",
]
