"""Pixel layout: chromosome tracks, cells, ticks and panel placement."""

from .cell_projector import CellKey, CellProjector, CellRecord
from .chromosome_layout import ChromosomeLayout, PositionScale
from .geometry import Rect

__all__ = [
    "CellKey",
    "CellProjector",
    "CellRecord",
    "ChromosomeLayout",
    "PositionScale",
    "Rect",
]
