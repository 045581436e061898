"""Linked drawing panels."""

from .base import EntityPanel, Panel, PanelFrame
from .curves import CurveChart
from .heatmap import HeatmapPanel
from .scatter import ScatterPlot

__all__ = [
    "Panel",
    "EntityPanel",
    "PanelFrame",
    "HeatmapPanel",
    "CurveChart",
    "ScatterPlot",
]
