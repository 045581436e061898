"""Data models, scales and validation."""

from .color_scale import DivergingColorScale
from .dataset import CurveData, LinkedDataset, ScatterData
from .entity_index import EntityIndex
from .lod_data import LodData
from .scales import LinearScale

__all__ = [
    "DivergingColorScale",
    "CurveData",
    "LinkedDataset",
    "ScatterData",
    "EntityIndex",
    "LodData",
    "LinearScale",
]
