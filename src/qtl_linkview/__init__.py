"""qtl-linkview: linked LOD heatmaps, curve charts and scatter plots."""

import logging

from ._version import __version__
from .api import ViewHandle, render
from .config import ViewConfig
from .core.dataset import CurveData, LinkedDataset, ScatterData
from .core.errors import (
    ConfigurationError,
    DataShapeError,
    LinkViewError,
    OutOfDomainError,
)
from .core.lod_data import LodData
from .scene.canvas import Canvas

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "render",
    "ViewHandle",
    "ViewConfig",
    "Canvas",
    "LodData",
    "CurveData",
    "ScatterData",
    "LinkedDataset",
    "LinkViewError",
    "ConfigurationError",
    "OutOfDomainError",
    "DataShapeError",
]
