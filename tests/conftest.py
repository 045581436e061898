"""Shared test fixtures for qtl-linkview."""

import pytest

from qtl_linkview import render
from qtl_linkview.core.dataset import CurveData, ScatterData
from qtl_linkview.core.entity_index import EntityIndex
from qtl_linkview.core.lod_data import LodData
from qtl_linkview.layout.geometry import Rect
from qtl_linkview.panels.base import PanelFrame
from qtl_linkview.scene.canvas import Canvas
from qtl_linkview.scene.surface import Surface


@pytest.fixture
def lod_payload():
    """Two chromosomes, two traits, one missing value."""
    return {
        "traitValues": {
            "1": [[1.0, -3.0], [2.5, 0.5], [None, 4.0]],
            "2": [[-1.5, 2.0], [3.0, -2.5]],
        },
        "positions": {"1": [0.0, 50.0, 100.0], "2": [10.0, 60.0]},
        "traitNames": ["liver", "kidney"],
    }


@pytest.fixture
def lod(lod_payload):
    return LodData.from_dict(lod_payload)


@pytest.fixture
def curve_payload():
    """Three curves over a shared x; curve 1 has a gap."""
    return {"x": [0, 1, 2, 3], "data": [[1, 2, 3, 4], [2, 3, None, 5], [0, 1, 1, 2]]}


@pytest.fixture
def scatter_payloads():
    """Two scatters of three entities; the second has a missing x."""
    return [
        {"data": [[1, 2], [2, 3], [3, 1]]},
        {"data": [[0.5, 1.0], [None, 2.0], [1.5, 0.0]]},
    ]


@pytest.fixture
def curves(curve_payload):
    return CurveData.from_dict(curve_payload)


@pytest.fixture
def scatters(scatter_payloads):
    return [ScatterData.from_dict(p) for p in scatter_payloads]


@pytest.fixture
def entities():
    """Three entities in groups b, a, b."""
    return EntityIndex.from_groups(["b", "a", "b"])


@pytest.fixture
def linked_payload(lod_payload, curve_payload, scatter_payloads):
    return {
        **lod_payload,
        "curves": curve_payload,
        "scatters": scatter_payloads,
        "entityGroups": ["b", "a", "b"],
    }


@pytest.fixture
def frame():
    """400x300 plotting area with default margins."""
    return PanelFrame(width=400.0, height=300.0)


@pytest.fixture
def make_surface(frame):
    """Factory for surfaces sized to ``frame``."""
    def _make(name):
        return Surface(name, Rect(0.0, 0.0, frame.outer_width, frame.outer_height))
    return _make


@pytest.fixture
def canvas():
    return Canvas()


@pytest.fixture
def view(canvas, linked_payload):
    """A fully rendered linked view."""
    return render(canvas, linked_payload)
