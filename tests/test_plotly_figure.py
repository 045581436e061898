"""Tests for the plotly surface export."""

import plotly.graph_objects as go
import pytest

from qtl_linkview.export.plotly_figure import TRANSPARENT, surface_to_figure
from qtl_linkview.layout.geometry import Rect
from qtl_linkview.scene.surface import Surface


@pytest.fixture
def drawn_surface():
    s = Surface("demo", Rect(0.0, 0.0, 200.0, 100.0))
    s.add("rect", layer="background", x=10, y=10, width=50, height=20, fill="#e6e6e6", stroke="none")
    s.add("rect", layer="cells", x=10, y=10, width=5, height=5, fill="#ff0000",
          stroke="black", stroke_width=1.0, tooltip="1@5.0, liver → 2.00")
    s.add("line", layer="grid", x1=0, y1=50, x2=200, y2=50, stroke="white")
    s.add("path", layer="curves", points=[[0, 0], [10, 10]], stroke="#6a5acd", stroke_width=2.0,
          fill="none", entity=0)
    s.add("circle", layer="points", cx=5, cy=5, r=3, fill="#bebebe", stroke="black", entity=0)
    s.add("circle", layer="points", cx=8, cy=8, r=6, fill="#6a5acd", stroke="black", entity=1)
    s.add("text", layer="titles", x=5, y=50, text="LOD", rotate=270)
    return s


class TestSurfaceToFigure:
    def test_returns_figure(self, drawn_surface):
        assert isinstance(surface_to_figure(drawn_surface), go.Figure)

    def test_shapes(self, drawn_surface):
        fig = surface_to_figure(drawn_surface)
        kinds = [shape.type for shape in fig.layout.shapes]
        assert kinds == ["rect", "rect", "line"]
        assert fig.layout.shapes[0].line.width == 0

    def test_traces(self, drawn_surface):
        fig = surface_to_figure(drawn_surface)
        modes = [trace.mode for trace in fig.data]
        assert modes == ["lines", "markers", "markers"]
        points = fig.data[1]
        assert list(points.marker.size) == [6, 12]

    def test_tooltip_hover_marker(self, drawn_surface):
        fig = surface_to_figure(drawn_surface)
        assert list(fig.data[2].hovertext) == ["1@5.0, liver → 2.00"]

    def test_rotated_annotation(self, drawn_surface):
        fig = surface_to_figure(drawn_surface)
        assert fig.layout.annotations[0].text == "LOD"
        assert fig.layout.annotations[0].textangle == -90

    def test_y_axis_points_down(self, drawn_surface):
        fig = surface_to_figure(drawn_surface)
        assert tuple(fig.layout.yaxis.range) == (100.0, 0.0)
        assert fig.layout.width == 200

    def test_none_color_is_transparent(self, drawn_surface):
        fig = surface_to_figure(drawn_surface)
        assert fig.layout.shapes[0].line.color == TRANSPARENT

    def test_empty_surface(self):
        fig = surface_to_figure(Surface("empty", Rect(0.0, 0.0, 50.0, 50.0)))
        assert len(fig.data) == 0
