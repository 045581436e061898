"""Tests for ViewComposer panel placement."""

import pytest

from qtl_linkview.config import ViewConfig
from qtl_linkview.core.errors import ConfigurationError
from qtl_linkview.layout.composer import ViewComposer
from qtl_linkview.layout.geometry import Rect


class TestViewComposer:
    def test_full_view(self):
        layout = ViewComposer().compose(has_heatmap=True, has_curves=True, n_scatters=2)
        assert layout.panel_names == ["heatmap", "curves", "scatter1", "scatter2"]
        assert layout.rects["heatmap"] == Rect(0.0, 0.0, 1300.0, 680.0)
        assert layout.rects["curves"] == Rect(0.0, 680.0, 1100.0, 580.0)
        assert layout.rects["scatter1"] == Rect(0.0, 1260.0, 550.0, 580.0)
        assert layout.rects["scatter2"] == Rect(550.0, 1260.0, 550.0, 580.0)
        assert layout.total_width == 1300.0
        assert layout.total_height == 1840.0

    def test_scatter_width_splits_curve_width(self):
        layout = ViewComposer().compose(has_heatmap=False, has_curves=True, n_scatters=2)
        assert layout.frames["scatter1"].width == 450.0
        assert layout.rects["scatter2"].right == layout.rects["curves"].right

    def test_curves_only(self):
        layout = ViewComposer(ViewConfig(htop=300)).compose(False, True, 0)
        assert layout.panel_names == ["curves"]
        assert layout.total_height == 380.0
        assert layout.frames["curves"].plot_area == Rect(60.0, 40.0, 1000.0, 300.0)

    def test_scatters_without_curves_start_at_top(self):
        layout = ViewComposer().compose(False, False, 1)
        assert layout.rects["scatter1"].y == 0.0

    def test_too_many_scatters_raise(self):
        with pytest.raises(ConfigurationError, match="0 to 2"):
            ViewComposer().compose(False, True, 3)

    def test_no_room_for_scatters_raises(self):
        with pytest.raises(ConfigurationError, match="no room"):
            ViewComposer(ViewConfig(width=90)).compose(False, True, 1)

    def test_to_dict(self):
        d = ViewComposer().compose(False, True, 0).to_dict()
        assert d["panels"]["curves"]["width"] == 1100.0
