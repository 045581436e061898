"""Tests for ViewConfig option resolution."""

from dataclasses import FrozenInstanceError

import pytest

from qtl_linkview.config import HeatmapOptions, Margin, NAHandling, ViewConfig
from qtl_linkview.core.errors import ConfigurationError


class TestDefaults:
    def test_view_defaults(self):
        cfg = ViewConfig()
        assert (cfg.width, cfg.htop, cfg.hbot) == (1000.0, 500.0, 500.0)
        assert cfg.margin == Margin(60.0, 40.0, 40.0, 40.0, 5.0)
        assert cfg.style.pointsize == 3.0
        assert cfg.style.pointsizehilit == 6.0
        assert cfg.style.strokewidth == 2.0

    def test_heatmap_defaults(self):
        hm = HeatmapOptions()
        assert hm.chr_gap == 8.0
        assert hm.colors == ("slateblue", "white", "crimson")
        assert hm.nullcolor == "#e6e6e6"
        assert hm.zthresh is None

    def test_na_defaults(self):
        assert ViewConfig().scatter1.x_na == NAHandling(True, False, 15.0, 10.0)

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ViewConfig().width = 10

    def test_none_gives_defaults(self):
        assert ViewConfig.from_dict(None) == ViewConfig()

    def test_config_passes_through(self):
        cfg = ViewConfig(width=800)
        assert ViewConfig.from_dict(cfg) is cfg


class TestFromDict:
    def test_nested_sections(self):
        cfg = ViewConfig.from_dict({"curves": {"xlim": [0, 1], "title": "Growth"}})
        assert cfg.curves.xlim == (0, 1)
        assert cfg.curves.title == "Growth"
        assert cfg.scatter1.title == ""

    def test_flat_prefixed_keys(self):
        cfg = ViewConfig.from_dict({"scat1_title": "A", "scat2_xlab": "Sex", "curves_ylab": "cm"})
        assert cfg.scatter1.title == "A"
        assert cfg.scatter2.xlab == "Sex"
        assert cfg.curves.ylab == "cm"

    def test_camel_case_keys(self):
        cfg = ViewConfig.from_dict({"chrGap": 12, "scat1_xNA": {"handle": False}})
        assert cfg.heatmap.chr_gap == 12
        assert cfg.scatter1.x_na.handle is False
        assert cfg.scatter1.x_na.width == 15.0

    def test_camel_case_inside_section(self):
        cfg = ViewConfig.from_dict({"scatter2": {"yNA": {"force": True}}})
        assert cfg.scatter2.y_na.force is True

    def test_heatmap_options_flat(self):
        cfg = ViewConfig.from_dict({"zthresh": 2.5, "zlim": [-4, 0, 4], "colors": ["blue", "white", "red"]})
        assert cfg.heatmap.zthresh == 2.5
        assert cfg.heatmap.zlim == (-4, 0, 4)
        assert cfg.heatmap.colors == ("blue", "white", "red")

    def test_style_options_flat(self):
        cfg = ViewConfig.from_dict({"pointsizehilit": 8, "strokewidthhilit": 3})
        assert cfg.style.pointsizehilit == 8
        assert cfg.style.strokewidthhilit == 3

    def test_color_alias_sets_points_and_strokes(self):
        cfg = ViewConfig.from_dict({"color": "red", "colorhilit": ["blue", "green"]})
        assert cfg.style.pointcolor == "red"
        assert cfg.style.strokecolor == "red"
        assert cfg.style.pointcolorhilit == ["blue", "green"]

    def test_specific_color_beats_alias(self):
        cfg = ViewConfig.from_dict({"color": "red", "pointcolor": "blue"})
        assert cfg.style.pointcolor == "blue"
        assert cfg.style.strokecolor == "red"

    def test_axis_title_alias_labels_curves(self):
        cfg = ViewConfig.from_dict({"xlab": "Time", "ylab": "Weight"})
        assert cfg.curves.xlab == "Time"
        assert cfg.curves.ylab == "Weight"
        assert cfg.scatter1.xlab == "X"

    @pytest.mark.parametrize("options", [
        {"xlab": "Time", "curves_xlab": "Hours"},
        {"curves_xlab": "Hours", "xlab": "Time"},
        {"xlab": "Time", "curves": {"xlab": "Hours"}},
    ])
    def test_specific_axis_title_beats_alias(self, options):
        assert ViewConfig.from_dict(options).curves.xlab == "Hours"

    def test_view_sizes(self):
        cfg = ViewConfig.from_dict({"htop": 300, "width": 800})
        assert cfg.htop == 300
        assert cfg.width == 800

    def test_shared_margin_reaches_heatmap(self):
        cfg = ViewConfig.from_dict({"margin": {"left": 80}, "titlepos": 10})
        assert cfg.margin.left == 80
        assert cfg.margin.top == 40.0
        assert cfg.heatmap.margin.left == 80
        assert cfg.heatmap.titlepos == 10

    def test_heatmap_section_overrides_shared_margin(self):
        cfg = ViewConfig.from_dict({"margin": {"left": 80}, "heatmap": {"margin": {"left": 20}}})
        assert cfg.heatmap.margin.left == 20


class TestFromDictErrors:
    def test_unknown_option_raises(self):
        with pytest.raises(ConfigurationError, match="Unknown chart option 'bogus'"):
            ViewConfig.from_dict({"bogus": 1})

    def test_unknown_section_key_raises(self):
        with pytest.raises(ConfigurationError, match="Unknown curves option"):
            ViewConfig.from_dict({"curves": {"zthresh": 1}})

    def test_limits_need_two_values(self):
        with pytest.raises(ConfigurationError, match="two values"):
            ViewConfig.from_dict({"scat1_xlim": [0, 1, 2]})

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            ViewConfig.from_dict({"curves": [1, 2]})

    def test_non_mapping_raises(self):
        with pytest.raises(ConfigurationError, match="mapping"):
            ViewConfig.from_dict([("width", 10)])

    def test_non_positive_size_raises(self):
        with pytest.raises(ConfigurationError, match="width must be positive"):
            ViewConfig.from_dict({"width": 0})

    def test_negative_pointsize_raises(self):
        with pytest.raises(ConfigurationError, match=">= 0"):
            ViewConfig.from_dict({"pointsize": -1})
