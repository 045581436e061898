"""ViewConfig: immutable chart options, resolved once per render.

Every option has a documented default and can be overridden on its
own. ``ViewConfig.from_dict`` accepts nested sections
(``{"curves": {"xlim": [0, 1]}}``), the flat prefixed spelling used by
chart option lists (``{"curves_xlim": [0, 1], "scat1_title": "A"}``)
and camelCase names (``chrGap``, ``xNA``).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

from .core.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Default sizes
DEFAULT_HEATMAP_WIDTH = 1200.0
DEFAULT_HEATMAP_HEIGHT = 600.0
DEFAULT_VIEW_WIDTH = 1000.0
DEFAULT_HTOP = 500.0
DEFAULT_HBOT = 500.0
DEFAULT_TITLEPOS = 20.0
DEFAULT_RECTCOLOR = "#e6e6e6"
DEFAULT_NULLCOLOR = "#e6e6e6"
DEFAULT_HEATMAP_COLORS = ("slateblue", "white", "crimson")


@dataclass(frozen=True)
class Margin:
    left: float = 60.0
    top: float = 40.0
    right: float = 40.0
    bottom: float = 40.0
    inner: float = 5.0


@dataclass(frozen=True)
class AxisPos:
    """Offsets of axis titles and tick labels from the plotting area."""

    xtitle: float = 25.0
    ytitle: float = 30.0
    xlabel: float = 5.0
    ylabel: float = 5.0


@dataclass(frozen=True)
class NAHandling:
    """Where scatter points with a missing coordinate go.

    With ``handle`` they are drawn in a strip ``width`` px wide, ``gap``
    px outside the plotting area; ``force`` reserves the strip even when
    nothing is missing.
    """

    handle: bool = True
    force: bool = False
    width: float = 15.0
    gap: float = 10.0


@dataclass(frozen=True)
class HeatmapOptions:
    width: float = DEFAULT_HEATMAP_WIDTH
    height: float = DEFAULT_HEATMAP_HEIGHT
    margin: Margin = field(default_factory=Margin)
    axispos: AxisPos = field(default_factory=AxisPos)
    chr_gap: float = 8.0
    min_chr_width: float = 4.0
    titlepos: float = DEFAULT_TITLEPOS
    rectcolor: str = DEFAULT_RECTCOLOR
    nullcolor: str = DEFAULT_NULLCOLOR
    colors: tuple = DEFAULT_HEATMAP_COLORS
    zlim: tuple | None = None
    zthresh: float | None = None
    quant_scale: tuple | None = None
    lod_labels: tuple | None = None
    nyticks: int = 5
    yticks: tuple | None = None
    title: str = ""
    xlab: str = "Chromosome"
    ylab: str = ""


@dataclass(frozen=True)
class PanelOptions:
    """Axis options for a curve chart or scatter plot."""

    xlim: tuple | None = None
    ylim: tuple | None = None
    nxticks: int = 5
    xticks: tuple | None = None
    nyticks: int = 5
    yticks: tuple | None = None
    title: str = ""
    xlab: str = "X"
    ylab: str = "Y"
    x_na: NAHandling = field(default_factory=NAHandling)
    y_na: NAHandling = field(default_factory=NAHandling)


@dataclass(frozen=True)
class LinkStyle:
    """Baseline and highlighted looks of linked curves and points.

    Colors left as None come from the group palettes (light for
    baseline, dark for highlighted).
    """

    pointcolor: Any = None
    pointcolorhilit: Any = None
    pointsize: float = 3.0
    pointsizehilit: float = 6.0
    pointstroke: str = "black"
    strokecolor: Any = None
    strokecolorhilit: Any = None
    strokewidth: float = 2.0
    strokewidthhilit: float = 2.0


@dataclass(frozen=True)
class ViewConfig:
    """All options of one linked view."""

    width: float = DEFAULT_VIEW_WIDTH
    htop: float = DEFAULT_HTOP
    hbot: float = DEFAULT_HBOT
    margin: Margin = field(default_factory=Margin)
    axispos: AxisPos = field(default_factory=AxisPos)
    titlepos: float = DEFAULT_TITLEPOS
    rectcolor: str = DEFAULT_RECTCOLOR
    heatmap: HeatmapOptions = field(default_factory=HeatmapOptions)
    curves: PanelOptions = field(default_factory=PanelOptions)
    scatter1: PanelOptions = field(default_factory=PanelOptions)
    scatter2: PanelOptions = field(default_factory=PanelOptions)
    style: LinkStyle = field(default_factory=LinkStyle)

    def __post_init__(self) -> None:
        for name in ("width", "htop", "hbot"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}.")
        if self.heatmap.width <= 0 or self.heatmap.height <= 0:
            raise ConfigurationError("Heatmap width and height must be positive.")
        if self.style.pointsize < 0 or self.style.strokewidth < 0:
            raise ConfigurationError("Point size and stroke width must be >= 0.")

    @classmethod
    def from_dict(cls, options: Mapping[str, Any] | None = None) -> ViewConfig:
        """Resolve a (possibly partial) option mapping against the defaults."""
        if options is None:
            return cls()
        if isinstance(options, ViewConfig):
            return options
        if not isinstance(options, Mapping):
            raise ConfigurationError(
                f"Chart options must be a mapping, got {type(options).__name__}."
            )

        sections: dict[str, dict[str, Any]] = {
            "heatmap": {}, "curves": {}, "scatter1": {}, "scatter2": {}, "style": {},
        }
        top: dict[str, Any] = {}
        for raw_key, value in options.items():
            key = _snake(raw_key)
            if key in sections:
                if not isinstance(value, Mapping):
                    raise ConfigurationError(f"Option section '{raw_key}' must be a mapping.")
                sections[key].update({_snake(k): v for k, v in value.items()})
                continue
            prefix, _, rest = key.partition("_")
            if prefix in _PREFIXES and rest:
                sections[_PREFIXES[prefix]][rest] = value
            elif key in ("color", "colorhilit"):
                suffix = key[len("color"):]
                sections["style"].setdefault(f"pointcolor{suffix}", value)
                sections["style"].setdefault(f"strokecolor{suffix}", value)
            elif key in ("xlab", "ylab"):
                # axis titles of the curve chart; curves_xlab/curves_ylab win
                sections["curves"].setdefault(key, value)
            elif key in _STYLE_FIELDS:
                sections["style"][key] = value
            elif key in _VIEW_FIELDS:
                top[key] = value
            elif key in _HEATMAP_ONLY_FIELDS:
                sections["heatmap"][key] = value
            else:
                raise ConfigurationError(f"Unknown chart option '{raw_key}'.")

        margin = _build(Margin, top.pop("margin", None), "margin")
        axispos = _build(AxisPos, top.pop("axispos", None), "axispos")
        sections["heatmap"].setdefault("margin", margin)
        sections["heatmap"].setdefault("axispos", axispos)
        for shared in ("titlepos", "rectcolor"):
            if shared in top:
                sections["heatmap"].setdefault(shared, top[shared])

        logger.debug("Resolving %d chart option(s) against defaults", len(options))
        return cls(
            margin=margin,
            axispos=axispos,
            heatmap=_build(HeatmapOptions, sections["heatmap"], "heatmap"),
            curves=_build(PanelOptions, sections["curves"], "curves"),
            scatter1=_build(PanelOptions, sections["scatter1"], "scatter1"),
            scatter2=_build(PanelOptions, sections["scatter2"], "scatter2"),
            style=_build(LinkStyle, sections["style"], "style"),
            **top,
        )


_PREFIXES = {"heatmap": "heatmap", "curves": "curves", "scat1": "scatter1", "scat2": "scatter2"}
_STYLE_FIELDS = {f.name for f in fields(LinkStyle)}
_VIEW_FIELDS = {f.name for f in fields(ViewConfig)} - {
    "heatmap", "curves", "scatter1", "scatter2", "style",
}
_HEATMAP_ONLY_FIELDS = {
    "chr_gap", "min_chr_width", "nullcolor", "colors", "zlim", "zthresh",
    "quant_scale", "lod_labels",
}
_NESTED = {"margin": Margin, "axispos": AxisPos, "x_na": NAHandling, "y_na": NAHandling}
_TUPLE_FIELDS = {"colors", "zlim", "quant_scale", "lod_labels", "yticks", "xticks", "xlim", "ylim"}
_LIMIT_FIELDS = {"xlim", "ylim"}


def _snake(key: str) -> str:
    """``chrGap`` -> ``chr_gap``, ``xNA`` -> ``x_na``; snake_case passes through."""
    key = re.sub(r"NA$", "_na", key)
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", key).lower()


def _build(cls: type, overrides: Any, section: str) -> Any:
    """Instantiate ``cls`` from defaults plus ``overrides`` (a mapping or instance)."""
    if overrides is None:
        return cls()
    if isinstance(overrides, cls):
        return overrides
    if not isinstance(overrides, Mapping):
        raise ConfigurationError(f"Option '{section}' must be a mapping.")
    overrides = {_snake(k): v for k, v in overrides.items()}
    known = {f.name for f in fields(cls)}
    unknown = [k for k in overrides if k not in known]
    if unknown:
        raise ConfigurationError(f"Unknown {section} option(s): {unknown}")
    values: dict[str, Any] = {}
    for key, value in overrides.items():
        if key in _NESTED and not isinstance(value, _NESTED[key]):
            value = _build(_NESTED[key], value, f"{section}.{key}")
        elif key in _TUPLE_FIELDS and value is not None:
            value = tuple(value)
            if key in _LIMIT_FIELDS and len(value) != 2:
                raise ConfigurationError(
                    f"{section}.{key} must have two values (low, high), got {list(value)}."
                )
        values[key] = value
    return replace(cls(), **values)
