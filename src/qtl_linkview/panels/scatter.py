"""ScatterPlot: one point per linked entity."""

from __future__ import annotations

import logging

import numpy as np

from ..config import LinkStyle, NAHandling, PanelOptions
from ..core.dataset import ScatterData
from ..core.entity_index import EntityIndex
from ..core.scales import LinearScale, data_extent
from ..layout.axis import compute_ticks
from ..layout.geometry import Rect
from ..scene.surface import Surface
from .base import EntityPanel, PanelFrame

logger = logging.getLogger(__name__)


def _uses_strip(na: NAHandling, values: np.ndarray) -> bool:
    return na.handle and (na.force or bool(np.isnan(values).any()))


class ScatterPlot(EntityPanel):
    """Points keyed by entity index.

    Points with a missing coordinate go to a strip beside the plotting
    area when the axis handles missing values; otherwise they are not
    drawn and their key has no element in this panel.

    Emphasis enlarges the point, fills it with the group highlight color
    and raises it to the front. Deemphasis only restores size and fill:
    the point stays where it was raised, unlike a curve, which goes back
    under the others.
    """

    def __init__(
        self,
        surface: Surface,
        frame: PanelFrame,
        options: PanelOptions | None = None,
        style: LinkStyle | None = None,
    ) -> None:
        super().__init__(surface, frame)
        self._options = options or PanelOptions()
        self._style = style or LinkStyle()
        self._xscale: LinearScale | None = None
        self._yscale: LinearScale | None = None
        self._data_area: Rect | None = None

    @property
    def xscale(self) -> LinearScale | None:
        return self._xscale

    @property
    def yscale(self) -> LinearScale | None:
        return self._yscale

    @property
    def data_area(self) -> Rect | None:
        """Plotting area left after any missing-value strips."""
        return self._data_area

    def bind(self, scatter: ScatterData, entities: EntityIndex) -> None:
        opts, style = self._options, self._style
        self._bind_entities(entities, scatter.n_entities, style.pointcolor, style.pointcolorhilit)

        x, y = scatter.x, scatter.y
        area = self._frame.plot_area
        x_strip = _uses_strip(opts.x_na, x)
        y_strip = _uses_strip(opts.y_na, y)
        left = opts.x_na.width + opts.x_na.gap if x_strip else 0.0
        bottom = opts.y_na.width + opts.y_na.gap if y_strip else 0.0
        data_area = Rect(area.x + left, area.y, area.width - left, area.height - bottom)

        xlim = opts.xlim or data_extent(x, pad=0.02)
        ylim = opts.ylim or data_extent(y, pad=0.02)
        self._xscale = LinearScale(tuple(xlim), (data_area.x, data_area.right))
        self._yscale = LinearScale(tuple(ylim), (data_area.bottom, data_area.y))
        self._data_area = data_area

        self._reset()
        self._draw_box(data_area, self._frame.rectcolor)
        if x_strip:
            self._draw_box(Rect(area.x, data_area.y, opts.x_na.width, data_area.height),
                           self._frame.rectcolor, role="x_na")
        if y_strip:
            self._draw_box(Rect(data_area.x, area.bottom - opts.y_na.width,
                                data_area.width, opts.y_na.width),
                           self._frame.rectcolor, role="y_na")
        self._draw_ticks(compute_ticks(self._xscale, opts.nxticks, opts.xticks), "x", area=data_area)
        self._draw_ticks(compute_ticks(self._yscale, opts.nyticks, opts.yticks), "y", area=data_area)
        self._draw_titles(opts.title, opts.xlab, opts.ylab, area=area)

        x_na_pixel = area.x + opts.x_na.width / 2
        y_na_pixel = area.bottom - opts.y_na.width / 2
        skipped = 0
        for i in range(scatter.n_entities):
            xi, yi = float(x[i]), float(y[i])
            if (np.isnan(xi) and not x_strip) or (np.isnan(yi) and not y_strip):
                skipped += 1
                continue
            cx = x_na_pixel if np.isnan(xi) else self._xscale(xi)
            cy = y_na_pixel if np.isnan(yi) else self._yscale(yi)
            handle = self._surface.add(
                "circle", layer="points", cx=cx, cy=cy, r=style.pointsize,
                fill=self.baseline_color(i), stroke=style.pointstroke, stroke_width=1.0,
                entity=i,
            )
            self._register(i, handle)
        logger.debug(
            "ScatterPlot '%s': drew %d points, skipped %d with missing values",
            self.name, scatter.n_entities - skipped, skipped,
        )

    def emphasize(self, key: int) -> None:
        handle = self.element_for(key)
        self._surface.update(handle, r=self._style.pointsizehilit, fill=self.highlight_color(key))
        self._surface.raise_to_front(handle)
        self._emphasized.add(key)

    def deemphasize(self, key: int) -> None:
        handle = self.element_for(key)
        self._surface.update(handle, r=self._style.pointsize, fill=self.baseline_color(key))
        self._emphasized.discard(key)
