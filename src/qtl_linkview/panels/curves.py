"""CurveChart: one polyline per linked entity."""

from __future__ import annotations

import logging

import numpy as np

from ..config import LinkStyle, PanelOptions
from ..core.dataset import CurveData
from ..core.entity_index import EntityIndex
from ..core.scales import LinearScale, data_extent
from ..layout.axis import compute_ticks
from ..scene.surface import Surface
from .base import EntityPanel, PanelFrame

logger = logging.getLogger(__name__)


class CurveChart(EntityPanel):
    """Curves keyed by entity index.

    A hovered curve takes its group's highlight color and width and is
    painted above the others; on leave it returns to baseline and drops
    behind its siblings.
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

    @property
    def xscale(self) -> LinearScale | None:
        return self._xscale

    @property
    def yscale(self) -> LinearScale | None:
        return self._yscale

    def bind(self, curves: CurveData, entities: EntityIndex) -> None:
        opts, style = self._options, self._style
        self._bind_entities(entities, curves.n_entities, style.strokecolor, style.strokecolorhilit)

        area = self._frame.plot_area
        xlim = opts.xlim or data_extent(curves.all_x())
        ylim = opts.ylim or data_extent(curves.all_y())
        self._xscale = LinearScale(tuple(xlim), (area.x, area.right))
        self._yscale = LinearScale(tuple(ylim), (area.bottom, area.y))

        self._reset()
        self._draw_box(area, self._frame.rectcolor)
        self._draw_ticks(compute_ticks(self._xscale, opts.nxticks, opts.xticks), "x")
        self._draw_ticks(compute_ticks(self._yscale, opts.nyticks, opts.yticks), "y")
        self._draw_titles(opts.title, opts.xlab, opts.ylab)

        for i, (x, y) in enumerate(zip(curves.xs, curves.ys)):
            defined = np.isfinite(x) & np.isfinite(y)
            points = np.column_stack((
                self._xscale.map_array(x[defined]),
                self._yscale.map_array(y[defined]),
            ))
            handle = self._surface.add(
                "path", layer="curves", points=points.tolist(),
                stroke=self.baseline_color(i), stroke_width=style.strokewidth,
                fill="none", entity=i,
            )
            self._register(i, handle)
        logger.debug("CurveChart '%s': drew %d curves", self.name, curves.n_entities)

    def emphasize(self, key: int) -> None:
        handle = self.element_for(key)
        self._surface.update(handle, stroke=self.highlight_color(key),
                             stroke_width=self._style.strokewidthhilit)
        self._surface.raise_to_front(handle)
        self._emphasized.add(key)

    def deemphasize(self, key: int) -> None:
        handle = self.element_for(key)
        self._surface.update(handle, stroke=self.baseline_color(key),
                             stroke_width=self._style.strokewidth)
        self._surface.lower_to_back(handle)
        self._emphasized.discard(key)
