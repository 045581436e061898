"""ViewComposer: places the panels of one linked view on the canvas."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import ViewConfig
from ..core.dataset import MAX_SCATTERS
from ..core.errors import ConfigurationError
from ..panels.base import PanelFrame
from .geometry import Rect

HEATMAP = "heatmap"
CURVES = "curves"
SCATTER_NAMES = ("scatter1", "scatter2")


@dataclass
class ViewLayout:
    """Panel placements plus overall canvas size.

    ``rects`` are outer rectangles (margins included) in canvas
    coordinates; ``frames`` describe each panel's inner plotting area.
    """

    rects: dict[str, Rect] = field(default_factory=dict)
    frames: dict[str, PanelFrame] = field(default_factory=dict)
    total_width: float = 0.0
    total_height: float = 0.0

    @property
    def panel_names(self) -> list[str]:
        return list(self.rects)

    def to_dict(self) -> dict:
        return {
            "total_width": self.total_width,
            "total_height": self.total_height,
            "panels": {name: rect.to_dict() for name, rect in self.rects.items()},
        }


class ViewComposer:
    """Stacks the heatmap, the curve chart and the scatter row.

    The heatmap keeps its own size. The curve chart is ``width`` by
    ``htop`` and each scatter is ``(width - margin.left - margin.right) / 2``
    by ``hbot``, so two scatters with their margins span the curve chart.
    """

    def __init__(self, config: ViewConfig | None = None) -> None:
        self._config = config or ViewConfig()

    def compose(self, has_heatmap: bool, has_curves: bool, n_scatters: int) -> ViewLayout:
        cfg = self._config
        if not 0 <= n_scatters <= MAX_SCATTERS:
            raise ConfigurationError(
                f"A view holds 0 to {MAX_SCATTERS} scatter plots, got {n_scatters}."
            )
        layout = ViewLayout()
        y = 0.0

        if has_heatmap:
            hm = cfg.heatmap
            frame = PanelFrame(hm.width, hm.height, hm.margin, hm.axispos, hm.titlepos, hm.rectcolor)
            self._place(layout, HEATMAP, frame, 0.0, y)
            y += frame.outer_height

        if has_curves:
            frame = self._frame(cfg.width, cfg.htop)
            self._place(layout, CURVES, frame, 0.0, y)
            y += frame.outer_height

        if n_scatters:
            m = cfg.margin
            wbot = (cfg.width - m.left - m.right) / 2
            if wbot <= 0:
                raise ConfigurationError(
                    f"width {cfg.width} leaves no room for scatter plots "
                    f"after margins {m.left} + {m.right}."
                )
            x = 0.0
            for name in SCATTER_NAMES[:n_scatters]:
                frame = self._frame(wbot, cfg.hbot)
                self._place(layout, name, frame, x, y)
                x += frame.outer_width

        layout.total_width = max((r.right for r in layout.rects.values()), default=0.0)
        layout.total_height = max((r.bottom for r in layout.rects.values()), default=0.0)
        return layout

    def _frame(self, width: float, height: float) -> PanelFrame:
        cfg = self._config
        return PanelFrame(width, height, cfg.margin, cfg.axispos, cfg.titlepos, cfg.rectcolor)

    @staticmethod
    def _place(layout: ViewLayout, name: str, frame: PanelFrame, x: float, y: float) -> None:
        layout.frames[name] = frame
        layout.rects[name] = Rect(x, y, frame.outer_width, frame.outer_height)
