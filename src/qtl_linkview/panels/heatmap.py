"""HeatmapPanel: LOD scores as colored cells on chromosome tracks."""

from __future__ import annotations

import logging

from ..config import HeatmapOptions
from ..core.color_scale import DivergingColorScale, symmetric_limit
from ..core.errors import ConfigurationError
from ..core.lod_data import LodData
from ..core.scales import LinearScale
from ..layout.axis import compute_ticks
from ..layout.cell_projector import CellKey, CellProjector, CellRecord
from ..layout.chromosome_layout import ChromosomeLayout
from ..scene.surface import Surface
from .base import Panel, PanelFrame

logger = logging.getLogger(__name__)

EMPHASIS_STROKE = "black"


class HeatmapPanel(Panel):
    """Genome-scan heatmap: one row per trait, one cell per marker.

    Cells are keyed by :class:`CellKey`. Hovering a cell outlines it and
    reveals its trait label; labels are hidden otherwise because there
    are usually too many to show at once.
    """

    def __init__(self, surface: Surface, options: HeatmapOptions | None = None) -> None:
        options = options or HeatmapOptions()
        frame = PanelFrame(
            width=options.width, height=options.height, margin=options.margin,
            axispos=options.axispos, titlepos=options.titlepos, rectcolor=options.rectcolor,
        )
        super().__init__(surface, frame)
        self._options = options
        self._layout: ChromosomeLayout | None = None
        self._color_scale: DivergingColorScale | None = None
        self._row_scale: LinearScale | None = None
        self._cells: dict[CellKey, CellRecord] = {}
        self._labels: tuple[str, ...] = ()
        self._label_handles: dict[int, int] = {}

    # --- Model ---

    @property
    def layout(self) -> ChromosomeLayout | None:
        return self._layout

    @property
    def color_scale(self) -> DivergingColorScale | None:
        return self._color_scale

    @property
    def row_scale(self) -> LinearScale | None:
        return self._row_scale

    @property
    def cells(self) -> dict[CellKey, CellRecord]:
        return dict(self._cells)

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    def label_handle(self, trait_index: int) -> int | None:
        """Handle of the hidden y-axis label for a trait (None with a quantitative axis)."""
        return self._label_handles.get(trait_index)

    def build_model(self, lod: LodData) -> None:
        """Compute layout, color scale and cells without drawing anything."""
        opts = self._options
        lod.validate()
        n_traits = lod.n_traits
        if n_traits == 0:
            raise ConfigurationError("The LOD dataset has no traits to draw.")

        labels = opts.lod_labels if opts.lod_labels is not None else lod.trait_names
        if len(labels) != n_traits:
            raise ConfigurationError(
                f"Got {len(labels)} trait labels for {n_traits} traits."
            )
        if opts.quant_scale is not None and len(opts.quant_scale) != n_traits:
            raise ConfigurationError(
                f"quant_scale has {len(opts.quant_scale)} values for {n_traits} traits."
            )

        values = lod.all_values()
        if opts.zlim is not None:
            color_scale = DivergingColorScale(opts.zlim, opts.colors, null_color=opts.nullcolor)
        else:
            color_scale = DivergingColorScale.from_values(
                values, opts.colors, null_color=opts.nullcolor
            )

        area = self._frame.plot_area
        layout = ChromosomeLayout.build(
            lod.chromosomes, lod.positions_by_chromosome,
            total_width=area.width, gap=opts.chr_gap,
            offset=area.x, min_width=opts.min_chr_width,
        )
        row_scale = LinearScale((-0.5, n_traits - 0.5), (area.bottom, area.y))
        cells = CellProjector.project(lod, layout, row_scale, threshold=opts.zthresh)

        self._layout = layout
        self._color_scale = color_scale
        self._row_scale = row_scale
        self._cells = CellProjector.index_by_key(cells)
        self._labels = tuple(str(label) for label in labels)
        logger.debug(
            "HeatmapPanel '%s': %d cells, color limit %.3g",
            self.name, len(self._cells), symmetric_limit(values),
        )

    # --- Drawing ---

    def bind(self, lod: LodData) -> None:
        """Build the model, then draw boxes, axes, cells and outlines."""
        self.build_model(lod)
        self._reset()
        self._label_handles = {}
        opts = self._options
        area = self._frame.plot_area
        row_height = area.height / len(self._labels)

        for scale in self._layout.scales:
            self._surface.add(
                "rect", layer="boxes", x=scale.range_start, y=area.y,
                width=scale.width, height=area.height, fill=opts.rectcolor, stroke="none",
            )
            self._surface.add(
                "text", layer="axis", x=scale.center, y=area.bottom + opts.axispos.xlabel,
                text=str(scale.chromosome), role="xtick",
            )
        self._draw_titles(opts.title, opts.xlab, opts.ylab)
        self._draw_y_axis(row_height)

        for key, cell in self._cells.items():
            handle = self._surface.add(
                "rect", layer="cells",
                x=cell.left_pixel, y=cell.row_pixel_center - row_height / 2,
                width=cell.width, height=row_height,
                fill=self._color_scale.map(None if cell.is_missing else cell.value),
                stroke="none", stroke_width=1.0,
                tooltip=self.tooltip(key),
            )
            self._register(key, handle)

        for scale in self._layout.scales:
            self._surface.add(
                "rect", layer="outline", x=scale.range_start, y=area.y,
                width=scale.width, height=area.height, fill="none", stroke="black",
            )

    def _draw_y_axis(self, row_height: float) -> None:
        opts = self._options
        area = self._frame.plot_area
        x = area.x - opts.axispos.ylabel
        if opts.quant_scale is not None:
            quant = LinearScale(
                (float(opts.quant_scale[0]), float(opts.quant_scale[-1])),
                (area.bottom - row_height / 2, area.y + row_height / 2),
            )
            for tick in compute_ticks(quant, opts.nyticks, opts.yticks):
                self._surface.add("text", layer="axis", x=x, y=tick.position,
                                  text=tick.text, role="ytick")
            return
        for i, label in enumerate(self._labels):
            self._label_handles[i] = self._surface.add(
                "text", layer="axis", x=x, y=self._row_scale(i), text=label,
                role="ylabel", opacity=0.0,
            )

    def tooltip(self, key: CellKey) -> str:
        cell = self._cells[key]
        value = "NA" if cell.is_missing else f"{abs(cell.value):.2f}"
        return f"{cell.chromosome}@{cell.position:.1f}, {self._labels[cell.trait_index]} → {value}"

    # --- Emphasis ---

    def emphasize(self, key: CellKey) -> None:
        handle = self.element_for(key)
        self._surface.update(handle, stroke=EMPHASIS_STROKE)
        self._set_label_opacity(key[2], 1.0)
        self._emphasized.add(key)

    def deemphasize(self, key: CellKey) -> None:
        handle = self.element_for(key)
        self._surface.update(handle, stroke="none")
        self._set_label_opacity(key[2], 0.0)
        self._emphasized.discard(key)

    def _set_label_opacity(self, trait_index: int, opacity: float) -> None:
        handle = self._label_handles.get(int(trait_index))
        if handle is not None:
            self._surface.update(handle, opacity=opacity)
