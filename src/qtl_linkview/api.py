"""render / ViewHandle: the main user-facing API."""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Mapping

from .config import ViewConfig
from .core.dataset import LinkedDataset
from .core.errors import DataShapeError
from .core.lod_data import LodData
from .layout.composer import CURVES, HEATMAP, SCATTER_NAMES, ViewComposer
from .link.coordinator import LinkCoordinator
from .panels.base import Panel
from .panels.curves import CurveChart
from .panels.heatmap import HeatmapPanel
from .panels.scatter import ScatterPlot
from .scene.canvas import Canvas
from .scene.surface import Surface

logger = logging.getLogger(__name__)


def _as_dataset(dataset: Any) -> LinkedDataset:
    if isinstance(dataset, LinkedDataset):
        return dataset
    if isinstance(dataset, LodData):
        return LinkedDataset(lod=dataset)
    if isinstance(dataset, Mapping):
        return LinkedDataset.from_dict(dataset)
    raise DataShapeError(
        f"Expected a dataset mapping, LodData or LinkedDataset, got {type(dataset).__name__}."
    )


def render(
    container: Canvas,
    dataset: Mapping[str, Any] | LinkedDataset | LodData,
    config: Mapping[str, Any] | ViewConfig | None = None,
) -> ViewHandle:
    """Draw a linked view into ``container`` and wire up hover linking.

    Usage::

        import qtl_linkview as ql

        canvas = ql.Canvas()
        view = ql.render(canvas, payload, {"htop": 300, "scat1_xlab": "Sex"})
        view.hover("curves", 3)     # emphasizes curve 3 and its points
        view.destroy()

    Parameters
    ----------
    container : Canvas
        Host container. A view already drawn there is replaced, and its
        handle is destroyed.
    dataset : mapping, LinkedDataset or LodData
        The JSON-like payload (camelCase keys) or parsed data.
    config : mapping or ViewConfig, optional
        Chart options; see :meth:`ViewConfig.from_dict`.

    Raises
    ------
    ConfigurationError, DataShapeError
        For bad options, malformed data or linked datasets whose entity
        counts disagree. Every panel is drawn on its own surface before
        the container is touched, so a rejected view leaves whatever the
        container held untouched.
    """
    cfg = ViewConfig.from_dict(config)
    data = _as_dataset(dataset)

    entities = data.entity_index()
    if data.lod is not None:
        data.lod.validate()
    layout = ViewComposer(cfg).compose(
        has_heatmap=data.lod is not None,
        has_curves=data.curves is not None,
        n_scatters=len(data.scatters),
    )

    # --- Build, off the container ---
    panels: dict[str, Panel] = {}
    if data.lod is not None:
        heatmap = HeatmapPanel(Surface(HEATMAP, layout.rects[HEATMAP]), cfg.heatmap)
        heatmap.bind(data.lod)
        panels[HEATMAP] = heatmap
    if data.curves is not None:
        chart = CurveChart(
            Surface(CURVES, layout.rects[CURVES]), layout.frames[CURVES], cfg.curves, cfg.style,
        )
        chart.bind(data.curves, entities)
        panels[CURVES] = chart
    for name, scatter, options in zip(SCATTER_NAMES, data.scatters,
                                      (cfg.scatter1, cfg.scatter2)):
        plot = ScatterPlot(Surface(name, layout.rects[name]), layout.frames[name],
                           options, cfg.style)
        plot.bind(scatter, entities)
        panels[name] = plot

    coordinator = LinkCoordinator()
    for panel in panels.values():
        coordinator.register(panel)

    # --- Swap into the container ---
    previous = container.owner
    if isinstance(previous, ViewHandle):
        previous._retire()
    container.clear()
    try:
        container.width = layout.total_width
        container.height = layout.total_height
        for panel in panels.values():
            container.add_surface(panel.surface)
        coordinator.attach()
    except Exception:
        container.clear()
        raise

    view = ViewHandle(container, panels, coordinator, cfg)
    container.owner = view
    logger.info(
        "Rendered linked view with panels %s (%d entities)", list(panels), entities.size
    )
    return view


class ViewHandle:
    """A rendered linked view: its panels, hover state and container.

    A handle acts on the container only while it owns it. Rendering
    another view into the same container destroys this handle.
    """

    def __init__(
        self,
        container: Canvas,
        panels: dict[str, Panel],
        coordinator: LinkCoordinator,
        config: ViewConfig,
    ) -> None:
        self._container = container
        self._panels = panels
        self._coordinator = coordinator
        self._config = config
        self._size = (container.width, container.height)
        self._destroyed = False

    def __repr__(self) -> str:
        state = "destroyed" if self._destroyed else self._coordinator.state
        return f"ViewHandle(panels={list(self._panels)}, {state})"

    # --- Panels ---

    @property
    def panels(self) -> dict[str, Panel]:
        return dict(self._panels)

    @property
    def heatmap(self) -> HeatmapPanel | None:
        return self._panels.get(HEATMAP)

    @property
    def curves(self) -> CurveChart | None:
        return self._panels.get(CURVES)

    @property
    def scatters(self) -> list[ScatterPlot]:
        return [self._panels[n] for n in SCATTER_NAMES if n in self._panels]

    @property
    def coordinator(self) -> LinkCoordinator:
        return self._coordinator

    @property
    def config(self) -> ViewConfig:
        return self._config

    @property
    def container(self) -> Canvas:
        return self._container

    @property
    def active(self) -> Hashable | None:
        return self._coordinator.active

    # --- Interaction ---

    def hover(self, panel: str, key: Hashable) -> None:
        """Move the pointer onto the element of ``panel`` keyed by ``key``."""
        if self._destroyed:
            raise RuntimeError("Cannot hover a destroyed view.")
        handle = self._panels[panel].element_for(key)
        self._container.pointer_move(panel, handle)

    def unhover(self) -> None:
        """Move the pointer off the view."""
        if not self._destroyed:
            self._container.pointer_out()

    def on_change(self, callback: Callable[[Any], Any]) -> None:
        """Register a callback: fn(active_key_or_None)."""
        self._coordinator.on_change(callback)

    def destroy(self) -> None:
        """Detach every listener and clear the container."""
        if self._destroyed:
            return
        owns = self._container.owner is self
        if owns:
            self._container.pointer_out()
        self._retire()
        if owns:
            self._container.clear()

    def _retire(self) -> None:
        """Go idle and stop listening, leaving the container alone."""
        self._coordinator.detach()
        self._destroyed = True
        logger.debug("Destroyed linked view %s", list(self._panels))

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # --- Export ---

    def to_dict(self) -> dict:
        """Display lists of every panel plus the hover state."""
        width, height = self._size
        return {
            "width": width,
            "height": height,
            "surfaces": [p.surface.to_dict() for p in self._panels.values()],
            "active": self._coordinator.active,
        }

    def figures(self) -> dict:
        """A static plotly figure per panel, in its current visual state."""
        from .export.plotly_figure import surface_to_figure

        return {name: surface_to_figure(p.surface) for name, p in self._panels.items()}
