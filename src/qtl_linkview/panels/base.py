"""Panel: base class for every linked drawing panel."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable

from ..config import AxisPos, Margin
from ..core.entity_index import EntityIndex
from ..core.errors import ConfigurationError, OutOfDomainError
from ..core.groups import expand_colors, select_group_colors
from ..layout.axis import TickSpec
from ..layout.geometry import Rect
from ..scene.surface import Surface


@dataclass(frozen=True)
class PanelFrame:
    """Size and decoration of one panel's plotting area.

    ``width`` and ``height`` exclude the margins.
    """

    width: float
    height: float
    margin: Margin = field(default_factory=Margin)
    axispos: AxisPos = field(default_factory=AxisPos)
    titlepos: float = 20.0
    rectcolor: str = "#e6e6e6"

    @property
    def plot_area(self) -> Rect:
        return Rect(self.margin.left, self.margin.top, self.width, self.height)

    @property
    def outer_width(self) -> float:
        return self.width + self.margin.left + self.margin.right

    @property
    def outer_height(self) -> float:
        return self.height + self.margin.top + self.margin.bottom


class Panel(ABC):
    """One drawing surface plus the keyed elements drawn on it.

    Subclasses implement :meth:`bind` to draw their dataset, and
    :meth:`emphasize` / :meth:`deemphasize` to restyle the element(s)
    registered under a key. Each panel owns its scales; the only thing
    panels share is the key space.
    """

    def __init__(self, surface: Surface, frame: PanelFrame) -> None:
        self._surface = surface
        self._frame = frame
        self._handles: dict[Hashable, int] = {}
        self._keys_by_handle: dict[int, Hashable] = {}
        self._emphasized: set[Hashable] = set()

    @property
    def name(self) -> str:
        return self._surface.name

    @property
    def surface(self) -> Surface:
        return self._surface

    @property
    def frame(self) -> PanelFrame:
        return self._frame

    @abstractmethod
    def bind(self, *data: Any) -> None:
        """Compute the panel's local model and draw its static state."""
        ...

    @abstractmethod
    def emphasize(self, key: Hashable) -> None:
        ...

    @abstractmethod
    def deemphasize(self, key: Hashable) -> None:
        ...

    # --- Key registry ---

    def keys(self) -> list[Hashable]:
        """Keys of every hoverable element, in drawing order."""
        return list(self._handles)

    def element_for(self, key: Hashable) -> int:
        try:
            return self._handles[key]
        except KeyError:
            raise OutOfDomainError(f"Panel '{self.name}' has no element for {key!r}.") from None

    def key_for(self, handle: int) -> Hashable:
        try:
            return self._keys_by_handle[handle]
        except KeyError:
            raise OutOfDomainError(f"Panel '{self.name}' has no keyed element {handle!r}.") from None

    def is_emphasized(self, key: Hashable) -> bool:
        return key in self._emphasized

    @property
    def emphasized(self) -> frozenset:
        return frozenset(self._emphasized)

    def _register(self, key: Hashable, handle: int) -> None:
        self._handles[key] = handle
        self._keys_by_handle[handle] = key

    def _reset(self) -> None:
        """Forget every element; called at the start of :meth:`bind`."""
        self._surface.clear()
        self._handles.clear()
        self._keys_by_handle.clear()
        self._emphasized.clear()

    # --- Shared decoration ---

    def _draw_box(self, area: Rect, fill: str, layer: str = "background", **attrs: Any) -> int:
        return self._surface.add(
            "rect", layer=layer, x=area.x, y=area.y,
            width=area.width, height=area.height, fill=fill, stroke="none", **attrs,
        )

    def _draw_titles(self, title: str, xlab: str, ylab: str,
                     area: Rect | None = None, rotate_ylab: bool | None = None) -> None:
        """Panel title above the plot, axis titles below and to the left."""
        area = area or self._frame.plot_area
        pos = self._frame.axispos
        if title:
            self._surface.add("text", layer="titles", x=area.center_x,
                              y=area.y - self._frame.titlepos, text=title, role="title")
        if xlab:
            self._surface.add("text", layer="titles", x=area.center_x,
                              y=area.bottom + pos.xtitle, text=xlab, role="xtitle")
        if ylab:
            if rotate_ylab is None:
                rotate_ylab = len(ylab) > 1
            x = area.x - pos.ytitle
            self._surface.add("text", layer="titles", x=x, y=area.center_y, text=ylab,
                              role="ytitle", rotate=270 if rotate_ylab else 0)

    def _draw_ticks(self, ticks: Iterable[TickSpec], axis: str, area: Rect | None = None) -> None:
        """Tick labels plus light grid lines across the plot area."""
        area = area or self._frame.plot_area
        pos = self._frame.axispos
        for tick in ticks:
            if axis == "x":
                self._surface.add("line", layer="grid", x1=tick.position, x2=tick.position,
                                  y1=area.y, y2=area.bottom, stroke="white")
                self._surface.add("text", layer="axis", x=tick.position,
                                  y=area.bottom + pos.xlabel, text=tick.text, role="xtick")
            else:
                self._surface.add("line", layer="grid", x1=area.x, x2=area.right,
                                  y1=tick.position, y2=tick.position, stroke="white")
                self._surface.add("text", layer="axis", x=area.x - pos.ylabel,
                                  y=tick.position, text=tick.text, role="ytick")


class EntityPanel(Panel):
    """A panel whose keys are entity indices of a shared EntityIndex."""

    def __init__(self, surface: Surface, frame: PanelFrame) -> None:
        super().__init__(surface, frame)
        self._entities: EntityIndex | None = None
        self._baseline: list[str] = []
        self._highlight: list[str] = []

    @property
    def entities(self) -> EntityIndex | None:
        return self._entities

    def _bind_entities(self, entities: EntityIndex, n: int, color: Any, colorhilit: Any) -> None:
        """Check the entity count and resolve per-group colors."""
        if entities.size != n:
            raise ConfigurationError(
                f"Panel '{self.name}' got {n} entities but the linked view has {entities.size}."
            )
        n_groups = max(entities.n_groups, 1)
        baseline = (
            expand_colors(color, n_groups) if color is not None
            else select_group_colors(n_groups, "light")
        )
        highlight = (
            expand_colors(colorhilit, n_groups) if colorhilit is not None
            else select_group_colors(n_groups, "dark")
        )
        self._entities = entities
        self._baseline = baseline
        self._highlight = highlight

    def baseline_color(self, index: int) -> str:
        return self._baseline[self._entities.group_of(index)]

    def highlight_color(self, index: int) -> str:
        return self._highlight[self._entities.group_of(index)]
