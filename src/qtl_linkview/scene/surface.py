"""Surface: a retained display list of handle-addressed draw elements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from ..core.errors import OutOfDomainError
from ..layout.geometry import Rect

POINTER_ENTER = "pointerenter"
POINTER_LEAVE = "pointerleave"

ElementCallback = Callable[[int], Any]


@dataclass
class DrawElement:
    """One drawn primitive: ``rect``, ``path``, ``circle``, ``line`` or ``text``.

    ``attrs`` holds the visual state (x, y, fill, stroke, opacity, ...)
    and is mutated in place by emphasis changes.
    """

    handle: int
    kind: str
    layer: str
    attrs: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"handle": self.handle, "kind": self.kind, "layer": self.layer, **self.attrs}


class Surface:
    """Drawing surface owned by exactly one panel.

    Elements live in named layers painted in creation order; within a
    layer, later elements paint over earlier ones. Handles are never
    reused while the surface lives.
    """

    KINDS = frozenset({"rect", "path", "circle", "line", "text"})

    def __init__(self, name: str, rect: Rect) -> None:
        self._name = name
        self._rect = rect
        self._elements: dict[int, DrawElement] = {}
        self._layers: dict[str, list[int]] = {}
        self._listeners: dict[tuple[int, str], list[ElementCallback]] = {}
        self._next_handle = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def rect(self) -> Rect:
        return self._rect

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, handle: object) -> bool:
        return handle in self._elements

    # --- Drawing ---

    def add(self, kind: str, layer: str = "", **attrs: Any) -> int:
        """Append an element on top of ``layer`` and return its handle."""
        if kind not in self.KINDS:
            raise ValueError(f"Unknown element kind '{kind}'. Use one of {sorted(self.KINDS)}.")
        handle = self._next_handle
        self._next_handle += 1
        self._elements[handle] = DrawElement(handle, kind, layer, dict(attrs))
        self._layers.setdefault(layer, []).append(handle)
        return handle

    def get(self, handle: int) -> DrawElement:
        try:
            return self._elements[handle]
        except KeyError:
            raise OutOfDomainError(
                f"Surface '{self._name}' has no element {handle!r}."
            ) from None

    def update(self, handle: int, **attrs: Any) -> None:
        self.get(handle).attrs.update(attrs)

    def raise_to_front(self, handle: int) -> None:
        """Paint ``handle`` above every other element of its layer."""
        order = self._layers[self.get(handle).layer]
        order.remove(handle)
        order.append(handle)

    def lower_to_back(self, handle: int) -> None:
        """Paint ``handle`` below every other element of its layer."""
        order = self._layers[self.get(handle).layer]
        order.remove(handle)
        order.insert(0, handle)

    def paint_order(self, layer: str | None = None) -> list[int]:
        """Handles back to front, for one layer or the whole surface."""
        if layer is not None:
            return list(self._layers.get(layer, []))
        return [h for handles in self._layers.values() for h in handles]

    def elements(self, layer: str | None = None) -> list[DrawElement]:
        return [self._elements[h] for h in self.paint_order(layer)]

    def clear(self) -> None:
        """Drop every element and listener. Handles keep counting up."""
        self._elements.clear()
        self._layers.clear()
        self._listeners.clear()

    # --- Events ---

    def on(self, handle: int, event: str, callback: ElementCallback) -> None:
        """Call ``callback(handle)`` when ``event`` fires on ``handle``."""
        self.get(handle)
        self._listeners.setdefault((handle, event), []).append(callback)

    def off(self, handle: int, event: str | None = None) -> None:
        """Remove listeners of ``handle`` (all events, or just ``event``)."""
        for key in [k for k in self._listeners if k[0] == handle and event in (None, k[1])]:
            del self._listeners[key]

    def listener_count(self) -> int:
        return sum(len(cbs) for cbs in self._listeners.values())

    def dispatch(self, handle: int, event: str) -> None:
        """Fire ``event`` on ``handle``; listeners run synchronously in order."""
        self.get(handle)
        for cb in list(self._listeners.get((handle, event), ())):
            cb(handle)

    def to_dict(self) -> dict:
        """Display list, back to front, ready for JSON."""
        return {
            "name": self._name,
            **self._rect.to_dict(),
            "elements": [e.to_dict() for e in self.elements()],
        }
