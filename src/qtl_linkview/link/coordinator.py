"""LinkCoordinator: routes hover events across linked panels."""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable

from ..core.errors import ConfigurationError, OutOfDomainError
from ..panels.base import Panel
from ..scene.surface import POINTER_ENTER, POINTER_LEAVE

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[Any], Any]


class LinkCoordinator:
    """Holds the hover state of one linked view and fans it out.

    At most one key is active. ``enter(key)`` deemphasizes the previous
    key before emphasizing every element registered under the new one,
    so the view is never left with two highlighted entities.
    """

    def __init__(self) -> None:
        self._panels: list[Panel] = []
        self._routes: dict[Hashable, list[tuple[Panel, int]]] = {}
        self._active: Hashable | None = None
        self._attached = False
        self._callbacks: list[ChangeCallback] = []

    def __repr__(self) -> str:
        return (
            f"LinkCoordinator(panels={[p.name for p in self._panels]}, "
            f"keys={len(self._routes)}, active={self._active!r})"
        )

    # --- Registration ---

    def register(self, panel: Panel) -> None:
        """Add a bound panel's keys to the routing table."""
        if any(p is panel for p in self._panels):
            raise ConfigurationError(f"Panel '{panel.name}' is already registered.")
        self._panels.append(panel)
        for key in panel.keys():
            self._routes.setdefault(key, []).append((panel, panel.element_for(key)))
        if self._attached:
            self._attach_panel(panel)
        logger.debug("Registered panel '%s' with %d keys", panel.name, len(panel.keys()))

    @property
    def panels(self) -> list[Panel]:
        return list(self._panels)

    def routes(self, key: Hashable) -> list[tuple[Panel, int]]:
        """(panel, handle) pairs registered under ``key``."""
        try:
            return list(self._routes[key])
        except KeyError:
            raise OutOfDomainError(f"No linked element has key {key!r}.") from None

    def __contains__(self, key: object) -> bool:
        return key in self._routes

    # --- Hover state ---

    @property
    def active(self) -> Hashable | None:
        """The hovered key, or None when idle."""
        return self._active

    @property
    def state(self) -> str:
        return "idle" if self._active is None else "hovering"

    def enter(self, key: Hashable) -> None:
        routes = self.routes(key)
        if key == self._active:
            return
        if self._active is not None:
            self._deemphasize(self._active)
        for panel, _ in routes:
            panel.emphasize(key)
        self._active = key
        self._notify()

    def leave(self, key: Hashable) -> None:
        """Return to idle; a leave for a key that is not active is ignored."""
        if self._active is None or key != self._active:
            return
        self._deemphasize(key)
        self._active = None
        self._notify()

    def reset(self) -> None:
        """Drop any emphasis and go idle."""
        if self._active is not None:
            self.leave(self._active)

    def _deemphasize(self, key: Hashable) -> None:
        for panel, _ in self._routes[key]:
            panel.deemphasize(key)

    # --- Pointer wiring ---

    def attach(self) -> None:
        """Listen for pointer enter/leave on every linked element."""
        if self._attached:
            return
        for panel in self._panels:
            self._attach_panel(panel)
        self._attached = True

    def _attach_panel(self, panel: Panel) -> None:
        surface = panel.surface
        for key in panel.keys():
            handle = panel.element_for(key)
            surface.on(handle, POINTER_ENTER, lambda h, p=panel: self.enter(p.key_for(h)))
            surface.on(handle, POINTER_LEAVE, lambda h, p=panel: self.leave(p.key_for(h)))

    def detach(self) -> None:
        """Remove every pointer listener and go idle."""
        self.reset()
        if not self._attached:
            return
        for panel in self._panels:
            for key in panel.keys():
                panel.surface.off(panel.element_for(key))
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    # --- Callbacks ---

    def on_change(self, callback: ChangeCallback) -> None:
        """Register a callback: fn(active_key_or_None)."""
        self._callbacks.append(callback)

    def _notify(self) -> None:
        logger.debug("Hover state -> %r", self._active)
        for cb in self._callbacks:
            cb(self._active)
