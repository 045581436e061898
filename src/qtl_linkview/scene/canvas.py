"""Canvas: the host container of surfaces and the single pointer stream."""

from __future__ import annotations

import logging
from typing import Any

from ..core.errors import ConfigurationError, OutOfDomainError
from ..layout.geometry import Rect
from .surface import POINTER_ENTER, POINTER_LEAVE, Surface

logger = logging.getLogger(__name__)


class Canvas:
    """Holds named surfaces and delivers pointer events to their elements.

    There is one pointer: moving it onto a new element always delivers
    the leave for the previous element before the enter for the new one.
    """

    def __init__(self, width: float = 0.0, height: float = 0.0) -> None:
        self.width = width
        self.height = height
        self._surfaces: dict[str, Surface] = {}
        self._hovered: tuple[str, int] | None = None
        # the view currently drawn here; cleared with the surfaces
        self.owner: Any = None

    def __repr__(self) -> str:
        return (
            f"Canvas({self.width:g}x{self.height:g}, "
            f"surfaces={list(self._surfaces)})"
        )

    # --- Surfaces ---

    def create_surface(self, name: str, rect: Rect) -> Surface:
        return self.add_surface(Surface(name, rect))

    def add_surface(self, surface: Surface) -> Surface:
        """Adopt a surface that was drawn before being placed on the canvas."""
        if surface.name in self._surfaces:
            raise ConfigurationError(f"Canvas already has a surface named '{surface.name}'.")
        self._surfaces[surface.name] = surface
        return surface

    def surface(self, name: str) -> Surface:
        try:
            return self._surfaces[name]
        except KeyError:
            raise OutOfDomainError(f"Canvas has no surface named '{name}'.") from None

    @property
    def surfaces(self) -> list[Surface]:
        return list(self._surfaces.values())

    def clear(self) -> None:
        """Remove every surface, forget the hovered element and the owner."""
        if self._surfaces:
            logger.debug("Clearing canvas with surfaces %s", list(self._surfaces))
        self._surfaces.clear()
        self._hovered = None
        self.owner = None

    # --- Pointer stream ---

    @property
    def hovered(self) -> tuple[str, int] | None:
        """(surface name, handle) under the pointer, or None."""
        return self._hovered

    def pointer_move(self, surface: str, handle: int | None) -> None:
        """Move the pointer onto ``handle`` of ``surface`` (None = empty space)."""
        target = (surface, handle) if handle is not None else None
        if target is not None:
            self.surface(surface).get(handle)
        if target == self._hovered:
            return
        self.pointer_out()
        if target is not None:
            self._hovered = target
            self._surfaces[surface].dispatch(handle, POINTER_ENTER)

    def pointer_out(self) -> None:
        """Move the pointer off whatever it is over."""
        if self._hovered is None:
            return
        name, handle = self._hovered
        self._hovered = None
        surface = self._surfaces.get(name)
        if surface is not None and handle in surface:
            surface.dispatch(handle, POINTER_LEAVE)

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "surfaces": [s.to_dict() for s in self._surfaces.values()],
        }
