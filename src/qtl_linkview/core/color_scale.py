"""DivergingColorScale: signed value -> color via paired breakpoints."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import numpy as np
from matplotlib import colors as mcolors

from .validation import validate_breakpoints, validate_color

DEFAULT_COLORS = ("slateblue", "white", "crimson")
DEFAULT_NULL_COLOR = "#e6e6e6"


class DivergingColorScale:
    """Piecewise-linear color mapping over ordered breakpoints.

    Each breakpoint is paired with one color. A value is interpolated in
    RGB space between the two breakpoints that bracket it; values beyond
    the outer breakpoints clamp to the endpoint colors.
    """

    __slots__ = ("_breakpoints", "_colors", "_rgba", "_null_color")

    def __init__(
        self,
        breakpoints: Sequence[float],
        colors: Sequence[Any] = DEFAULT_COLORS,
        null_color: Any = DEFAULT_NULL_COLOR,
    ) -> None:
        self._breakpoints = validate_breakpoints(breakpoints, colors)
        self._colors = tuple(colors)
        self._rgba = np.array([validate_color(c) for c in colors], dtype=np.float64)
        validate_color(null_color)
        self._null_color = mcolors.to_hex(null_color)

    @classmethod
    def from_values(
        cls,
        values: Iterable[float] | np.ndarray,
        colors: Sequence[Any] = DEFAULT_COLORS,
        breakpoints: Sequence[float] | None = None,
        null_color: Any = DEFAULT_NULL_COLOR,
    ) -> DivergingColorScale:
        """Build a scale, deriving symmetric breakpoints from the data.

        With no explicit breakpoints the scale runs over
        ``[-zmax, 0, zmax]`` where ``zmax = max(|min|, max)`` of the
        finite values (1.0 when every value is zero). The derived
        breakpoints pair with exactly three colors.
        """
        if breakpoints is None:
            zmax = symmetric_limit(values)
            if zmax == 0.0:
                zmax = 1.0
            breakpoints = (-zmax, 0.0, zmax)
        return cls(breakpoints, colors, null_color=null_color)

    @property
    def breakpoints(self) -> tuple[float, ...]:
        return tuple(self._breakpoints.tolist())

    @property
    def colors(self) -> tuple:
        return self._colors

    @property
    def null_color(self) -> str:
        return self._null_color

    def map_rgba(self, value: float | None) -> tuple[float, float, float, float] | None:
        """Interpolated float RGBA for ``value``, or None for a missing value."""
        if value is None or not np.isfinite(value):
            return None
        return tuple(
            float(np.interp(value, self._breakpoints, self._rgba[:, ch]))
            for ch in range(4)
        )

    def map(self, value: float | None) -> str:
        """Map a value to a ``#rrggbb`` color string."""
        rgba = self.map_rgba(value)
        if rgba is None:
            return self._null_color
        return mcolors.to_hex(rgba[:3])

    def __call__(self, value: float | None) -> str:
        return self.map(value)

    def map_array(self, values: np.ndarray) -> list[str]:
        """Vectorized :meth:`map` over an array of values."""
        arr = np.asarray(values, dtype=np.float64)
        flat = arr.ravel()
        channels = np.column_stack([
            np.interp(flat, self._breakpoints, self._rgba[:, ch]) for ch in range(3)
        ])
        missing = ~np.isfinite(flat)
        return [
            self._null_color if miss else mcolors.to_hex(rgb)
            for rgb, miss in zip(channels, missing)
        ]

    def to_dict(self) -> dict:
        return {
            "breakpoints": self.breakpoints,
            "colors": [mcolors.to_hex(c) for c in self._rgba],
            "nullColor": self._null_color,
        }


def symmetric_limit(values: Iterable[float] | np.ndarray) -> float:
    """Return ``max(|min|, max)`` over the finite values, at least 0."""
    arr = np.asarray(values, dtype=np.float64)
    finite = arr[np.isfinite(arr)]
    if len(finite) == 0:
        return 0.0
    return float(max(-finite.min(), finite.max(), 0.0))
