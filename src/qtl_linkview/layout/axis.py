"""Tick placement for numeric axes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from matplotlib.ticker import MaxNLocator

from ..core.scales import LinearScale


@dataclass(frozen=True)
class TickSpec:
    """A single tick to render."""

    value: float
    position: float   # pixel position along the axis
    text: str


def nice_ticks(lo: float, hi: float, n: int = 5) -> list[float]:
    """Round tick values covering [lo, hi], roughly ``n`` of them.

    Ticks outside the interval are dropped.
    """
    if n <= 0:
        return []
    lo, hi = min(lo, hi), max(lo, hi)
    if lo == hi:
        return [float(lo)]
    values = MaxNLocator(nbins=n, steps=[1, 2, 2.5, 5, 10]).tick_values(lo, hi)
    eps = (hi - lo) * 1e-9
    return [float(v) for v in values if lo - eps <= v <= hi + eps]


def format_ticks(values: Sequence[float]) -> list[str]:
    """Format tick values with the fewest decimals that keep them distinct."""
    if len(values) == 0:
        return []
    arr = np.asarray(values, dtype=np.float64)
    for digits in range(0, 7):
        rounded = np.round(arr, digits)
        if np.allclose(rounded, arr, rtol=0, atol=10 ** -(digits + 3)):
            break
    return [f"{v:.{digits}f}" for v in arr]


def compute_ticks(
    scale: LinearScale,
    n: int = 5,
    values: Sequence[float] | None = None,
) -> list[TickSpec]:
    """Tick specs for an axis, from explicit ``values`` or ``n`` nice ticks."""
    if values is None:
        values = nice_ticks(scale.domain[0], scale.domain[1], n)
    texts = format_ticks(values)
    return [
        TickSpec(value=float(v), position=float(scale(v)), text=t)
        for v, t in zip(values, texts)
    ]
