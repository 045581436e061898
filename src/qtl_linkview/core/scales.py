"""LinearScale: continuous domain -> pixel range."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import OutOfDomainError


@dataclass(frozen=True)
class LinearScale:
    """Linear map from ``domain`` to ``range``.

    A degenerate domain (both ends equal) maps every value to the middle
    of the range. Ranges may run backwards, as y axes do.
    """

    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def map_array(self, values: np.ndarray) -> np.ndarray:
        d0, d1 = self.domain
        r0, r1 = self.range
        arr = np.asarray(values, dtype=np.float64)
        if d1 == d0:
            return np.full(arr.shape, (r0 + r1) / 2)
        return r0 + (arr - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r1 == r0:
            return d0
        return d0 + (pixel - r0) / (r1 - r0) * (d1 - d0)

    def contains(self, value: float) -> bool:
        lo, hi = sorted(self.domain)
        return lo <= value <= hi

    def check(self, value: float) -> float:
        """Like calling the scale, but values outside the domain raise."""
        if not self.contains(value):
            raise OutOfDomainError(
                f"Value {value} is outside the scale domain {self.domain}."
            )
        return self(value)


def data_extent(values: np.ndarray, pad: float = 0.0) -> tuple[float, float]:
    """Finite (min, max) of ``values``, widened by ``pad`` x span on each side.

    Returns (0, 1) when there are no finite values.
    """
    arr = np.asarray(values, dtype=np.float64)
    finite = arr[np.isfinite(arr)]
    if len(finite) == 0:
        return (0.0, 1.0)
    lo, hi = float(finite.min()), float(finite.max())
    span = hi - lo
    if span == 0:
        return (lo - 0.5, hi + 0.5)
    return (lo - pad * span, hi + pad * span)
