"""Input validation with clear error messages for genome-scan data."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import numpy as np
from matplotlib import colors as mcolors

from .errors import ConfigurationError, DataShapeError


def _preview(items: Sequence, limit: int = 5) -> str:
    """Format the first few offending items, noting how many were cut."""
    items = list(items)
    text = f"{items[:limit]}"
    if len(items) > limit:
        text += f" (and {len(items) - limit} more)"
    return text


def validate_color(color: Any) -> tuple[float, float, float, float]:
    """Validate a matplotlib color spec and return it as float RGBA."""
    try:
        return mcolors.to_rgba(color)
    except ValueError:
        raise ConfigurationError(
            f"Unknown color {color!r}. Use a matplotlib color name "
            "like 'crimson', a hex string like '#e6e6e6', or an RGB tuple."
        ) from None


def validate_breakpoints(breakpoints: Sequence[float], colors: Sequence) -> np.ndarray:
    """Validate paired color breakpoints. Returns breakpoints as float64."""
    if len(breakpoints) != len(colors):
        raise ConfigurationError(
            f"Color breakpoints and colors must pair up: got "
            f"{len(breakpoints)} breakpoints and {len(colors)} colors."
        )
    if len(breakpoints) < 2:
        raise ConfigurationError(
            f"A color scale needs at least two breakpoints, got {len(breakpoints)}."
        )
    arr = np.asarray(breakpoints, dtype=np.float64)
    if not np.all(np.isfinite(arr)):
        raise ConfigurationError(f"Color breakpoints must be finite: {arr.tolist()}")
    if np.any(np.diff(arr) <= 0):
        raise ConfigurationError(
            f"Color breakpoints must be strictly increasing: {arr.tolist()}"
        )
    return arr


def validate_lod_shapes(
    trait_values: Mapping[Any, np.ndarray],
    positions: Mapping[Any, np.ndarray],
    n_traits: int,
) -> None:
    """Check that each chromosome's matrix is (n_positions, n_traits)."""
    missing = [c for c in positions if c not in trait_values]
    if missing:
        raise DataShapeError(
            f"Chromosomes with positions but no trait values: {_preview(missing)}"
        )
    extra = [c for c in trait_values if c not in positions]
    if extra:
        raise DataShapeError(
            f"Chromosomes with trait values but no positions: {_preview(extra)}"
        )
    for chrom, pos in positions.items():
        values = trait_values[chrom]
        if values.ndim != 2:
            raise DataShapeError(
                f"Trait values for chromosome {chrom} must be a 2-d matrix, "
                f"got {values.ndim} dimension(s)."
            )
        if values.shape[0] != len(pos):
            raise DataShapeError(
                f"Chromosome {chrom} has {len(pos)} positions but "
                f"{values.shape[0]} rows of trait values."
            )
        if values.shape[1] != n_traits:
            raise DataShapeError(
                f"Chromosome {chrom} has {values.shape[1]} values per position "
                f"but {n_traits} trait names were given."
            )


def validate_entity_counts(counts: Mapping[str, int]) -> int:
    """Check that every co-linked dataset describes the same entities.

    Parameters
    ----------
    counts : {dataset name: number of entities}

    Returns the shared entity count (0 if ``counts`` is empty).
    """
    distinct = set(counts.values())
    if len(distinct) > 1:
        detail = ", ".join(f"{name}={n}" for name, n in counts.items())
        raise ConfigurationError(
            f"Linked datasets disagree on the number of entities: {detail}"
        )
    return distinct.pop() if distinct else 0
