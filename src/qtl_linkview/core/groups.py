"""Group labels -> 0-based indices, and per-group color palettes."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
import pandas as pd
from matplotlib import colors as mcolors
import matplotlib.pyplot as plt

from .errors import ConfigurationError
from .validation import validate_color

# Fixed choices for one or two groups; more groups draw from colormaps.
_LIGHT_SMALL = {1: ["#bebebe"], 2: ["lightpink", "#8470ff"]}  # #8470ff: X11 lightslateblue
_DARK_SMALL = {1: ["slateblue"], 2: ["mediumvioletred", "slateblue"]}
_LIGHT_CMAP = "Pastel1"
_DARK_CMAP = "Set1"
_MAX_BREWER = 9


def group_to_index(labels: Sequence[Any] | pd.Series | pd.Categorical | None,
                   n: int | None = None) -> np.ndarray:
    """Rank-map group labels onto ``0..k-1``.

    Distinct labels are sorted ascending and each label is replaced by
    its rank, so numeric groups 1, 2, 3 become 0, 1, 2 and string labels
    are ranked alphabetically. A pandas categorical keeps its declared
    category order. The mapping only depends on the set of labels, so
    mapping the same sequence twice gives the same result.

    Parameters
    ----------
    labels : sequence of labels, or None for a single group
    n : number of entities; required when ``labels`` is None
    """
    if labels is None:
        if n is None:
            raise ConfigurationError("Need either group labels or an entity count.")
        return np.zeros(n, dtype=np.int64)

    if isinstance(labels, pd.Series) and isinstance(labels.dtype, pd.CategoricalDtype):
        labels = labels.array
    if isinstance(labels, pd.Categorical):
        if (labels.codes < 0).any():
            raise ConfigurationError("Group labels must not contain missing values.")
        used = np.unique(labels.codes)
        return np.searchsorted(used, labels.codes).astype(np.int64)

    values = list(labels)
    if any(v is None or (isinstance(v, float) and np.isnan(v)) for v in values):
        raise ConfigurationError("Group labels must not contain missing values.")
    try:
        levels = sorted(set(values))
    except TypeError:
        raise ConfigurationError(
            "Group labels must be mutually comparable (all numbers or all strings)."
        ) from None
    index = pd.Index(levels)
    return index.get_indexer(values).astype(np.int64)


def select_group_colors(n_groups: int, palette: str = "light") -> list[str]:
    """Return ``n_groups`` hex colors from the light or dark palette.

    Light colors are used for baseline curves/points and dark colors for
    their highlighted state, so group ``g`` keeps the same hue in both.
    """
    if palette not in ("light", "dark"):
        raise ConfigurationError(f"Unknown palette '{palette}'. Use 'light' or 'dark'.")
    if n_groups <= 0:
        return []
    small = _LIGHT_SMALL if palette == "light" else _DARK_SMALL
    if n_groups in small:
        return [mcolors.to_hex(c) for c in small[n_groups]]
    if n_groups <= _MAX_BREWER:
        cmap = plt.get_cmap(_LIGHT_CMAP if palette == "light" else _DARK_CMAP)
        return [mcolors.to_hex(c) for c in cmap.colors[:n_groups]]
    # tab20 alternates dark/light shades of the same hue
    pairs = plt.get_cmap("tab20").colors
    offset = 1 if palette == "light" else 0
    shades = [mcolors.to_hex(c) for c in pairs[offset::2]]
    return [shades[i % len(shades)] for i in range(n_groups)]


def expand_colors(color: Any, n_groups: int) -> list[str]:
    """Normalize a color option to exactly one hex color per group.

    A single color is repeated for every group; a list must have at
    least ``n_groups`` entries.
    """
    if isinstance(color, (list, tuple)) and not _is_rgb_tuple(color):
        if len(color) < n_groups:
            raise ConfigurationError(
                f"Got {len(color)} colors for {n_groups} groups."
            )
        return [mcolors.to_hex(validate_color(c)) for c in color[:n_groups]]
    return [mcolors.to_hex(validate_color(color))] * n_groups


def _is_rgb_tuple(value: Sequence) -> bool:
    return len(value) in (3, 4) and all(isinstance(v, (int, float)) for v in value)
