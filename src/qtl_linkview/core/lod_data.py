"""LodData: per-chromosome LOD matrices with their marker positions."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

import numpy as np
import pandas as pd

from .errors import DataShapeError
from .validation import validate_lod_shapes

logger = logging.getLogger(__name__)


def chromosome_sort_key(name: Any) -> tuple:
    """Sort key putting numbered chromosomes first, in numeric order.

    ``["X", "10", "2", "chr1"]`` sorts as ``chr1, 2, 10, X``.
    """
    text = str(name)
    stem = text[3:] if text.lower().startswith("chr") else text
    if stem.isdigit():
        return (0, int(stem), text)
    return (1, stem, text)


def _as_matrix(chrom: Any, rows: Any) -> np.ndarray:
    """Convert nested rows (None for missing) into a float64 matrix."""
    try:
        if isinstance(rows, np.ndarray) and rows.dtype != object:
            return np.asarray(rows, dtype=np.float64)
        return np.array(
            [[np.nan if v is None else v for v in row] for row in rows],
            dtype=np.float64,
        )
    except (TypeError, ValueError):
        raise DataShapeError(
            f"Trait values for chromosome {chrom} must be a rectangular "
            "matrix of numbers (one row per position)."
        ) from None


class LodData:
    """Immutable container for a genome scan of several traits.

    For each chromosome, holds the sorted marker positions and an
    (n_positions, n_traits) float64 matrix of LOD scores (NaN = missing).
    Chromosomes are placed in the order supplied: ``chromosomes`` when
    given, else the key order of ``positions``. ``natural_order=True``
    sorts them by :func:`chromosome_sort_key` instead.
    """

    __slots__ = ("_chromosomes", "_positions", "_values", "_trait_names")

    def __init__(
        self,
        trait_values: Mapping[Any, Any],
        positions: Mapping[Any, Sequence[float]],
        trait_names: Sequence[str],
        chromosomes: Sequence[Any] | None = None,
        natural_order: bool = False,
    ) -> None:
        if chromosomes is None:
            chromosomes = list(positions)
        if natural_order:
            chromosomes = sorted(chromosomes, key=chromosome_sort_key)
        unknown = [c for c in chromosomes if c not in positions]
        if unknown:
            raise DataShapeError(f"Chromosome order names unknown chromosomes: {unknown[:5]}")
        if len(set(chromosomes)) != len(chromosomes):
            raise DataShapeError("Chromosome order must not repeat chromosomes.")
        orphans = [c for c in trait_values if c not in positions]
        if orphans:
            raise DataShapeError(
                f"Chromosomes with trait values but no positions: {orphans[:5]}"
            )
        self._chromosomes = tuple(chromosomes)
        self._trait_names = tuple(str(t) for t in trait_names)

        self._positions: dict[Any, np.ndarray] = {}
        self._values: dict[Any, np.ndarray] = {}
        for chrom in self._chromosomes:
            pos = np.asarray(positions[chrom], dtype=np.float64)
            if pos.ndim != 1 or len(pos) == 0:
                raise DataShapeError(f"Chromosome {chrom} needs at least one position.")
            if not np.all(np.isfinite(pos)):
                raise DataShapeError(f"Chromosome {chrom} has missing positions.")
            if chrom not in trait_values:
                raise DataShapeError(f"Chromosome {chrom} has positions but no trait values.")
            if len(np.unique(pos)) != len(pos):
                raise DataShapeError(f"Chromosome {chrom} has duplicate positions.")
            values = _as_matrix(chrom, trait_values[chrom])
            order = np.argsort(pos, kind="stable")
            self._positions[chrom] = pos[order]
            # mismatched matrices are kept as-is and rejected by validate()
            if values.ndim == 2 and values.shape[0] == len(pos):
                values = values[order]
            self._values[chrom] = values
        logger.debug(
            "LodData: %d chromosomes, %d traits, %d positions",
            len(self._chromosomes), len(self._trait_names), self.n_positions,
        )

    # --- Constructors ---

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], natural_order: bool = False) -> LodData:
        """Build from the JSON-like payload.

        Expects ``traitValues``, ``positions`` and ``traitNames``;
        ``chromosomes`` optionally fixes the left-to-right order.
        """
        missing = [k for k in ("traitValues", "positions", "traitNames") if k not in payload]
        if missing:
            raise DataShapeError(f"LOD payload is missing keys: {missing}")
        return cls(
            trait_values=payload["traitValues"],
            positions=payload["positions"],
            trait_names=payload["traitNames"],
            chromosomes=payload.get("chromosomes"),
            natural_order=natural_order,
        )

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        chromosome: str = "chr",
        position: str = "pos",
        traits: Sequence[str] | None = None,
    ) -> LodData:
        """Build from a long table: one row per marker, one column per trait.

        Chromosomes keep their order of first appearance in ``df``.
        """
        if not isinstance(df, pd.DataFrame):
            raise TypeError(f"Expected a pandas DataFrame, got {type(df).__name__}.")
        for col in (chromosome, position):
            if col not in df.columns:
                raise DataShapeError(f"Column '{col}' not found. Available: {list(df.columns)}")
        if traits is None:
            traits = [c for c in df.columns if c not in (chromosome, position)]
        non_numeric = [t for t in traits if not pd.api.types.is_numeric_dtype(df[t])]
        if non_numeric:
            raise DataShapeError(f"Trait columns must be numeric. Non-numeric: {non_numeric[:5]}")

        order = list(pd.unique(df[chromosome]))
        trait_values: dict[Any, np.ndarray] = {}
        positions: dict[Any, np.ndarray] = {}
        for chrom, part in df.groupby(chromosome, sort=False):
            positions[chrom] = part[position].to_numpy(dtype=np.float64)
            trait_values[chrom] = part[list(traits)].to_numpy(dtype=np.float64)
        return cls(trait_values, positions, [str(t) for t in traits], chromosomes=order)

    # --- Accessors ---

    @property
    def chromosomes(self) -> tuple:
        return self._chromosomes

    @property
    def trait_names(self) -> tuple[str, ...]:
        return self._trait_names

    @property
    def n_traits(self) -> int:
        return len(self._trait_names)

    @property
    def n_positions(self) -> int:
        return sum(len(p) for p in self._positions.values())

    @property
    def positions_by_chromosome(self) -> dict[Any, np.ndarray]:
        return {c: self.positions(c) for c in self._chromosomes}

    def positions(self, chrom: Any) -> np.ndarray:
        """Sorted positions on ``chrom`` (read-only view)."""
        v = self._positions[chrom].view()
        v.flags.writeable = False
        return v

    def values(self, chrom: Any) -> np.ndarray:
        """(n_positions, n_traits) matrix for ``chrom`` (read-only view)."""
        v = self._values[chrom].view()
        v.flags.writeable = False
        return v

    def validate(self) -> None:
        """Raise DataShapeError unless every matrix matches its positions and traits."""
        validate_lod_shapes(self._values, self._positions, self.n_traits)

    def all_values(self) -> np.ndarray:
        """Every LOD score, flattened across chromosomes."""
        if not self._values:
            return np.empty(0)
        return np.concatenate([v.ravel() for v in self._values.values()])

    def finite_range(self) -> tuple[float, float]:
        """Return (min, max) of all finite values, or (0, 0) if there are none."""
        arr = self.all_values()
        finite = arr[np.isfinite(arr)]
        if len(finite) == 0:
            return (0.0, 0.0)
        return (float(finite.min()), float(finite.max()))
