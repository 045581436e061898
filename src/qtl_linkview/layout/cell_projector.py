"""CellProjector: LOD matrix -> filtered, pixel-placed heatmap cells."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, NamedTuple

import numpy as np

from ..core.lod_data import LodData
from ..core.scales import LinearScale
from .chromosome_layout import ChromosomeLayout

logger = logging.getLogger(__name__)


class CellKey(NamedTuple):
    """Identity of one heatmap cell."""

    chromosome: Any
    position: float
    trait_index: int


@dataclass(frozen=True)
class CellRecord:
    """A renderable heatmap cell."""

    chromosome: Any
    position: float
    trait_index: int
    value: float
    left_pixel: float
    right_pixel: float
    row_pixel_center: float

    @property
    def key(self) -> CellKey:
        return CellKey(self.chromosome, self.position, self.trait_index)

    @property
    def width(self) -> float:
        return self.right_pixel - self.left_pixel

    @property
    def is_missing(self) -> bool:
        return not np.isfinite(self.value)


def resolve_threshold(lod: LodData, threshold: float | None) -> float:
    """Explicit threshold, or ``min(0, observed min) - 1`` (keeps every cell)."""
    if threshold is not None:
        return float(threshold)
    zmin, _ = lod.finite_range()
    return min(0.0, zmin) - 1.0


def cell_bounds(pixels: np.ndarray, left_edge: float, right_edge: float) -> tuple[np.ndarray, np.ndarray]:
    """Left/right pixel bounds for cells centered on sorted ``pixels``.

    Interior boundaries sit at midpoints between neighbours, so cells
    tile without gaps. The outermost cells extend to the chromosome
    edges.
    """
    mids = (pixels[:-1] + pixels[1:]) / 2
    lefts = np.concatenate(([left_edge], mids))
    rights = np.concatenate((mids, [right_edge]))
    return lefts, rights


class CellProjector:
    """Projects a LodData matrix onto a ChromosomeLayout and row scale.

    ``row_scale`` maps a trait index to the pixel center of its row.
    """

    @staticmethod
    def project(
        lod: LodData,
        layout: ChromosomeLayout,
        row_scale: LinearScale,
        threshold: float | None = None,
    ) -> list[CellRecord]:
        """Return one CellRecord per (position, trait) with ``|value| >= threshold``.

        Missing values are only kept while filtering is effectively off
        (resolved threshold <= 0).
        """
        lod.validate()
        thresh = resolve_threshold(lod, threshold)
        row_centers = row_scale.map_array(np.arange(lod.n_traits))

        cells: list[CellRecord] = []
        n_dropped = 0
        for chrom in layout.chromosomes:
            scale = layout.scale(chrom)
            positions = lod.positions(chrom)
            values = lod.values(chrom)
            lefts, rights = cell_bounds(
                scale.map_array(positions), scale.range_start, scale.range_end
            )

            missing = ~np.isfinite(values)
            with np.errstate(invalid="ignore"):
                keep = np.abs(values) >= thresh
            keep[missing] = thresh <= 0
            n_dropped += int(keep.size - keep.sum())

            for i, j in zip(*np.nonzero(keep)):
                cells.append(CellRecord(
                    chromosome=chrom,
                    position=float(positions[i]),
                    trait_index=int(j),
                    value=float(values[i, j]),
                    left_pixel=float(lefts[i]),
                    right_pixel=float(rights[i]),
                    row_pixel_center=float(row_centers[j]),
                ))
        logger.debug(
            "CellProjector: %d cells kept, %d below threshold %.3g",
            len(cells), n_dropped, thresh,
        )
        return cells

    @staticmethod
    def index_by_key(cells: list[CellRecord]) -> dict[CellKey, CellRecord]:
        """Re-key cells for hover lookup."""
        return {cell.key: cell for cell in cells}
