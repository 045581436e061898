"""Chromosome-aware pixel layout for genome-scan x axes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import numpy as np

from ..core.errors import ConfigurationError, OutOfDomainError

logger = logging.getLogger(__name__)

DEFAULT_CHR_GAP = 8.0
MIN_CHROMOSOME_WIDTH = 4.0  # keeps single-marker chromosomes visible


@dataclass(frozen=True)
class PositionScale:
    """Linear map from genomic position to pixel within one chromosome."""

    chromosome: Any
    domain_min: float
    domain_max: float
    range_start: float
    range_end: float

    def __post_init__(self) -> None:
        if self.domain_min > self.domain_max:
            raise ConfigurationError(
                f"Chromosome {self.chromosome}: domain [{self.domain_min}, "
                f"{self.domain_max}] is reversed."
            )

    @property
    def width(self) -> float:
        return self.range_end - self.range_start

    @property
    def span(self) -> float:
        return self.domain_max - self.domain_min

    @property
    def center(self) -> float:
        return (self.range_start + self.range_end) / 2

    def contains(self, position: float) -> bool:
        return self.domain_min <= position <= self.domain_max

    def __call__(self, position: float) -> float:
        if not self.contains(position):
            raise OutOfDomainError(
                f"Position {position} is outside chromosome {self.chromosome} "
                f"[{self.domain_min}, {self.domain_max}]."
            )
        if self.span == 0:
            return self.center
        frac = (position - self.domain_min) / self.span
        return self.range_start + frac * self.width

    def map_array(self, positions: np.ndarray) -> np.ndarray:
        """Vectorized mapping; positions must already lie in the domain."""
        arr = np.asarray(positions, dtype=np.float64)
        if self.span == 0:
            return np.full(arr.shape, self.center)
        return self.range_start + (arr - self.domain_min) / self.span * self.width


def allocate_widths(
    spans: Sequence[float],
    available: float,
    min_width: float = MIN_CHROMOSOME_WIDTH,
) -> np.ndarray:
    """Split ``available`` pixels proportionally to ``spans``.

    Any share below ``min_width`` is pinned to ``min_width`` and the
    rest is redistributed over the remaining chromosomes until no share
    falls below the floor. The result always sums to ``available``.
    """
    spans = np.asarray(spans, dtype=np.float64)
    n = len(spans)
    if n == 0:
        return np.empty(0)
    if n * min_width > available:
        raise ConfigurationError(
            f"{n} chromosomes need at least {n * min_width:g}px "
            f"(min width {min_width:g}px each) but only {available:g}px are available."
        )
    widths = np.zeros(n)
    pinned = np.zeros(n, dtype=bool)
    while True:
        free = ~pinned
        remaining = available - pinned.sum() * min_width
        free_total = spans[free].sum()
        if free_total > 0:
            widths[free] = spans[free] / free_total * remaining
        else:
            widths[free] = remaining / free.sum()
        below = free & (widths < min_width)
        if not below.any():
            break
        pinned |= below
        widths[pinned] = min_width
        if pinned.all():
            break
    return widths


class ChromosomeLayout:
    """Packs per-chromosome PositionScales onto one horizontal axis.

    Chromosomes are placed left to right in the given order, separated
    by a fixed pixel gap. Each chromosome's domain is the [min, max] of
    its own positions.
    """

    def __init__(
        self,
        scales: Sequence[PositionScale],
        gap: float,
        known_positions: Mapping[Any, np.ndarray],
    ) -> None:
        self._scales = tuple(scales)
        self._by_chrom = {s.chromosome: s for s in self._scales}
        self._gap = gap
        self._known = {c: frozenset(np.asarray(p).tolist()) for c, p in known_positions.items()}

    @classmethod
    def build(
        cls,
        chromosome_order: Sequence[Any],
        positions_by_chromosome: Mapping[Any, Sequence[float]],
        total_width: float,
        gap: float = DEFAULT_CHR_GAP,
        offset: float = 0.0,
        min_width: float = MIN_CHROMOSOME_WIDTH,
    ) -> ChromosomeLayout:
        """Lay out chromosomes across ``total_width`` pixels starting at ``offset``.

        Parameters
        ----------
        chromosome_order : chromosomes in left-to-right order
        positions_by_chromosome : {chromosome: positions observed in the data}
        total_width : pixels for all chromosomes plus the gaps between them
        gap : pixels between consecutive chromosomes
        offset : pixel where the first chromosome starts
        min_width : floor for any one chromosome's width
        """
        if len(chromosome_order) == 0:
            raise ConfigurationError("Cannot lay out an empty chromosome list.")
        if len(set(chromosome_order)) != len(chromosome_order):
            raise ConfigurationError("Chromosome order must not repeat chromosomes.")
        if gap < 0:
            raise ConfigurationError(f"Chromosome gap must be >= 0, got {gap}.")

        extents = []
        for chrom in chromosome_order:
            if chrom not in positions_by_chromosome:
                raise OutOfDomainError(f"No positions supplied for chromosome {chrom}.")
            pos = np.asarray(positions_by_chromosome[chrom], dtype=np.float64)
            if len(pos) == 0:
                raise ConfigurationError(f"Chromosome {chrom} has no positions.")
            extents.append((float(pos.min()), float(pos.max())))

        available = total_width - gap * (len(chromosome_order) - 1)
        widths = allocate_widths([hi - lo for lo, hi in extents], available, min_width)

        scales = []
        current = offset
        for chrom, (lo, hi), w in zip(chromosome_order, extents, widths):
            scales.append(PositionScale(chrom, lo, hi, current, current + float(w)))
            current += float(w) + gap
        logger.debug(
            "ChromosomeLayout: %d chromosomes over %.1fpx (gap %.1fpx)",
            len(scales), total_width, gap,
        )
        return cls(
            scales, gap,
            {c: positions_by_chromosome[c] for c in chromosome_order},
        )

    # --- Accessors ---

    @property
    def scales(self) -> tuple[PositionScale, ...]:
        return self._scales

    @property
    def chromosomes(self) -> tuple:
        return tuple(s.chromosome for s in self._scales)

    @property
    def gap(self) -> float:
        return self._gap

    @property
    def start(self) -> float:
        return self._scales[0].range_start

    @property
    def end(self) -> float:
        return self._scales[-1].range_end

    @property
    def total_width(self) -> float:
        """Sum of chromosome widths plus the gaps between them."""
        return self.end - self.start

    def scale(self, chrom: Any) -> PositionScale:
        try:
            return self._by_chrom[chrom]
        except KeyError:
            raise OutOfDomainError(f"Unknown chromosome {chrom!r}.") from None

    def pixel(self, chrom: Any, position: float) -> float:
        """Pixel of a position that was present when the layout was built."""
        scale = self.scale(chrom)
        if position not in self._known[chrom]:
            raise OutOfDomainError(
                f"Position {position} was not among chromosome {chrom}'s positions."
            )
        return scale(position)

    def pixel_to_chromosome(self, pixel: float) -> Any | None:
        """Chromosome whose range holds ``pixel``, or None in a gap or outside."""
        starts = np.array([s.range_start for s in self._scales])
        idx = int(np.searchsorted(starts, pixel, side="right")) - 1
        if idx < 0:
            return None
        scale = self._scales[idx]
        if pixel <= scale.range_end:
            return scale.chromosome
        return None

    def to_dict(self) -> dict:
        return {
            "chromosomes": [str(c) for c in self.chromosomes],
            "chrStart": [s.range_start for s in self._scales],
            "chrEnd": [s.range_end for s in self._scales],
            "gap": self._gap,
        }
