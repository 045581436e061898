"""Datasets bound by the panels of one linked view."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

import numpy as np

from .entity_index import EntityIndex
from .errors import DataShapeError
from .lod_data import LodData
from .validation import validate_entity_counts

MAX_SCATTERS = 2


def _float_array(values: Any, what: str) -> np.ndarray:
    try:
        return np.array(
            [np.nan if v is None else v for v in values], dtype=np.float64
        )
    except (TypeError, ValueError):
        raise DataShapeError(f"{what} must be a sequence of numbers.") from None


@dataclass(frozen=True)
class CurveData:
    """One curve per entity: ``xs[i]`` and ``ys[i]`` have equal length."""

    xs: tuple[np.ndarray, ...]
    ys: tuple[np.ndarray, ...]

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> CurveData:
        """Build from ``{"x": [...] or [[...], ...], "data": [[y, ...], ...]}``.

        A flat ``x`` is shared by every curve; a nested one gives each
        curve its own x values.
        """
        if "data" not in payload:
            raise DataShapeError("Curve payload needs a 'data' list of y vectors.")
        ys = tuple(_float_array(row, f"Curve {i} y values")
                   for i, row in enumerate(payload["data"]))
        x = payload.get("x")
        if x is None:
            xs = tuple(np.arange(len(y), dtype=np.float64) for y in ys)
        elif len(x) > 0 and isinstance(x[0], (list, tuple, np.ndarray)):
            if len(x) != len(ys):
                raise DataShapeError(
                    f"Got {len(x)} x vectors for {len(ys)} curves."
                )
            xs = tuple(_float_array(row, f"Curve {i} x values") for i, row in enumerate(x))
        else:
            shared = _float_array(x, "Curve x values")
            xs = tuple(shared for _ in ys)
        for i, (cx, cy) in enumerate(zip(xs, ys)):
            if len(cx) != len(cy):
                raise DataShapeError(
                    f"Curve {i} has {len(cx)} x values but {len(cy)} y values."
                )
        return cls(xs=xs, ys=ys)

    @property
    def n_entities(self) -> int:
        return len(self.ys)

    def all_x(self) -> np.ndarray:
        return np.concatenate(self.xs) if self.xs else np.empty(0)

    def all_y(self) -> np.ndarray:
        return np.concatenate(self.ys) if self.ys else np.empty(0)


@dataclass(frozen=True)
class ScatterData:
    """One (x, y) point per entity; NaN marks a missing coordinate."""

    points: np.ndarray  # (n, 2)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> ScatterData:
        """Build from ``{"data": [[x, y], ...]}``."""
        if "data" not in payload:
            raise DataShapeError("Scatter payload needs a 'data' list of [x, y] pairs.")
        rows = [_float_array(pair, f"Scatter point {i}")
                for i, pair in enumerate(payload["data"])]
        bad = [i for i, r in enumerate(rows) if len(r) != 2]
        if bad:
            raise DataShapeError(f"Scatter points must be [x, y] pairs; bad rows: {bad[:5]}")
        points = np.vstack(rows) if rows else np.empty((0, 2))
        return cls(points=points)

    @property
    def n_entities(self) -> int:
        return len(self.points)

    @property
    def x(self) -> np.ndarray:
        return self.points[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self.points[:, 1]


@dataclass(frozen=True)
class LinkedDataset:
    """Everything one render call binds: a LOD scan and/or linked entities."""

    lod: LodData | None = None
    curves: CurveData | None = None
    scatters: tuple[ScatterData, ...] = ()
    groups: Sequence[Any] | None = field(default=None)

    def __post_init__(self) -> None:
        if len(self.scatters) > MAX_SCATTERS:
            raise DataShapeError(
                f"At most {MAX_SCATTERS} scatter plots can be linked, got {len(self.scatters)}."
            )
        if self.lod is None and self.curves is None and not self.scatters:
            raise DataShapeError("Dataset has nothing to draw.")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> LinkedDataset:
        """Parse the JSON-like payload produced upstream.

        The LOD part is present when ``traitValues`` is; ``curves``,
        ``scatters`` and ``entityGroups`` are optional.
        """
        lod = LodData.from_dict(payload) if "traitValues" in payload else None
        curves = CurveData.from_dict(payload["curves"]) if payload.get("curves") else None
        scatters = tuple(ScatterData.from_dict(s) for s in payload.get("scatters") or ())
        return cls(lod=lod, curves=curves, scatters=scatters,
                   groups=payload.get("entityGroups"))

    @property
    def has_entities(self) -> bool:
        return self.curves is not None or bool(self.scatters)

    def entity_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        if self.curves is not None:
            counts["curves"] = self.curves.n_entities
        for i, scatter in enumerate(self.scatters, start=1):
            counts[f"scatter{i}"] = scatter.n_entities
        if self.groups is not None and self.has_entities:
            counts["entityGroups"] = len(self.groups)
        return counts

    def entity_index(self) -> EntityIndex:
        """Validate co-linked counts and build the shared index space."""
        n = validate_entity_counts(self.entity_counts())
        groups = self.groups if self.has_entities else None
        return EntityIndex.from_groups(groups, n=n)
