"""EntityIndex: the shared identity space of one linked view."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import OutOfDomainError
from .groups import group_to_index


@dataclass(frozen=True)
class EntityIndex:
    """Stable integer ids ``0..n-1`` with a parallel group assignment.

    Every entity panel tags its elements with these ids. The index is
    read-only after construction; panels never renumber entities.
    """

    groups: np.ndarray

    @classmethod
    def from_groups(cls, labels=None, n: int | None = None) -> EntityIndex:
        """Create from raw group labels (or a plain count with one group)."""
        groups = group_to_index(labels, n=n)
        groups.flags.writeable = False
        return cls(groups=groups)

    @property
    def size(self) -> int:
        return len(self.groups)

    @property
    def n_groups(self) -> int:
        if self.size == 0:
            return 0
        return int(self.groups.max()) + 1

    def __len__(self) -> int:
        return self.size

    def __contains__(self, index: object) -> bool:
        return isinstance(index, (int, np.integer)) and 0 <= index < self.size

    def group_of(self, index: int) -> int:
        """Group of entity ``index``."""
        if index not in self:
            raise OutOfDomainError(
                f"Entity index {index!r} is outside [0, {self.size})."
            )
        return int(self.groups[index])

    def to_dict(self) -> dict:
        return {"size": self.size, "groups": self.groups.tolist()}
