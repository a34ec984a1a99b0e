"""Cut table: named selection stages with running pass counts."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import CapacityExceeded, UnknownStage

DEFAULT_CAPACITY = 20
NO_CUTS = "No Cuts"


@dataclass
class CutStage:
    """One selection stage. ``count`` only ever increases."""

    ordinal: int
    label: str
    count: int = 0


class CutTable:
    """Ordered selection stages keyed by a 0-based ordinal.

    The first label declared for an ordinal is kept for the lifetime of the
    table. Ordinals must lie in ``[0, capacity)``.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError("Cut table capacity must be positive")
        self.capacity = capacity
        self._stages: dict[int, CutStage] = {}

    def __len__(self) -> int:
        return len(self._stages)

    def __contains__(self, ordinal: int) -> bool:
        return ordinal in self._stages

    def declare(self, ordinal: int, label: str) -> CutStage:
        if not 0 <= ordinal < self.capacity:
            raise CapacityExceeded(ordinal, self.capacity)
        stage = self._stages.get(ordinal)
        if stage is None:
            stage = CutStage(ordinal=ordinal, label=label)
            self._stages[ordinal] = stage
        return stage

    def add_stage(self, label: str) -> int:
        """Declare ``label`` at the next free ordinal and return that ordinal.

        A label that is already declared keeps its existing ordinal.
        """
        for stage in self._stages.values():
            if stage.label == label:
                return stage.ordinal
        ordinal = max(self._stages, default=-1) + 1
        self.declare(ordinal, label)
        return ordinal

    def record_pass(self, ordinal: int) -> None:
        try:
            self._stages[ordinal].count += 1
        except KeyError:
            raise UnknownStage(ordinal) from None

    def count(self, ordinal: int) -> int:
        try:
            return self._stages[ordinal].count
        except KeyError:
            raise UnknownStage(ordinal) from None

    def label(self, ordinal: int) -> str:
        try:
            return self._stages[ordinal].label
        except KeyError:
            raise UnknownStage(ordinal) from None

    def render(self) -> list[tuple[int, int, str]]:
        """``(ordinal, count, label)`` for every declared stage, ascending."""
        return [(o, self._stages[o].count, self._stages[o].label) for o in sorted(self._stages)]

    def bin_labels(self) -> list[str]:
        """One label per ordinal up to ``capacity``; undeclared ordinals are empty."""
        return [self._stages[o].label if o in self._stages else "" for o in range(self.capacity)]

    def histogram(self) -> tuple[np.ndarray, np.ndarray]:
        """Pass counts as a fixed-binning histogram ``(counts, edges)``.

        Bin ``k`` covers ``[k, k + 1)`` and holds the count of ordinal ``k``.
        """
        counts = np.zeros(self.capacity, dtype=np.float64)
        for ordinal, stage in self._stages.items():
            counts[ordinal] = stage.count
        edges = np.arange(self.capacity + 1, dtype=np.float64)
        return counts, edges
