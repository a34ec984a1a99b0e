from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ..cuts import CutTable
from ..models import EventDerived


class Writer(ABC):
    """Output destination for the per-event dataset and the cut histogram.

    ``open`` is called once at job start and ``close`` exactly once at job end.
    """

    @abstractmethod
    def open(self, path: str, **kwargs) -> None:
        ...

    @abstractmethod
    def write(self, rows: Sequence[EventDerived], cuts: CutTable) -> None:
        ...

    @abstractmethod
    def close(self) -> None:
        ...
