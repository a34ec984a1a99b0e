from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator

from ..models import MCEvent


class Reader(ABC):
    """Event source. Particles are delivered in the ``MCParticle`` collection."""

    @abstractmethod
    def iter_events(self, path: str, run_number: int = 0) -> Iterator[MCEvent]:
        ...
