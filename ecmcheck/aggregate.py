"""Run/event bookkeeping and the growing per-event dataset."""

from __future__ import annotations

from typing import Callable, Optional

from .models import EventDerived

DEFAULT_HEARTBEAT = 1000


class RunAggregator:
    """Collects one ``EventDerived`` row per processed event, in arrival order.

    Attributes:
        n_run: Number of run boundaries seen.
        n_evt: Number of events appended.
        rows: Derived rows, one per event.
    """

    def __init__(
        self,
        heartbeat: int = DEFAULT_HEARTBEAT,
        on_heartbeat: Optional[Callable[[int], None]] = None,
    ):
        if heartbeat <= 0:
            raise ValueError("heartbeat interval must be positive")
        self.heartbeat = heartbeat
        self.on_heartbeat = on_heartbeat
        self.n_run = 0
        self.n_evt = 0
        self.rows: list[EventDerived] = []

    def __len__(self) -> int:
        return len(self.rows)

    def on_run_start(self) -> None:
        self.n_run += 1

    def on_event(self, derived: EventDerived) -> None:
        self.n_evt += 1
        self.rows.append(derived)
        if self.on_heartbeat is not None and self.n_evt % self.heartbeat == 0:
            self.on_heartbeat(self.n_evt)
