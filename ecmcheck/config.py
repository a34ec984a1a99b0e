"""Job-level steering parameters."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, fields
from typing import Optional

from .aggregate import DEFAULT_HEARTBEAT
from .cuts import DEFAULT_CAPACITY
from .models import DEFAULT_COLLECTION

DEFAULT_ECM = 500.0
DEFAULT_OUTPUT = "output.root"


@dataclass(frozen=True)
class JobConfig:
    """Steering parameters of one analysis job.

    Attributes:
        collection: Name of the particle collection read from each event.
        ecm: Centre-of-mass energy in GeV used for the nominal beam vector.
        heartbeat: A progress line is printed every ``heartbeat`` events.
        output: Output file path; ``.root`` or ``.parquet``.
        output_format: Explicit output format, detected from ``output`` if None.
        quiet: Suppress progress and summary output.
        cut_capacity: Number of cut-table ordinals (histogram bins).
        extra_stages: Labels of cut stages declared after "No Cuts".
    """

    collection: str = DEFAULT_COLLECTION
    ecm: float = DEFAULT_ECM
    heartbeat: int = DEFAULT_HEARTBEAT
    output: str = DEFAULT_OUTPUT
    output_format: Optional[str] = None
    quiet: bool = False
    cut_capacity: int = DEFAULT_CAPACITY
    extra_stages: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.collection:
            raise ValueError("collection name must not be empty")
        if self.ecm < 0:
            raise ValueError(f"ecm must be non-negative, got {self.ecm}")
        if self.heartbeat <= 0:
            raise ValueError(f"heartbeat must be positive, got {self.heartbeat}")
        if self.cut_capacity <= 0:
            raise ValueError(f"cut_capacity must be positive, got {self.cut_capacity}")
        if len(self.extra_stages) >= self.cut_capacity:
            raise ValueError("too many extra cut stages for the cut table capacity")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "JobConfig":
        """Build a config from parsed CLI arguments; missing attributes keep defaults."""
        kwargs = {}
        for f in fields(cls):
            value = getattr(args, f.name, None)
            if value is not None:
                kwargs[f.name] = tuple(value) if f.name == "extra_stages" else value
        return cls(**kwargs)

    def describe(self) -> str:
        lines = ["Parameters:"]
        for f in fields(self):
            lines.append(f"  {f.name:<14s} {getattr(self, f.name)!r}")
        return "\n".join(lines)
