"""End-of-job summary."""

from __future__ import annotations

import sys
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, TextIO

from . import pdg as pdg_module
from .models import EventDerived

_RULE = "  " + "-" * 59


@dataclass
class Report:
    """Totals and cut table of a finished job.

    Attributes:
        n_events: Events classified and appended to the dataset.
        n_runs: Run boundaries seen.
        n_skipped: Events skipped because the particle collection was missing.
        cuts: ``(ordinal, count, label)`` rows in ordinal order.
        output: Path of the written output file.
        flavours: Matched positive-quark flavour counts keyed by ``|pdg|``.
    """

    n_events: int = 0
    n_runs: int = 0
    n_skipped: int = 0
    cuts: list[tuple[int, int, str]] = field(default_factory=list)
    output: str = ""
    flavours: dict[int, int] = field(default_factory=dict)

    def __str__(self) -> str:
        return format_report(self)

    def to_dict(self) -> dict:
        return {
            "n_events": self.n_events,
            "n_runs": self.n_runs,
            "n_skipped": self.n_skipped,
            "cuts": [list(r) for r in self.cuts],
            "output": self.output,
            "flavours": {pdg_module.name(k): v for k, v in sorted(self.flavours.items())},
        }


def flavour_counts(rows: Iterable[EventDerived]) -> dict[int, int]:
    counts = Counter(abs(r.q1_pdg) for r in rows if r.q1_matched)
    return dict(sorted(counts.items()))


def format_cut_table(cuts: Sequence[tuple[int, int, str]], title: str = "Cut Summary") -> str:
    lines = [
        "  =============",
        f"   {title}",
        "  =============",
        "",
        _RULE,
        "   ID   No.Events    Cut Description",
        _RULE,
    ]
    for ordinal, count, label in cuts:
        lines.append(f"  {ordinal:3d}  {count:10d}  : {label}")
    lines.append(_RULE)
    return "\n".join(lines)


def format_report(report: Report) -> str:
    lines = [f"processed {report.n_events} events in {report.n_runs} runs"]
    if report.n_skipped:
        lines.append(f"skipped {report.n_skipped} events without particle collection")
    lines.append(format_cut_table(report.cuts))
    if report.flavours:
        lines.append("  Matched quark flavours:")
        for code, count in report.flavours.items():
            lines.append(f"  {pdg_module.name(code):>10s}: {count}")
    if report.output:
        lines.append(f"  Output: {report.output}")
    return "\n".join(lines)


def emit(report: Report, stream: Optional[TextIO] = None) -> None:
    print(format_report(report), file=stream if stream is not None else sys.stderr)
