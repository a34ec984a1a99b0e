from __future__ import annotations

import re
from typing import Iterator

from ..models import DEFAULT_COLLECTION, MCEvent, MCParticle, link_daughters
from .hepmc3 import _open_text
from .reader_base import Reader

_TAG_EVENT_OPEN = re.compile(r"<event\b")
_TAG_EVENT_CLOSE = re.compile(r"</event>")
_FORTRAN_EXP = re.compile(r"(?<=\d)[dD](?=[+-]?\d)")


def _float(tok: str) -> float:
    return float(_FORTRAN_EXP.sub("e", tok))


def iter_lhe(path: str, run_number: int = 0) -> Iterator[MCEvent]:
    with _open_text(path) as f:
        in_event = False
        buf: list[str] = []
        event_no = 0
        for line in f:
            if not in_event:
                if _TAG_EVENT_OPEN.search(line):
                    in_event = True
                    buf = []
                continue
            if _TAG_EVENT_CLOSE.search(line):
                event_no += 1
                yield _parse_event_block(buf, event_no, run_number)
                in_event = False
                buf = []
            else:
                buf.append(line)


def _parse_event_block(lines: list[str], event_number: int, run_number: int) -> MCEvent:
    # Skip comments and optional <weights>/<rwgt> blocks; they follow the particles.
    body = [s for s in (ln.strip() for ln in lines) if s and not s.startswith("#")]
    if not body:
        return MCEvent(run_number=run_number, event_number=event_number,
                       collections={DEFAULT_COLLECTION: []})

    nup = int(body[0].split()[0])
    particles: list[MCParticle] = []
    for s in body[1:1 + nup]:
        cols = s.split()
        # id status mother1 mother2 col1 col2 px py pz E M lifetime spin
        if len(cols) < 11:
            raise ValueError(f"event {event_number}: malformed LHE particle line: {s!r}")
        mothers = [int(cols[2]), int(cols[3])]
        parents: list[int] = []
        for m in mothers:
            # 1-based mother indices, 0 = none
            if 0 < m <= nup and (m - 1) not in parents:
                parents.append(m - 1)
        particles.append(MCParticle(
            pdg_id=int(cols[0]),
            status=int(cols[1]),
            px=_float(cols[6]),
            py=_float(cols[7]),
            pz=_float(cols[8]),
            energy=_float(cols[9]),
            mass=_float(cols[10]),
            parents=tuple(parents),
        ))

    return MCEvent(
        run_number=run_number,
        event_number=event_number,
        collections={DEFAULT_COLLECTION: link_daughters(particles)},
    )


class LHEReader(Reader):
    def iter_events(self, path: str, run_number: int = 0) -> Iterator[MCEvent]:
        return iter_lhe(path, run_number=run_number)
