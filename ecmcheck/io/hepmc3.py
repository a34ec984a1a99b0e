from __future__ import annotations

import gzip
import io
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from ..models import DEFAULT_COLLECTION, MCEvent, MCParticle, link_daughters
from .reader_base import Reader

logger = logging.getLogger(__name__)


def _open_text(path: str):
    p = Path(path)
    if p.suffix == ".gz":
        return io.TextIOWrapper(gzip.open(p, "rb"), encoding="utf-8", errors="replace")
    return open(p, "r", encoding="utf-8", errors="replace")


# --- HepMC3 Asciiv3 ---------------------------------------------------------------------
#
# Records used by the analysis:
#   E <evtno> [<nvtx> <npart>] [@ x y z t]   (event start)
#   U <mom_unit> <len_unit>                   (GEV or MEV momenta)
#   V <vtxid> <status> [<in1>,<in2>,...] [@ x y z t]
#   P <id> <prod> <pdg> <px> <py> <pz> <e> <m> <status>
#   A <id> <name> <value>                     (attribute; "overlay" on particles)
#
# <prod> is the production vertex id when negative, the single parent particle
# id when positive and 0 for particles without production vertex. Other
# records are ignored.

_TRUE = {"1", "true", "yes"}


class _EventBuffer:
    def __init__(self, event_number: int, run_number: int):
        self.event_number = event_number
        self.run_number = run_number
        self.order: List[int] = []
        self.raw: Dict[int, dict] = {}
        self.vertex_in: Dict[int, List[int]] = {}
        self.overlay: set[int] = set()
        self.momentum_scale = 1.0

    def to_event(self) -> MCEvent:
        position = {pid: i for i, pid in enumerate(self.order)}
        particles: List[MCParticle] = []
        for pid in self.order:
            rec = self.raw[pid]
            prod = rec["prod"]
            if prod < 0:
                parent_ids = self.vertex_in.get(prod, [])
            elif prod > 0:
                parent_ids = [prod]
            else:
                parent_ids = []
            s = self.momentum_scale
            particles.append(
                MCParticle(
                    pdg_id=rec["pdg"],
                    px=rec["px"] * s,
                    py=rec["py"] * s,
                    pz=rec["pz"] * s,
                    energy=rec["e"] * s,
                    mass=rec["m"] * s,
                    status=rec["status"],
                    parents=tuple(position[q] for q in parent_ids if q in position),
                    overlay=pid in self.overlay,
                )
            )
        return MCEvent(
            run_number=self.run_number,
            event_number=self.event_number,
            collections={DEFAULT_COLLECTION: link_daughters(particles)},
        )


def _parse_vertex_incoming(token: str) -> List[int]:
    token = token.strip("[]")
    if not token:
        return []
    return [int(x) for x in token.split(",") if x]


def iter_hepmc3(path: str, run_number: int = 0) -> Iterator[MCEvent]:
    """Iterate events from a HepMC3 ASCII (Asciiv3) file."""
    with _open_text(path) as f:
        current: Optional[_EventBuffer] = None
        momentum_scale = 1.0

        for lineno, raw in enumerate(f, start=1):
            line = raw.strip()
            if not line or line.startswith("#") or line.startswith("HepMC::"):
                continue

            parts = line.split()
            tag = parts[0]

            try:
                if tag == "E":
                    if current is not None:
                        yield current.to_event()
                    evtno = int(parts[1]) if len(parts) > 1 else 0
                    current = _EventBuffer(evtno, run_number)
                    current.momentum_scale = momentum_scale
                    continue

                if tag == "U":
                    momentum_scale = 1e-3 if len(parts) > 1 and parts[1].upper() == "MEV" else 1.0
                    if current is not None:
                        current.momentum_scale = momentum_scale
                    continue

                if current is None:
                    continue

                if tag == "V":
                    vid = int(parts[1])
                    incoming = _parse_vertex_incoming(parts[3]) if len(parts) > 3 and parts[3] != "@" else []
                    current.vertex_in[vid] = incoming
                    continue

                if tag == "P":
                    if len(parts) < 10:
                        raise ValueError("particle record needs 9 fields")
                    pid = int(parts[1])
                    current.order.append(pid)
                    current.raw[pid] = {
                        "prod": int(parts[2]),
                        "pdg": int(parts[3]),
                        "px": float(parts[4]),
                        "py": float(parts[5]),
                        "pz": float(parts[6]),
                        "e": float(parts[7]),
                        "m": float(parts[8]),
                        "status": int(parts[9]),
                    }
                    continue

                if tag == "A":
                    if len(parts) >= 4 and parts[2].lower() == "overlay" and int(parts[1]) > 0:
                        if parts[3].lower() in _TRUE:
                            current.overlay.add(int(parts[1]))
                    continue
            except (IndexError, ValueError) as e:
                raise ValueError(f"{path}:{lineno}: malformed '{tag}' record: {e}") from e

            logger.debug("%s:%d: ignoring record '%s'", path, lineno, tag)

        if current is not None:
            yield current.to_event()


class HepMC3Reader(Reader):
    def iter_events(self, path: str, run_number: int = 0) -> Iterator[MCEvent]:
        return iter_hepmc3(path, run_number=run_number)
