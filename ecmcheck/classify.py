"""Single-pass truth classification of one event's generated particles."""

from __future__ import annotations

from typing import Sequence

from .models import ZERO, EventDerived, FourVector, MCParticle, parent_pdg
from .pdg import HIGGS, is_antiquark, is_quark


def classify_event(particles: Sequence[MCParticle], ecm: float) -> EventDerived:
    """Derive quark, boson and leading four-vectors from ``particles``.

    Quarks and the boson are only taken from particles whose first parent
    carries code 0 (roots) and that are not overlay. The two leading slots are
    positional: list entries 0 and 1 when they are roots, whatever their
    species.
    """
    n_origin = 0
    q1_pdg = q2_pdg = 0
    q1 = q2 = h = ZERO
    isr = [ZERO, ZERO]
    z = ZERO
    q1_matched = q2_matched = h_matched = False

    for i, p in enumerate(particles):
        pdg = p.pdg_id
        mother = parent_pdg(particles, p)
        if p.is_root and not p.overlay:
            n_origin += 1
        lortz = FourVector.from_particle(p)
        primary = mother == 0 and not p.overlay

        if is_quark(pdg) and primary:
            q1_pdg, q1 = pdg, lortz
            q1_matched = True
            z = z + lortz
        elif is_antiquark(pdg) and primary:
            q2_pdg, q2 = pdg, lortz
            q2_matched = True
            z = z + lortz
        elif pdg == HIGGS and primary:
            h = lortz
            h_matched = True

        if i < 2 and mother == 0:
            isr[i] = lortz

    return EventDerived(
        n_mcp=len(particles),
        n_origin=n_origin,
        q1_pdg=q1_pdg,
        q2_pdg=q2_pdg,
        q1=q1,
        q2=q2,
        z=z,
        h=h,
        isr1=isr[0],
        isr2=isr[1],
        ecm=FourVector.beam(ecm),
        qqh_isr12=q1 + q2 + h + isr[0] + isr[1],
        q1_matched=q1_matched,
        q2_matched=q2_matched,
        h_matched=h_matched,
    )
