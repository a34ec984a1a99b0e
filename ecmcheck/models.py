"""
Core data model for ecmcheck.

Particles of one event are stored as a flat arena: parent and daughter links
are integer positions inside the same collection, never object references.
The whole arena is discarded once the event has been classified.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

DEFAULT_COLLECTION = "MCParticle"


@dataclass(frozen=True)
class FourVector:
    """Energy-momentum four-vector ``(px, py, pz, e)`` in GeV."""

    px: float = 0.0
    py: float = 0.0
    pz: float = 0.0
    e: float = 0.0

    def __add__(self, other: "FourVector") -> "FourVector":
        return FourVector(
            self.px + other.px,
            self.py + other.py,
            self.pz + other.pz,
            self.e + other.e,
        )

    @classmethod
    def from_kinematics(cls, px: float, py: float, pz: float, e: float) -> "FourVector":
        return cls(float(px), float(py), float(pz), float(e))

    @classmethod
    def from_particle(cls, particle: "MCParticle") -> "FourVector":
        return cls.from_kinematics(particle.px, particle.py, particle.pz, particle.energy)

    @classmethod
    def beam(cls, ecm: float) -> "FourVector":
        """Nominal beam four-momentum at rest in the lab: ``(0, 0, 0, ecm)``."""
        return cls(0.0, 0.0, 0.0, float(ecm))

    @property
    def p2(self) -> float:
        """Squared 3-momentum magnitude."""
        return self.px * self.px + self.py * self.py + self.pz * self.pz

    @property
    def pt(self) -> float:
        return math.sqrt(self.px * self.px + self.py * self.py)

    @property
    def mass2(self) -> float:
        return self.e * self.e - self.p2

    @property
    def mass(self) -> float:
        """Invariant mass, signed for slightly negative ``mass2``."""
        m2 = self.mass2
        return math.sqrt(m2) if m2 >= 0.0 else -math.sqrt(-m2)

    def components(self) -> tuple[float, float, float, float]:
        return (self.px, self.py, self.pz, self.e)


ZERO = FourVector()


@dataclass(frozen=True)
class MCParticle:
    """A single generated particle.

    Attributes:
        pdg_id: PDG Monte Carlo particle code.
        status: Generator status code (1 = final state).
        px, py, pz, energy: Four-momentum components in GeV.
        mass: Generated mass in GeV.
        parents: Positions of the parent particles in the same collection.
        daughters: Positions of the daughter particles in the same collection.
        overlay: True when the particle comes from background overlay rather
            than the primary interaction.
    """

    pdg_id: int
    px: float = 0.0
    py: float = 0.0
    pz: float = 0.0
    energy: float = 0.0
    mass: float = 0.0
    status: int = 1
    parents: tuple[int, ...] = ()
    daughters: tuple[int, ...] = ()
    overlay: bool = False

    @property
    def is_root(self) -> bool:
        return not self.parents

    @property
    def p4(self) -> FourVector:
        return FourVector.from_particle(self)


def parent_pdg(particles: Sequence[MCParticle], particle: MCParticle) -> int:
    """PDG code of the first parent, or 0 when the particle has none."""
    if not particle.parents:
        return 0
    return particles[particle.parents[0]].pdg_id


def daughter_pdg(particles: Sequence[MCParticle], particle: MCParticle) -> int:
    """PDG code of the first daughter, or 0 when the particle has none."""
    if not particle.daughters:
        return 0
    return particles[particle.daughters[0]].pdg_id


def link_daughters(particles: Sequence[MCParticle]) -> list[MCParticle]:
    """Return a copy of ``particles`` with ``daughters`` rebuilt from ``parents``.

    Daughter order follows the order of the children in the collection.
    """
    children: list[list[int]] = [[] for _ in particles]
    for idx, p in enumerate(particles):
        for parent in p.parents:
            if 0 <= parent < len(particles) and idx not in children[parent]:
                children[parent].append(idx)
    out: list[MCParticle] = []
    for p, kids in zip(particles, children):
        out.append(
            MCParticle(
                pdg_id=p.pdg_id,
                px=p.px,
                py=p.py,
                pz=p.pz,
                energy=p.energy,
                mass=p.mass,
                status=p.status,
                parents=p.parents,
                daughters=tuple(kids),
                overlay=p.overlay,
            )
        )
    return out


@dataclass
class MCEvent:
    """One event as delivered by an event source.

    Attributes:
        run_number: Run this event belongs to.
        event_number: Sequential event number within the input.
        collections: Named particle collections of the event.
    """

    run_number: int = 0
    event_number: int = 0
    collections: dict[str, list[MCParticle]] = field(default_factory=dict)

    def get_collection(self, name: str) -> list[MCParticle]:
        from .errors import MissingInputCollection

        try:
            return self.collections[name]
        except KeyError:
            raise MissingInputCollection(name, self.event_number) from None


@dataclass(frozen=True)
class EventDerived:
    """Per-event quantities derived by the classifier.

    Unmatched quark and boson slots keep the zero vector and code 0; the
    ``*_matched`` flags tell a genuine match apart from that default.
    """

    n_mcp: int = 0
    n_origin: int = 0
    q1_pdg: int = 0
    q2_pdg: int = 0
    q1: FourVector = ZERO
    q2: FourVector = ZERO
    z: FourVector = ZERO
    h: FourVector = ZERO
    isr1: FourVector = ZERO
    isr2: FourVector = ZERO
    ecm: FourVector = ZERO
    qqh_isr12: FourVector = ZERO
    q1_matched: bool = False
    q2_matched: bool = False
    h_matched: bool = False

    def vectors(self) -> dict[str, FourVector]:
        """Four-vector fields keyed by their output column prefix."""
        return {
            "lrzq1mc": self.q1,
            "lrzq2mc": self.q2,
            "lrzZmc": self.z,
            "lrzHmc": self.h,
            "lrzISR1mc": self.isr1,
            "lrzISR2mc": self.isr2,
            "lrzEcm": self.ecm,
            "lrzqqHisr12": self.qqh_isr12,
        }

    def to_dict(self) -> dict:
        """Flatten into one output row."""
        row: dict = {
            "nmcp": self.n_mcp,
            "norigin": self.n_origin,
            "flvq1mc": self.q1_pdg,
            "flvq2mc": self.q2_pdg,
        }
        for name, vec in self.vectors().items():
            row[f"{name}_px"] = vec.px
            row[f"{name}_py"] = vec.py
            row[f"{name}_pz"] = vec.pz
            row[f"{name}_e"] = vec.e
        return row
