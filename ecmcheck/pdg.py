"""PDG helpers.

Classification uses plain numeric code ranges. Human-readable names for
summaries come from scikit-hep ``particle``.
"""

from __future__ import annotations

from particle import Particle as _Particle
from particle import InvalidParticle, ParticleNotFound

HIGGS = 25


def is_quark(pdg_id: int) -> bool:
    """Quark codes 1..9."""
    return 0 < pdg_id < 10


def is_antiquark(pdg_id: int) -> bool:
    """Antiquark codes -9..-1."""
    return -10 < pdg_id < 0


def name(pdg_id: int) -> str:
    try:
        return _Particle.from_pdgid(pdg_id).name
    except (InvalidParticle, ParticleNotFound):
        return str(pdg_id)
