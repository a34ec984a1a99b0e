from __future__ import annotations

import pytest

from ecmcheck.errors import MissingInputCollection
from ecmcheck.models import (
    ZERO,
    FourVector,
    MCEvent,
    MCParticle,
    daughter_pdg,
    link_daughters,
    parent_pdg,
)


def test_fourvector_addition_is_componentwise():
    a = FourVector(1.0, 2.0, 3.0, 10.0)
    b = FourVector(-1.0, 0.5, -3.0, 5.0)
    assert a + b == FourVector(0.0, 2.5, 0.0, 15.0)
    assert a + ZERO == a


def test_fourvector_constructors():
    assert FourVector.beam(500) == FourVector(0.0, 0.0, 0.0, 500.0)
    assert FourVector.from_kinematics(1, 2, 3, 4).components() == (1.0, 2.0, 3.0, 4.0)
    p = MCParticle(pdg_id=5, px=3.0, py=4.0, pz=0.0, energy=13.0)
    v = FourVector.from_particle(p)
    assert v == p.p4
    assert v.pt == pytest.approx(5.0)
    assert v.mass == pytest.approx(12.0)


def test_fourvector_mass_is_signed_for_spacelike_vectors():
    assert FourVector(0.0, 0.0, 5.0, 3.0).mass == pytest.approx(-4.0)


def test_parent_and_daughter_codes_use_first_link():
    particles = link_daughters([
        MCParticle(pdg_id=25),
        MCParticle(pdg_id=23),
        MCParticle(pdg_id=5, parents=(0, 1)),
        MCParticle(pdg_id=-5, parents=(0,)),
    ])
    assert particles[0].daughters == (2, 3)
    assert particles[1].daughters == (2,)
    assert parent_pdg(particles, particles[2]) == 25
    assert parent_pdg(particles, particles[0]) == 0
    assert daughter_pdg(particles, particles[0]) == 5
    assert daughter_pdg(particles, particles[3]) == 0
    assert particles[0].is_root and not particles[2].is_root


def test_missing_collection_raises():
    ev = MCEvent(event_number=4, collections={"MCParticle": []})
    assert ev.get_collection("MCParticle") == []
    with pytest.raises(MissingInputCollection) as exc:
        ev.get_collection("MCParticlesSkimmed")
    assert exc.value.collection == "MCParticlesSkimmed"
    assert exc.value.event_number == 4
