"""Test fixtures.

Small HepMC3 and LHE event files are (re)generated at test collection time
so the suite does not depend on shipped data files.
"""

from __future__ import annotations

from pathlib import Path

# Event 1: two ISR photons, b bbar, H, a gluon from each quark and one overlay pion.
# The visible momenta add up to (0, 0, 0, 500).
# Event 2: empty. Event 3: c cbar at list positions 0 and 1 plus a photon.
ZH_HEPMC = """HepMC::Version 3.02.05
HepMC::Asciiv3-START_EVENT_LISTING
W Weight
E 1 1 8
U GEV MM
W 1.0
P 1 0 22 0.0 0.0 10.0 10.0 0.0 1
P 2 0 22 0.0 0.0 -5.0 5.0 0.0 1
P 3 0 5 30.0 10.0 20.0 40.0 4.8 2
P 4 0 -5 -30.0 -10.0 -20.0 40.0 4.8 2
P 5 0 25 0.0 0.0 -5.0 405.0 125.0 2
V -1 0 [3]
P 6 -1 21 10.0 5.0 5.0 12.0 0.0 1
P 7 0 211 1.0 0.0 0.0 1.5 0.13957 1
P 8 4 21 -10.0 -5.0 -5.0 12.0 0.0 1
A 7 overlay 1
E 2 0 0
U GEV MM
E 3 0 3
U GEV MM
P 1 0 4 0.0 20.0 10.0 30.0 1.5 2
P 2 0 -4 0.0 -20.0 -10.0 30.0 1.5 2
P 3 0 22 0.0 0.0 40.0 40.0 0.0 1
HepMC::Asciiv3-END_EVENT_LISTING
"""

# e+e- -> H d dbar with the beams as mothers of everything else.
ZH_LHE = """<LesHouchesEvents version="3.0">
<init>
11 -11 250 250 0 0 0 0 3 1
1.0 0.0 1.0 1
</init>
<event>
5 1 1.0 250.0 0.0078 0.118
# beams
  11 -1 0 0 0 0  0.0 0.0 250.0 250.0 0.000511 0 9
 -11 -1 0 0 0 0  0.0 0.0 -250.0 250.0 0.000511 0 9
  25 1 1 2 0 0  0.0 0.0 50.0 1.3D+02 125.0 0 9
   1 1 1 2 501 0  40.0 0.0 -25.0 185.0 0.0 0 9
  -1 1 1 2 0 501  -40.0 0.0 -25.0 185.0 0.0 0 9
</event>
</LesHouchesEvents>
"""


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def pytest_configure(config):  # noqa: D401
    """Ensure fixtures exist before any tests run."""
    fixtures = Path(__file__).resolve().parent / "fixtures"
    _write_text(fixtures / "zh_qq.hepmc", ZH_HEPMC)
    _write_text(fixtures / "ee_zh.lhe", ZH_LHE)
