"""PDG helpers.

Names, masses and validity come from scikit-hep ``particle``. Generator
pseudo-particles (rootino, bindino, hadronic system, ...) are not in the PDG
table; they get fixed names and no mass.
"""

from __future__ import annotations

from typing import Optional

from particle import InvalidParticle, PDGID, ParticleNotFound
from particle import Particle as _Particle

ROOTINO = 0
HADRONIC_SYSTEM = 2000000001
HADRONIC_BLOB = 2000000002
BINDINO = 2000000101
NUCLEON_CLUSTER = 2000000300

FAKE_NAMES = {
    ROOTINO: "Rootino",
    HADRONIC_SYSTEM: "HadrSyst",
    HADRONIC_BLOB: "HadrBlob",
    BINDINO: "Bindino",
    NUCLEON_CLUSTER: "NuclClst",
}

_MEV_TO_GEV = 1e-3


def is_fake(pdg_code: int) -> bool:
    return pdg_code in FAKE_NAMES


def is_nucleus(pdg_code: int) -> bool:
    """Ion codes follow the 10LZZZAAAI convention."""
    return 1000000000 <= abs(pdg_code) <= 1999999999


def ion_a(pdg_code: int) -> int:
    return (abs(pdg_code) // 10) % 1000


def ion_z(pdg_code: int) -> int:
    return (abs(pdg_code) // 10000) % 1000


def is_valid_pdg_id(pdg_code: int) -> bool:
    if is_fake(pdg_code):
        return True
    return bool(PDGID(pdg_code).is_valid)


def _lookup(pdg_code: int) -> Optional[_Particle]:
    if is_fake(pdg_code):
        return None
    try:
        return _Particle.from_pdgid(pdg_code)
    except (ParticleNotFound, InvalidParticle):
        return None


def name(pdg_code: int) -> str:
    if pdg_code in FAKE_NAMES:
        return FAKE_NAMES[pdg_code]
    p = _lookup(pdg_code)
    if p is not None:
        return p.name
    if is_nucleus(pdg_code):
        return f"A{ion_a(pdg_code)}Z{ion_z(pdg_code)}"
    return str(pdg_code)


def mass_gev(pdg_code: int) -> Optional[float]:
    """On-shell mass in GeV, or None when the table has no entry."""
    p = _lookup(pdg_code)
    if p is None or p.mass is None:
        return None
    return float(p.mass) * _MEV_TO_GEV
