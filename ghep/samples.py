"""Small, deterministic records for demos and smoke tests."""

from __future__ import annotations

import math
from typing import Optional

from . import pdg as pdg_module
from .models import FourVector, Interaction
from .record import EventRecord
from .status import ParticleStatus

NU_MU = 14
MUON = 13
PROTON = 2212
NEUTRON = 2112
O16 = 1000080160
O15 = 1000080150

# approximate nuclear masses (GeV); nuclei do not enter the balance
_NUCLEUS_MASS = {O16: 14.8951, O15: 13.9713}


def _two_body(total: FourVector, m1: float, m2: float, cos_theta: float) -> tuple[FourVector, FourVector]:
    """Split ``total`` (moving along z) into two bodies; angle is in the CM frame."""
    s = total.mass**2
    p_star = math.sqrt((s - (m1 + m2) ** 2) * (s - (m1 - m2) ** 2)) / (2 * math.sqrt(s))
    e_star = math.sqrt(p_star**2 + m1**2)
    sin_theta = math.sqrt(1.0 - cos_theta**2)

    beta = total.z / total.t
    gamma = total.t / math.sqrt(s)
    pz = gamma * (p_star * cos_theta + beta * e_star)
    e = gamma * (e_star + beta * p_star * cos_theta)
    first = FourVector(p_star * sin_theta, 0.0, pz, e)
    return first, total - first


def build_qel_record(
    neutrino_energy: float = 1.0,
    cos_theta: float = 0.0,
    record: Optional[EventRecord] = None,
) -> EventRecord:
    """Charged-current quasi-elastic numu + O16 -> mu- + p + O15.

    The struck neutron is at rest, so final-minus-initial balances to zero.
    The remnant is appended after the muon, which breaks the nucleus'
    daughter list and exercises compaction.
    """
    rec = record if record is not None else EventRecord(6)
    origin = FourVector()

    m_n = pdg_module.mass_gev(NEUTRON)
    m_mu = pdg_module.mass_gev(MUON)
    m_p = pdg_module.mass_gev(PROTON)

    nu = FourVector(0.0, 0.0, neutrino_energy, neutrino_energy)
    nucleon = FourVector(0.0, 0.0, 0.0, m_n)
    mu, proton = _two_body(nu + nucleon, m_mu, m_p, cos_theta)

    ist = ParticleStatus
    rec.add_particle(NU_MU, ist.INITIAL_STATE, -1, -1, -1, -1, nu, origin)
    rec.add_particle(
        O16, ist.INITIAL_STATE, -1, -1, -1, -1,
        FourVector(0.0, 0.0, 0.0, _NUCLEUS_MASS[O16]), origin,
    )
    rec.add_particle(NEUTRON, ist.NUCLEON_TARGET, 1, -1, -1, -1, nucleon, origin)
    rec.add_particle(MUON, ist.STABLE_FINAL_STATE, 0, -1, -1, -1, mu, origin)
    rec.add_particle(
        O15, ist.FINAL_STATE_NUCLEAR_REMNANT, 1, -1, -1, -1,
        FourVector(0.0, 0.0, 0.0, _NUCLEUS_MASS[O15]), origin,
    )
    rec.add_particle(PROTON, ist.STABLE_FINAL_STATE, 2, -1, -1, -1, proton, origin)

    rec.attach_interaction(Interaction(
        probe_pdg=NU_MU,
        target_pdg=O16,
        hit_nucleon_pdg=NEUTRON,
        process="CCQE",
        kinematics={"Q2": (nu - mu).mass ** 2},
    ))
    return rec
