"""
Value types stored in the event record.

A ``Particle`` is one entry of the record: kinematics plus positional
mother/daughter references into the owning record. An ``Interaction`` is
the opaque summary attached to a record.
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field, replace
from typing import NamedTuple, Optional

from . import pdg as pdg_module
from .status import ParticleStatus

# |pdg mass - p4 mass| below this (GeV) counts as on the mass shell
OFF_SHELL_DM = 0.002


class FourVector(NamedTuple):
    """A Lorentz 4-vector, used for both (px, py, pz, E) and (x, y, z, t)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    t: float = 0.0

    def __add__(self, other) -> "FourVector":  # type: ignore[override]
        return FourVector(
            self.x + other[0], self.y + other[1], self.z + other[2], self.t + other[3]
        )

    def __sub__(self, other) -> "FourVector":
        return FourVector(
            self.x - other[0], self.y - other[1], self.z - other[2], self.t - other[3]
        )

    def __neg__(self) -> "FourVector":
        return FourVector(-self.x, -self.y, -self.z, -self.t)

    @property
    def mass(self) -> float:
        """Invariant mass.

        m^2 = t^2 - |r|^2 can drift slightly negative for massless
        particles; small negative values are clamped to zero.
        """
        m2 = self.t**2 - self.x**2 - self.y**2 - self.z**2
        if m2 < 0 and abs(m2) < 1e-8:
            m2 = 0.0
        return math.sqrt(m2) if m2 >= 0 else -math.sqrt(-m2)


@dataclass
class Particle:
    """A single entry of the event record.

    Attributes:
        pdg_code: PDG Monte Carlo particle ID.
        status: Status code, see ``ParticleStatus``. Unknown values are
            carried as-is.
        first_mother, last_mother: Positions of the mother entries (-1 = none).
        first_daughter, last_daughter: Position range of the daughter
            entries (-1 = none). Maintained by the owning record.
        px, py, pz, energy: Four-momentum components in GeV.
        x, y, z, t: Production vertex.
    """

    pdg_code: int
    status: int
    first_mother: int = -1
    last_mother: int = -1
    first_daughter: int = -1
    last_daughter: int = -1
    px: float = 0.0
    py: float = 0.0
    pz: float = 0.0
    energy: float = 0.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    t: float = 0.0

    @classmethod
    def create(
        cls,
        pdg_code: int,
        status: int,
        mother1: int = -1,
        mother2: int = -1,
        daughter1: int = -1,
        daughter2: int = -1,
        *kinematics,
    ) -> "Particle":
        """Build an entry from its fields.

        ``kinematics`` is either ``(p4, v4)`` as two 4-sequences or the eight
        numbers ``px, py, pz, E, x, y, z, t``. Missing kinematics are zero.
        """
        if len(kinematics) == 2:
            p4, v4 = kinematics
            values = tuple(p4) + tuple(v4)
        elif len(kinematics) in (0, 8):
            values = tuple(kinematics) or (0.0,) * 8
        else:
            raise TypeError(
                "expected (p4, v4) or (px, py, pz, E, x, y, z, t), "
                f"got {len(kinematics)} kinematic arguments"
            )
        if len(values) != 8:
            raise TypeError("p4 and v4 must have four components each")
        px, py, pz, e, x, y, z, t = (float(v) for v in values)
        return cls(
            pdg_code=int(pdg_code),
            status=int(status),
            first_mother=int(mother1),
            last_mother=int(mother2),
            first_daughter=int(daughter1),
            last_daughter=int(daughter2),
            px=px, py=py, pz=pz, energy=e,
            x=x, y=y, z=z, t=t,
        )

    @property
    def p4(self) -> FourVector:
        return FourVector(self.px, self.py, self.pz, self.energy)

    @property
    def v4(self) -> FourVector:
        return FourVector(self.x, self.y, self.z, self.t)

    def set_momentum(self, p4) -> None:
        self.px, self.py, self.pz, self.energy = (float(v) for v in p4)

    def set_vertex(self, v4) -> None:
        self.x, self.y, self.z, self.t = (float(v) for v in v4)

    @property
    def name(self) -> str:
        return pdg_module.name(self.pdg_code)

    @property
    def pdg_mass(self) -> Optional[float]:
        """On-shell mass from the PDG table (GeV)."""
        return pdg_module.mass_gev(self.pdg_code)

    @property
    def p4_mass(self) -> float:
        """Invariant mass of the stored 4-momentum."""
        return self.p4.mass

    def is_on_mass_shell(self, tolerance: float = OFF_SHELL_DM) -> bool:
        m = self.pdg_mass
        if m is None:
            return True
        return abs(m - self.p4_mass) < tolerance

    @property
    def is_nucleus(self) -> bool:
        return pdg_module.is_nucleus(self.pdg_code)

    @property
    def is_fake(self) -> bool:
        return pdg_module.is_fake(self.pdg_code)

    @property
    def is_particle(self) -> bool:
        return not (self.is_fake or self.is_nucleus)

    @property
    def has_daughters(self) -> bool:
        return self.first_daughter != -1 and self.last_daughter != -1

    @property
    def n_daughters(self) -> int:
        if not self.has_daughters:
            return 0
        return self.last_daughter - self.first_daughter + 1

    def compare(self, other: "Particle") -> bool:
        """Structural match: identity, references and kinematics."""
        return (
            self.pdg_code == other.pdg_code
            and self.status == other.status
            and self.first_mother == other.first_mother
            and self.last_mother == other.last_mother
            and self.first_daughter == other.first_daughter
            and self.last_daughter == other.last_daughter
            and self.p4 == other.p4
            and self.v4 == other.v4
        )

    def copy(self) -> "Particle":
        return replace(self)

    def to_dict(self) -> dict:
        """Convert to a flat dictionary."""
        try:
            status_name = ParticleStatus(self.status).name
        except ValueError:
            status_name = str(self.status)
        return {
            "pdg_code": self.pdg_code,
            "name": self.name,
            "status": self.status,
            "status_name": status_name,
            "first_mother": self.first_mother,
            "last_mother": self.last_mother,
            "first_daughter": self.first_daughter,
            "last_daughter": self.last_daughter,
            "px": self.px,
            "py": self.py,
            "pz": self.pz,
            "energy": self.energy,
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "t": self.t,
        }


@dataclass
class Interaction:
    """Summary of the simulated interaction attached to a record.

    The record treats it as an opaque value: it is only attached, handed
    out, cloned on copy and dropped on reset.

    Attributes:
        probe_pdg: PDG code of the incoming probe.
        target_pdg: PDG code of the target (nucleus or free nucleon).
        hit_nucleon_pdg: PDG code of the struck nucleon, 0 if none.
        process: Free-form process label, e.g. "CCQE".
        kinematics: Named kinematic variables (Q2, W, x, y, ...).
        extra: Dictionary of additional metadata.
    """

    probe_pdg: int = 0
    target_pdg: int = 0
    hit_nucleon_pdg: int = 0
    process: str = ""
    kinematics: dict = field(default_factory=dict)
    extra: dict = field(default_factory=dict)

    def copy(self) -> "Interaction":
        return copy.deepcopy(self)
