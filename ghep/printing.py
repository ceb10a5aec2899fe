"""Human-readable dump of an event record."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .messenger import bool_as_io_string
from .models import FourVector, Particle
from .status import ParticleStatus, is_leading_status

if TYPE_CHECKING:
    from .record import EventRecord

_RULE = " |" + "-" * 108 + "|"


def momentum_balance(record: "EventRecord") -> FourVector:
    """Sum of final-state 4-momenta minus initial-state 4-momenta.

    Stable final-state entries are added, initial-state and target-nucleon
    entries subtracted. Nuclei are skipped; real and generator-specific
    (fake) particles count. A consistent record gives ~(0, 0, 0, 0).
    """
    total = FourVector()
    for p in record:
        if p.is_nucleus:
            continue
        if p.status == ParticleStatus.STABLE_FINAL_STATE:
            total = total + p.p4
        elif is_leading_status(p.status):
            total = total - p.p4
    return total


def _mass_cell(p: Particle) -> str:
    mass = p.pdg_mass
    if mass is None:
        return f"{p.p4_mass:7.3f} |"
    if p.is_on_mass_shell():
        return f"{mass:7.3f} |"
    # off-shell: '*'-padded PDG mass followed by the 4-momentum mass
    return f"{mass:*>7.3f} | {p.p4_mass:.3f}"


def format_particle_row(idx: int, p: Particle) -> str:
    return (
        f" | {idx:>3} | {p.name:>8} | {p.status:>3} | {p.pdg_code:>10} | "
        f"{p.first_mother:>3} | {p.last_mother:>3} | "
        f"{p.first_daughter:>3} | {p.last_daughter:>3} | "
        f"{p.px:7.3f} | {p.py:7.3f} | {p.pz:7.3f} | {p.energy:7.3f} | "
        + _mass_cell(p)
    )


def format_record(record: "EventRecord") -> str:
    """Fixed-width table of all entries, the momentum balance and the flags."""
    lines = [
        "",
        _RULE,
        (
            " | Idx |     Name | Ist |        PDG |  Mother   |  Daughter | "
            "     Px |      Py |      Pz |       E |       m |"
        ),
        _RULE,
    ]
    lines.extend(format_particle_row(i, p) for i, p in enumerate(record))
    lines.append(_RULE)

    bal = momentum_balance(record)
    lines.append(
        f" | {'Fin-Init:':<33} | {'':<9} | {'':<9} | "
        f"{bal.x:7.3f} | {bal.y:7.3f} | {bal.z:7.3f} | {bal.t:7.3f} | {'':>7} |"
    )
    lines.append(_RULE)

    flags = (
        ("PauliBlock", record.pauli_blocked),
        ("BelowThrNRF", record.below_thr_nrf),
        ("GenericErr", record.generic_err),
        ("UnPhysical", record.unphysical),
    )
    cells = " | ".join(
        f"{label:.<15}{bool_as_io_string(value):<3}" for label, value in flags
    )
    lines.append(f" | {'FLAGS:':<33} | {cells} |")
    lines.append(_RULE)
    return "\n".join(lines) + "\n"
