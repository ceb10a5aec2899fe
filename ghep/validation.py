"""
Consistency checks for an event record.

Provides checks for:
- Mother/daughter references pointing inside the record
- Compact daughter lists matching the mother back-references
- The leading block (initial state, target nucleon) being a prefix
- Energy positivity
- 4-momentum balance between initial and final state
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Optional

from .printing import momentum_balance
from .status import is_leading_status

if TYPE_CHECKING:
    from .record import EventRecord


@dataclass
class ValidationIssue:
    """One problem found in a record."""

    level: str  # "error", "warning", "info"
    particle_index: Optional[int]  # None for record-level issues
    message: str

    def __str__(self) -> str:
        where = "record" if self.particle_index is None else f"entry {self.particle_index}"
        return f"{self.level.upper():<7} {where}: {self.message}"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ValidationReport:
    """Issues of one record, in the order the checks ran."""

    issues: list[ValidationIssue] = field(default_factory=list)

    def _count(self, level: str) -> int:
        return sum(issue.level == level for issue in self.issues)

    @property
    def n_errors(self) -> int:
        return self._count("error")

    @property
    def n_warnings(self) -> int:
        return self._count("warning")

    @property
    def is_valid(self) -> bool:
        return self.n_errors == 0

    def __str__(self) -> str:
        head = f"Validation: {self.n_errors} errors, {self.n_warnings} warnings"
        if not self.issues:
            return head + " - record is consistent"
        return "\n".join([head, *(f"  {issue}" for issue in self.issues)])

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "n_errors": self.n_errors,
            "n_warnings": self.n_warnings,
            "issues": [issue.to_dict() for issue in self.issues],
        }


def _in_range(ref: int, n: int) -> bool:
    return ref == -1 or 0 <= ref < n


def validate_record(
    record: "EventRecord",
    *,
    check_references: bool = True,
    check_daughters: bool = True,
    check_leading_block: bool = True,
    check_energy: bool = True,
    check_balance: bool = True,
    balance_tolerance: float = 1e-3,
) -> list[ValidationIssue]:
    """Validate a single record.

    Args:
        record: The record to validate.
        check_references: Check mother/daughter positions are in range.
        check_daughters: Check daughter ranges are compact and match the
            entries that name each particle as first mother.
        check_leading_block: Check initial-state/target-nucleon entries
            form a prefix of the record.
        check_energy: Check energy positivity.
        check_balance: Check the final-minus-initial 4-momentum balance.
        balance_tolerance: Absolute tolerance (GeV) per balance component.

    Returns:
        List of validation issues found.
    """
    issues: list[ValidationIssue] = []
    particles = record.entries
    n = len(particles)

    if not particles:
        issues.append(ValidationIssue("warning", None, "Record has no particles"))
        return issues

    # --- Reference ranges ---
    if check_references:
        for i, p in enumerate(particles):
            refs = (
                ("first mother", p.first_mother),
                ("last mother", p.last_mother),
                ("first daughter", p.first_daughter),
                ("last daughter", p.last_daughter),
            )
            for label, ref in refs:
                if not _in_range(ref, n):
                    issues.append(ValidationIssue(
                        "error", i, f"{label} {ref} outside record of {n} entries"
                    ))

    # --- Daughter lists ---
    if check_daughters:
        daughters: dict[int, list[int]] = {}
        for i, p in enumerate(particles):
            daughters.setdefault(p.first_mother, []).append(i)
        for i, p in enumerate(particles):
            positions = daughters.get(i, [])
            if positions:
                expected = (positions[0], positions[-1])
                if positions[-1] - positions[0] + 1 != len(positions):
                    issues.append(ValidationIssue(
                        "error", i, f"Daughter list is not compact: {positions}"
                    ))
            else:
                expected = (-1, -1)
            actual = (p.first_daughter, p.last_daughter)
            if actual != expected:
                issues.append(ValidationIssue(
                    "error", i,
                    f"Daughter range {list(actual)} does not match "
                    f"back-references {list(expected)}"
                ))

    # --- Leading block ---
    if check_leading_block:
        boundary = record.first_non_init_state_entry()
        for i in range(boundary, n):
            if is_leading_status(particles[i].status):
                issues.append(ValidationIssue(
                    "warning", i,
                    f"Initial-state entry after the leading block (ends at {boundary})"
                ))

    # --- Energy positivity ---
    if check_energy:
        for i, p in enumerate(particles):
            if p.energy < 0:
                issues.append(ValidationIssue(
                    "error", i, f"Negative energy: {p.energy:.6e} GeV"
                ))

    # --- Momentum balance ---
    if check_balance:
        bal = momentum_balance(record)
        # Unphysical records are not expected to balance
        level = "info" if record.unphysical else "warning"
        for label, value in zip(("px", "py", "pz", "E"), bal):
            if abs(value) > balance_tolerance:
                issues.append(ValidationIssue(
                    level, None,
                    f"Final - initial {label} = {value:.6e} GeV "
                    f"exceeds tolerance {balance_tolerance:.1e}"
                ))

    return issues


def validate(
    record: "EventRecord",
    *,
    check_references: bool = True,
    check_daughters: bool = True,
    check_leading_block: bool = True,
    check_energy: bool = True,
    check_balance: bool = True,
    balance_tolerance: float = 1e-3,
) -> ValidationReport:
    """Validate a record and wrap the issues in a ValidationReport."""
    return ValidationReport(
        issues=validate_record(
            record,
            check_references=check_references,
            check_daughters=check_daughters,
            check_leading_block=check_leading_block,
            check_energy=check_energy,
            check_balance=check_balance,
            balance_tolerance=balance_tolerance,
        )
    )
