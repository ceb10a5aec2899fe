"""Particle status codes used in the event record."""

from __future__ import annotations

from enum import IntEnum


class ParticleStatus(IntEnum):
    """Status code of an event record entry.

    Entries may carry any integer status; the values below are the ones the
    record itself interprets.
    """

    UNDEFINED = -1
    INITIAL_STATE = 0
    STABLE_FINAL_STATE = 1
    INTERMEDIATE_STATE = 2
    DECAYED_STATE = 3
    NUCLEON_TARGET = 11
    DIS_PRE_FRAGM_HADRONIC_STATE = 12
    PRE_DECAY_RESONANT_STATE = 13
    HADRON_IN_THE_NUCLEUS = 14
    FINAL_STATE_NUCLEAR_REMNANT = 15
    NUCLEON_CLUSTER_TARGET = 16


LEADING_STATUSES = frozenset(
    {ParticleStatus.INITIAL_STATE, ParticleStatus.NUCLEON_TARGET}
)


def is_leading_status(status: int) -> bool:
    """True for statuses that belong to the fixed leading block."""
    return status in LEADING_STATUSES
