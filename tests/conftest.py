"""Shared record fixtures."""

from __future__ import annotations

import pytest

from ghep import EventRecord, ParticleStatus
from ghep.samples import build_qel_record


def _scenario_record() -> EventRecord:
    """p, n initial state followed by two daughters of the proton."""
    rec = EventRecord()
    rec.add_particle(2212, ParticleStatus.INITIAL_STATE, -1, -1, -1, -1,
                     0.0, 0.0, 0.0, 0.938, 0.0, 0.0, 0.0, 0.0)
    rec.add_particle(2112, ParticleStatus.INITIAL_STATE, -1, -1, -1, -1,
                     0.0, 0.0, 0.0, 0.940, 0.0, 0.0, 0.0, 0.0)
    rec.add_particle(211, ParticleStatus.STABLE_FINAL_STATE, 0, -1, -1, -1,
                     0.1, 0.0, 0.2, 0.3, 0.0, 0.0, 0.0, 0.0)
    rec.add_particle(111, ParticleStatus.STABLE_FINAL_STATE, 0, -1, -1, -1,
                     -0.1, 0.0, 0.1, 0.2, 0.0, 0.0, 0.0, 0.0)
    return rec


@pytest.fixture
def scenario_record() -> EventRecord:
    return _scenario_record()


@pytest.fixture
def qel_record() -> EventRecord:
    return build_qel_record()


def snapshot(record: EventRecord) -> list[dict]:
    return [p.to_dict() for p in record]


@pytest.fixture
def record_snapshot():
    return snapshot
