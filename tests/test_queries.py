import logging

import pytest

from ghep import EventRecord, Particle, ParticleStatus


def test_get_particle(qel_record):
    assert qel_record.get_particle(4).pdg_code == 13
    assert qel_record.get_particle(0) is qel_record[0]


@pytest.mark.parametrize("pos", [-1, 6, 1000])
def test_get_particle_out_of_range(qel_record, caplog, pos):
    with caplog.at_level(logging.WARNING, logger="GHEP"):
        assert qel_record.get_particle(pos) is None
    assert f"pos = {pos}" in caplog.text


def test_find_particle(scenario_record):
    p = scenario_record.find_particle(211, ParticleStatus.STABLE_FINAL_STATE)
    assert p is scenario_record[2]
    assert scenario_record.find_particle(2212, ParticleStatus.INITIAL_STATE) is scenario_record[0]


def test_find_particle_scans_forward_only(scenario_record, caplog):
    with caplog.at_level(logging.WARNING, logger="GHEP"):
        assert scenario_record.find_particle(2212, ParticleStatus.INITIAL_STATE, 1) is None
    assert "pos >= 1, pdg = 2212, ist = 0" in caplog.text


def test_find_particle_status_must_match(scenario_record):
    assert scenario_record.find_particle(211, ParticleStatus.INITIAL_STATE) is None


def test_particle_position_by_pdg(scenario_record):
    assert scenario_record.particle_position(111, ParticleStatus.STABLE_FINAL_STATE) == 3
    assert scenario_record.particle_position(111, ParticleStatus.STABLE_FINAL_STATE, start=3) == 3
    assert scenario_record.particle_position(211, ParticleStatus.STABLE_FINAL_STATE, start=3) == -1


def test_particle_position_by_particle(scenario_record, caplog):
    probe = scenario_record[3].copy()
    assert scenario_record.particle_position(probe) == 3

    probe.px += 1.0
    with caplog.at_level(logging.WARNING, logger="GHEP"):
        assert scenario_record.particle_position(probe) == -1
    assert "invalid event record position" in caplog.text


def test_particle_position_matches_first_duplicate():
    rec = EventRecord()
    for _ in range(3):
        rec.add_particle(22, ParticleStatus.STABLE_FINAL_STATE)
    probe = Particle(pdg_code=22, status=1)
    assert rec.particle_position(probe) == 0
    assert rec.particle_position(probe, start=1) == 1
    assert rec.particle_position(probe, start=3) == -1


def test_particle_position_by_particle_takes_start_positionally():
    rec = EventRecord()
    for _ in range(3):
        rec.add_particle(22, ParticleStatus.STABLE_FINAL_STATE)
    photon = Particle(pdg_code=22, status=1)
    assert rec.particle_position(photon, 1) == rec.particle_position(photon, start=1) == 1
    assert rec.particle_position(photon, 2) == 2


def test_particle_position_argument_errors(scenario_record):
    with pytest.raises(TypeError):
        scenario_record.particle_position(211)
    with pytest.raises(TypeError):
        scenario_record.particle_position(scenario_record[0], 1, start=2)


def test_interaction_lookup(qel_record, caplog):
    assert qel_record.interaction.process == "CCQE"
    qel_record.attach_interaction(None)
    with caplog.at_level(logging.WARNING, logger="GHEP"):
        assert qel_record.interaction is None
    assert "NULL interaction" in caplog.text


def test_container_protocol(scenario_record):
    assert len(scenario_record) == 4
    assert [p.pdg_code for p in scenario_record] == [2212, 2112, 211, 111]
    assert scenario_record.entries[2] is scenario_record[2]
    with pytest.raises(IndexError):
        scenario_record[10]
