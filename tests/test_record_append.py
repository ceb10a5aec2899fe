import logging

import pytest

from ghep import EventRecord, FourVector, Particle, ParticleStatus
from ghep.messenger import NOTICE
from ghep.validation import validate


def test_scenario_daughter_range(scenario_record):
    assert len(scenario_record) == 4
    assert [p.pdg_code for p in scenario_record] == [2212, 2112, 211, 111]
    proton = scenario_record[0]
    assert (proton.first_daughter, proton.last_daughter) == (2, 3)
    assert scenario_record[1].has_daughters is False


def test_append_extends_range_upward_without_compaction(scenario_record, monkeypatch):
    def _fail(self):
        raise AssertionError("full compaction must not run")

    monkeypatch.setattr(EventRecord, "compactify_daughter_lists", _fail)
    scenario_record.add_particle(22, ParticleStatus.STABLE_FINAL_STATE, 0, -1, -1, -1,
                                 FourVector(0, 0, 0.1, 0.1), FourVector())

    assert len(scenario_record) == 5
    assert scenario_record[4].pdg_code == 22
    assert (scenario_record[0].first_daughter, scenario_record[0].last_daughter) == (2, 4)


def test_append_does_not_extend_a_stale_range():
    rec = EventRecord()
    rec.add_particle(2212, ParticleStatus.INITIAL_STATE)
    rec.add_particle(22, ParticleStatus.STABLE_FINAL_STATE)
    # range ends at an entry that does not name the mother
    rec[0].first_daughter, rec[0].last_daughter = 1, 1

    rec.add_particle(211, ParticleStatus.STABLE_FINAL_STATE, 0)

    assert (rec[0].first_daughter, rec[0].last_daughter) == (2, 2)
    assert validate(rec, check_balance=False).is_valid


def test_append_with_declared_daughters():
    rec = EventRecord()
    rec.add_particle(14, ParticleStatus.INITIAL_STATE, -1, -1, 1, 1)
    rec.add_particle(22, ParticleStatus.STABLE_FINAL_STATE)
    rec.add_particle(13, ParticleStatus.STABLE_FINAL_STATE, 0)

    report = validate(rec, check_balance=False)
    assert report.is_valid, str(report)
    assert (rec[0].first_daughter, rec[0].last_daughter) == (2, 2)


def test_append_mother_after_its_daughter():
    rec = EventRecord()
    rec.add_particle(22, ParticleStatus.STABLE_FINAL_STATE, 1)
    rec.add_particle(14, ParticleStatus.STABLE_FINAL_STATE)

    report = validate(rec, check_balance=False)
    assert report.is_valid, str(report)
    assert rec[0].first_mother == 1
    assert rec[1].pdg_code == 14
    assert (rec[1].first_daughter, rec[1].last_daughter) == (0, 0)


def test_append_mother_after_split_daughters():
    rec = EventRecord()
    rec.add_particle(22, ParticleStatus.STABLE_FINAL_STATE, 2)
    rec.add_particle(11, ParticleStatus.STABLE_FINAL_STATE)
    rec.add_particle(111, ParticleStatus.STABLE_FINAL_STATE)
    rec.add_particle(22, ParticleStatus.STABLE_FINAL_STATE, 2)

    report = validate(rec, check_balance=False)
    assert report.is_valid, str(report)
    pi0 = rec.particle_position(111, ParticleStatus.STABLE_FINAL_STATE)
    photons = [p.pdg_code for p in rec if p.first_mother == pi0]
    assert photons == [22, 22]
    assert rec[pi0].n_daughters == 2


def test_append_three_input_shapes():
    rec = EventRecord()
    rec.add_particle(Particle(pdg_code=14, status=0, pz=1.0, energy=1.0))
    rec.add_particle(13, 1, 0, -1, -1, -1, FourVector(0, 0, 0.9, 0.906), FourVector(1, 2, 3, 4))
    rec.add_particle(22, 1, 0, -1, -1, -1, 0.0, 0.0, 0.1, 0.1, 1.0, 2.0, 3.0, 4.0)

    assert [p.pdg_code for p in rec] == [14, 13, 22]
    assert rec[1].v4 == FourVector(1, 2, 3, 4)
    assert rec[2].p4 == pytest.approx((0.0, 0.0, 0.1, 0.1))
    assert (rec[0].first_daughter, rec[0].last_daughter) == (1, 2)


def test_append_copies_the_entry():
    rec = EventRecord()
    p = Particle(pdg_code=2212, status=0, energy=0.938)
    rec.add_particle(p)
    p.energy = 5.0
    assert rec[0].energy == pytest.approx(0.938)
    assert rec[0] is not p


def test_append_rejects_bad_shapes():
    rec = EventRecord()
    with pytest.raises(TypeError):
        rec.add_particle(Particle(pdg_code=22, status=1), 1)
    with pytest.raises(TypeError):
        rec.add_particle(22, 1, -1, -1, -1, -1, 0.0, 0.0, 0.0)
    assert len(rec) == 0


def test_append_with_missing_mother_warns(caplog):
    rec = EventRecord()
    rec.add_particle(2212, ParticleStatus.INITIAL_STATE)
    with caplog.at_level(logging.WARNING, logger="GHEP"):
        rec.add_particle(211, ParticleStatus.STABLE_FINAL_STATE, 7)
    assert "pos = 7" in caplog.text
    assert rec[0].has_daughters is False


def test_interleaved_append_triggers_compaction(caplog):
    rec = EventRecord()
    caplog.set_level(NOTICE, logger="GHEP")
    rec.add_particle(14, ParticleStatus.INITIAL_STATE)
    rec.add_particle(2112, ParticleStatus.INITIAL_STATE)
    rec.add_particle(13, ParticleStatus.STABLE_FINAL_STATE, 0)
    rec.add_particle(2212, ParticleStatus.STABLE_FINAL_STATE, 1)
    assert "Running compactifier" not in caplog.text

    rec.add_particle(211, ParticleStatus.STABLE_FINAL_STATE, 0)

    assert "Running compactifier" in caplog.text
    assert [p.pdg_code for p in rec] == [14, 2112, 13, 211, 2212]
    assert (rec[0].first_daughter, rec[0].last_daughter) == (2, 3)
    assert (rec[1].first_daughter, rec[1].last_daughter) == (4, 4)
    assert rec[4].first_mother == 1


def test_append_logs_notice(caplog):
    rec = EventRecord()
    caplog.set_level(NOTICE, logger="GHEP")
    rec.add_particle(2212, ParticleStatus.INITIAL_STATE)
    assert "Adding particle with pdgc = 2212 at slot = 0" in caplog.text


def test_record_uses_injected_logger(caplog):
    log = logging.getLogger("ghep.tests.sink")
    rec = EventRecord(logger=log)
    with caplog.at_level(logging.WARNING, logger="ghep.tests.sink"):
        assert rec.get_particle(0) is None
    assert [r.name for r in caplog.records] == ["ghep.tests.sink"]


def test_qel_sample_is_consistent(qel_record):
    assert [p.pdg_code for p in qel_record] == [14, 1000080160, 2112, 1000080150, 13, 2212]
    report = validate(qel_record)
    assert report.is_valid, str(report)
    assert report.n_warnings == 0, str(report)
