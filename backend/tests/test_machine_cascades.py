import logging
from datetime import date

import pytest

from gymprogress.errors import CascadeError, NotFound, PersistenceError, ValidationFailed
from gymprogress.repositories import ExerciseRepository, MachineRepository, SessionRepository
from gymprogress.services import machines as machine_service
from gymprogress.services import workouts


def _log(db, session_id, machine_name, weight=60, reps=10, sets=3):
    return workouts.save_exercise(db, session_id, machine_name=machine_name, weight=weight, reps=reps, sets=sets)

def _names(db, session_id):
    return [e.machine_name for e in ExerciseRepository(db).list_by_session(session_id)]


def test_scenarios_create_rename_delete(db):
    # A: machine, session, one exercise
    bench = machine_service.create_machine(db, "Bench Press")
    sess = workouts.start_session(db, "Push Day", today=date(2024, 3, 5))
    assert sess.name == "Push Day (05/03/24)"
    rows = _log(db, sess.id, "Bench Press")
    assert [(e.machine_name, e.weight, e.reps, e.sets) for e in rows] == [("Bench Press", 60, 10, 3)]

    # B: rename rewrites the exercise, numbers untouched
    result = machine_service.rename_machine(db, bench.id, "Incline Bench")
    assert result.old_name == "Bench Press" and result.new_name == "Incline Bench"
    assert result.exercises_affected == 1
    assert [m.name for m in result.machines] == ["Incline Bench"]
    rows = ExerciseRepository(db).list_by_session(sess.id)
    assert [(e.machine_name, e.weight, e.reps, e.sets) for e in rows] == [("Incline Bench", 60, 10, 3)]

    # C: delete removes it
    result = machine_service.delete_machine(db, bench.id)
    assert result.exercises_affected == 1
    assert result.machines == []
    assert ExerciseRepository(db).list_by_session(sess.id) == []

def test_delete_leaves_other_machines_rows_alone(db):
    squat = machine_service.create_machine(db, "Squat Rack")
    row = machine_service.create_machine(db, "Seated Row")
    sess = workouts.start_session(db, "Full Body")
    _log(db, sess.id, "Squat Rack", weight=100, reps=5, sets=5)
    _log(db, sess.id, "Seated Row", weight=45, reps=12, sets=3)

    machine_service.delete_machine(db, squat.id)

    rows = ExerciseRepository(db).list_by_session(sess.id)
    assert len(rows) == 1
    assert (rows[0].machine_name, rows[0].weight, rows[0].reps, rows[0].sets) == ("Seated Row", 45, 12, 3)
    assert [m.id for m in MachineRepository(db).list_all()] == [row.id]

def test_rename_walks_every_session(db):
    m = machine_service.create_machine(db, "Lat Pulldown")
    other = machine_service.create_machine(db, "Dip Station")
    sessions = [workouts.start_session(db, f"Day {i}") for i in range(3)]
    for s in sessions:
        _log(db, s.id, "Lat Pulldown")
    _log(db, sessions[0].id, "Dip Station")

    result = machine_service.rename_machine(db, m.id, "Wide Pulldown")

    assert result.exercises_affected == 3
    for s in sessions:
        names = _names(db, s.id)
        assert "Lat Pulldown" not in names
        assert names.count("Wide Pulldown") == 1
    assert _names(db, sessions[0].id).count("Dip Station") == 1
    assert MachineRepository(db).get(other.id).name == "Dip Station"

def test_matching_is_case_sensitive(db):
    m = machine_service.create_machine(db, "Pec Deck")
    sess = workouts.start_session(db, "Chest")
    _log(db, sess.id, "pec deck")
    result = machine_service.rename_machine(db, m.id, "Fly Machine")
    assert result.exercises_affected == 0
    assert _names(db, sess.id) == ["pec deck"]

def test_delete_twice_is_harmless(db):
    m = machine_service.create_machine(db, "Smith Machine")
    keep = machine_service.create_machine(db, "Leg Press")
    sess = workouts.start_session(db, "Legs")
    _log(db, sess.id, "Smith Machine")
    _log(db, sess.id, "Leg Press")

    assert machine_service.delete_machine(db, m.id).exercises_affected == 1
    assert machine_service.delete_machine(db, m.id) is None
    assert _names(db, sess.id) == ["Leg Press"]
    assert [x.id for x in MachineRepository(db).list_all()] == [keep.id]

def test_rename_unknown_machine(db):
    with pytest.raises(NotFound):
        machine_service.rename_machine(db, 31337, "Anything")

@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_names_rejected_before_storage(db, name):
    m = machine_service.create_machine(db, "Chest Press")
    with pytest.raises(ValidationFailed) as err:
        machine_service.rename_machine(db, m.id, name)
    assert err.value.message == "Please enter a name"
    with pytest.raises(ValidationFailed):
        machine_service.create_machine(db, name)
    assert [x.name for x in MachineRepository(db).list_all()] == ["Chest Press"]

def test_names_are_trimmed(db):
    m = machine_service.create_machine(db, "  Cable Cross  ")
    assert m.name == "Cable Cross"
    assert machine_service.rename_machine(db, m.id, " Cable Fly ").new_name == "Cable Fly"


# Machine names are not unique. A cascade on one machine reaches rows logged
# against any other machine with the same name; these tests pin that down.

def test_duplicate_names_rename_rewrites_both_owners_rows(db, caplog):
    first = machine_service.create_machine(db, "Cable")
    second = machine_service.create_machine(db, "Cable")
    sess = workouts.start_session(db, "Arms")
    _log(db, sess.id, "Cable", weight=10)
    _log(db, sess.id, "Cable", weight=20)

    with caplog.at_level(logging.WARNING, logger="gymprogress"):
        result = machine_service.rename_machine(db, first.id, "Cable Left")

    assert result.exercises_affected == 2
    assert _names(db, sess.id) == ["Cable Left", "Cable Left"]
    assert MachineRepository(db).get(second.id).name == "Cable"
    assert any("shares the name" in r.getMessage() for r in caplog.records)

def test_duplicate_names_delete_removes_both_owners_rows(db):
    first = machine_service.create_machine(db, "Cable")
    second = machine_service.create_machine(db, "Cable")
    sess = workouts.start_session(db, "Arms")
    _log(db, sess.id, "Cable")

    machine_service.delete_machine(db, first.id)

    assert _names(db, sess.id) == []
    assert [m.id for m in MachineRepository(db).list_all()] == [second.id]


def test_failed_rename_rolls_back_everything(db, monkeypatch, caplog):
    m = machine_service.create_machine(db, "Bench Press")
    s1 = workouts.start_session(db, "Mon")
    s2 = workouts.start_session(db, "Thu")
    _log(db, s1.id, "Bench Press")
    _log(db, s2.id, "Bench Press")

    original = ExerciseRepository.update
    calls = []
    def flaky(self, exercise_id, **fields):
        calls.append(exercise_id)
        if len(calls) == 2:
            raise PersistenceError(f"update Exercise {exercise_id}")
        return original(self, exercise_id, **fields)
    monkeypatch.setattr(ExerciseRepository, "update", flaky)

    with caplog.at_level(logging.ERROR, logger="gymprogress"):
        with pytest.raises(CascadeError) as err:
            machine_service.rename_machine(db, m.id, "Flat Bench")

    assert err.value.operation == "rename"
    assert err.value.rows_touched == 1
    assert any("rolled back" in r.getMessage() for r in caplog.records)
    # nothing diverged
    assert MachineRepository(db).get(m.id).name == "Bench Press"
    assert _names(db, s1.id) == ["Bench Press"]
    assert _names(db, s2.id) == ["Bench Press"]

def test_failed_delete_rolls_back_everything(db, monkeypatch):
    m = machine_service.create_machine(db, "Hip Thrust")
    sess = workouts.start_session(db, "Glutes")
    _log(db, sess.id, "Hip Thrust")

    def broken(self, machine):
        raise PersistenceError(f"delete Machine {machine.id}")
    monkeypatch.setattr(MachineRepository, "delete", broken)

    with pytest.raises(CascadeError) as err:
        machine_service.delete_machine(db, m.id)

    assert err.value.rows_touched == 1
    assert MachineRepository(db).get(m.id) is not None
    assert _names(db, sess.id) == ["Hip Thrust"]
    assert len(SessionRepository(db).list_all()) == 1


def test_commit_failure_rolls_back_rename(db, monkeypatch, caplog):
    from sqlalchemy.exc import OperationalError
    from sqlalchemy.orm import Session

    m = machine_service.create_machine(db, "Chest Fly")
    sess = workouts.start_session(db, "Chest")
    _log(db, sess.id, "Chest Fly")

    def disk_full(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))
    monkeypatch.setattr(Session, "commit", disk_full)

    with caplog.at_level(logging.ERROR, logger="gymprogress"):
        with pytest.raises(CascadeError) as err:
            machine_service.rename_machine(db, m.id, "Pec Fly")
    monkeypatch.undo()

    assert err.value.rows_touched == 1
    assert isinstance(err.value.__cause__, OperationalError)
    assert any("rolled back" in r.getMessage() for r in caplog.records)
    assert MachineRepository(db).get(m.id).name == "Chest Fly"
    assert _names(db, sess.id) == ["Chest Fly"]
