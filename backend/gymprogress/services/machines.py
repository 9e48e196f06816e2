"""Machine operations and the cascades that keep ``Exercise.machine_name`` in step.

Exercises reference a machine by copying its name, so renaming or deleting a
machine has to walk every session and fix up the matching rows. Both walks
run in a single transaction; a failure part way rolls everything back and
raises :class:`CascadeError`.

Machine names are not unique. If two machines share a name, a cascade on
one of them also rewrites/deletes the exercises logged against the other.
That is logged as a warning rather than prevented.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gymprogress.errors import CascadeError, NotFound, PersistenceError
from gymprogress.models import Machine
from gymprogress.repositories import ExerciseRepository, MachineRepository, SessionRepository
from gymprogress.services.validation import require_text

log = logging.getLogger(__name__)

BLANK_NAME = "Please enter a name"


@dataclass(slots=True)
class CascadeResult:
    machine_id: int
    old_name: str
    new_name: Optional[str]
    exercises_affected: int
    machines: list[Machine] = field(default_factory=list)


def list_machines(db: Session) -> list[Machine]:
    return MachineRepository(db).list_all()


def create_machine(db: Session, name: str) -> Machine:
    name = require_text(name, BLANK_NAME)
    machine = MachineRepository(db).create(name)
    log.info("machine %s created as %r", machine.id, machine.name)
    return machine


def rename_machine(db: Session, machine_id: int, new_name: str) -> CascadeResult:
    new_name = require_text(new_name, BLANK_NAME)
    machines = MachineRepository(db, autocommit=False)
    sessions = SessionRepository(db, autocommit=False)
    exercises = ExerciseRepository(db, autocommit=False)

    machine = machines.get(machine_id)
    if machine is None:
        raise NotFound("machine", machine_id)
    old_name = machine.name
    _warn_if_shared(machines, machine)

    touched = 0
    try:
        machines.rename(machine, new_name)
        for session in sessions.list_all():
            for ex in exercises.list_by_session(session.id):
                if ex.machine_name == old_name:
                    exercises.update(ex.id, machine_name=new_name)
                    touched += 1
        db.commit()
    except (PersistenceError, SQLAlchemyError) as exc:
        _abort(db, "rename", machine_id, touched, exc)
        raise CascadeError("rename", machine_id, touched) from exc

    log.info("machine %s renamed %r -> %r, %d exercise(s) rewritten", machine_id, old_name, new_name, touched)
    return CascadeResult(
        machine_id=machine_id,
        old_name=old_name,
        new_name=new_name,
        exercises_affected=touched,
        machines=MachineRepository(db).list_all(),
    )


def delete_machine(db: Session, machine_id: int) -> Optional[CascadeResult]:
    """Delete a machine and every exercise logged under its name.

    Returns None (and changes nothing) when the machine is already gone.
    """
    machines = MachineRepository(db, autocommit=False)
    sessions = SessionRepository(db, autocommit=False)
    exercises = ExerciseRepository(db, autocommit=False)

    machine = machines.get(machine_id)
    if machine is None:
        return None
    name = machine.name
    _warn_if_shared(machines, machine)

    touched = 0
    try:
        for session in sessions.list_all():
            for ex in exercises.list_by_session(session.id):
                if ex.machine_name == name:
                    exercises.delete(ex.id)
                    touched += 1
        machines.delete(machine)
        db.commit()
    except (PersistenceError, SQLAlchemyError) as exc:
        _abort(db, "delete", machine_id, touched, exc)
        raise CascadeError("delete", machine_id, touched) from exc

    log.info("machine %s (%r) deleted with %d exercise(s)", machine_id, name, touched)
    return CascadeResult(
        machine_id=machine_id,
        old_name=name,
        new_name=None,
        exercises_affected=touched,
        machines=MachineRepository(db).list_all(),
    )


def _warn_if_shared(machines: MachineRepository, machine: Machine) -> None:
    others = [m.id for m in machines.list_by_name(machine.name) if m.id != machine.id]
    if others:
        log.warning(
            "machine %s shares the name %r with machine(s) %s; their exercises are affected too",
            machine.id, machine.name, others,
        )


def _abort(db: Session, operation: str, machine_id: int, touched: int, exc: Exception) -> None:
    db.rollback()
    log.error(
        "%s of machine %s failed after %d exercise row(s) were changed; transaction rolled back: %s",
        operation, machine_id, touched, exc,
    )
