from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from gymprogress.errors import NotFound, ValidationFailed
from gymprogress.models import Exercise, Machine, WorkoutSession
from gymprogress.repositories import ExerciseRepository, MachineRepository, SessionRepository
from gymprogress.services.validation import require_text

log = logging.getLogger(__name__)

BLANK_SESSION = "Enter a session name"
BLANK_FIELDS = "Fill all fields"


@dataclass(slots=True)
class SessionOverview:
    session: WorkoutSession
    exercises: list[Exercise]


def compose_session_name(label: str, on: date) -> str:
    return f"{label} ({on:%d/%m/%y})"


def start_session(db: Session, label: str, *, today: Optional[date] = None) -> WorkoutSession:
    label = require_text(label, BLANK_SESSION)
    name = compose_session_name(label, today or date.today())
    sess = SessionRepository(db).create(name)
    log.info("session %s %r created", sess.id, sess.name)
    return sess


def delete_session(db: Session, session_id: int) -> bool:
    repo = SessionRepository(db)
    sess = repo.get(session_id)
    if not sess:
        return False
    repo.delete(sess)
    log.info("session %s deleted with its exercises", session_id)
    return True


def session_overview(db: Session) -> list[SessionOverview]:
    exercises = ExerciseRepository(db)
    return [
        SessionOverview(session=s, exercises=exercises.list_by_session(s.id))
        for s in SessionRepository(db).list_all()
    ]


def list_exercises(db: Session, session_id: int) -> list[Exercise]:
    _require_session(db, session_id)
    return ExerciseRepository(db).list_by_session(session_id)


def save_exercise(
    db: Session,
    session_id: int,
    *,
    machine_name: Optional[str],
    weight: Optional[int],
    reps: Optional[int],
    sets: Optional[int],
    exercise_id: Optional[int] = None,
) -> list[Exercise]:
    """Insert (or, given ``exercise_id``, update) one row and return the session's exercises."""
    machine_name = require_text(machine_name, BLANK_FIELDS)
    if weight is None or reps is None or sets is None:
        raise ValidationFailed(BLANK_FIELDS)
    _require_session(db, session_id)

    repo = ExerciseRepository(db)
    if exercise_id is None:
        repo.create(session_id, machine_name=machine_name, weight=weight, reps=reps, sets=sets)
    else:
        existing = repo.get(exercise_id)
        if existing is None or existing.session_id != session_id:
            raise NotFound("exercise", exercise_id)
        repo.update(exercise_id, machine_name=machine_name, weight=weight, reps=reps, sets=sets)
    return repo.list_by_session(session_id)


def update_exercise(
    db: Session,
    exercise_id: int,
    *,
    machine_name: Optional[str] = None,
    weight: Optional[int] = None,
    reps: Optional[int] = None,
    sets: Optional[int] = None,
) -> Exercise:
    if machine_name is not None:
        machine_name = require_text(machine_name, BLANK_FIELDS)
    ex = ExerciseRepository(db).update(exercise_id, machine_name=machine_name, weight=weight, reps=reps, sets=sets)
    if ex is None:
        raise NotFound("exercise", exercise_id)
    return ex


def delete_exercise(db: Session, exercise_id: int) -> bool:
    return ExerciseRepository(db).delete(exercise_id)


def available_machines(db: Session, session_id: int) -> list[Machine]:
    """Machines not yet logged in this session (one exercise per machine is a UI convention)."""
    used = {ex.machine_name for ex in list_exercises(db, session_id)}
    return [m for m in MachineRepository(db).list_all() if m.name not in used]


def _require_session(db: Session, session_id: int) -> WorkoutSession:
    sess = SessionRepository(db).get(session_id)
    if not sess:
        raise NotFound("session", session_id)
    return sess
