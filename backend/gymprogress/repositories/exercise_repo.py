from __future__ import annotations
from typing import Optional
from sqlalchemy import select
from gymprogress.models import Exercise
from gymprogress.repositories.base import BaseRepository

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    def list_by_session(self, session_id: int) -> list[Exercise]:
        stmt = select(Exercise).where(Exercise.session_id == session_id).order_by(Exercise.id.asc())
        with self.translate_errors(f"list exercises of session {session_id}"):
            return list(self.db.execute(stmt).scalars().all())

    def create(self, session_id: int, *, machine_name: str, weight: int, reps: int, sets: int) -> Exercise:
        ex = Exercise(session_id=session_id, machine_name=machine_name, weight=weight, reps=reps, sets=sets)
        return self.add_and_refresh(ex)

    def update(
        self,
        exercise_id: int,
        *,
        machine_name: str | None = None,
        weight: int | None = None,
        reps: int | None = None,
        sets: int | None = None,
    ) -> Optional[Exercise]:
        ex = self.get(exercise_id)
        if not ex:
            return None
        changes = {"machine_name": machine_name, "weight": weight, "reps": reps, "sets": sets}
        with self.translate_errors(f"update Exercise {exercise_id}"):
            for field, value in changes.items():
                if value is not None:
                    setattr(ex, field, value)
            self._save()
            self.db.refresh(ex)
        return ex

    def delete(self, exercise_id: int) -> bool:
        ex = self.get(exercise_id)
        if not ex:
            return False
        self.remove(ex)
        return True
