from __future__ import annotations
from gymprogress.models import WorkoutSession
from gymprogress.repositories.base import BaseRepository

class SessionRepository(BaseRepository[WorkoutSession]):
    model = WorkoutSession

    def create(self, name: str) -> WorkoutSession:
        return self.add_and_refresh(WorkoutSession(name=name))

    def delete(self, session: WorkoutSession) -> None:
        """Exercises go with the session (relationship cascade + ON DELETE CASCADE)."""
        self.remove(session)
