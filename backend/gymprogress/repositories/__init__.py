from gymprogress.repositories.machine_repo import MachineRepository
from gymprogress.repositories.session_repo import SessionRepository
from gymprogress.repositories.exercise_repo import ExerciseRepository

__all__ = ["MachineRepository", "SessionRepository", "ExerciseRepository"]
