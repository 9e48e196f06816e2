from gymprogress.models.machine import Machine
from gymprogress.models.session import WorkoutSession
from gymprogress.models.exercise import Exercise

__all__ = ["Machine", "WorkoutSession", "Exercise"]
