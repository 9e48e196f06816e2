from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String
from gymprogress.db import Base

class WorkoutSession(Base):
    __tablename__ = "sessions"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(160), nullable=False)

    exercises = relationship(
        "Exercise", back_populates="session", cascade="all, delete-orphan", order_by="Exercise.id"
    )
