from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String
from gymprogress.db import Base

class Machine(Base):
    __tablename__ = "machines"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # Not unique: exercises copy this value, see services.machines
    name: Mapped[str] = mapped_column(String(120), nullable=False)
