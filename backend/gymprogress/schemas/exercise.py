from typing import Annotated
from pydantic import BaseModel, Field

MachineName = Annotated[str, Field(max_length=120)]
NonNegInt = Annotated[int, Field(ge=0, le=100_000)]

class ExerciseCreate(BaseModel):
    # Optional at the schema level so a missing field gets the same
    # "Fill all fields" message as a blank one
    machine_name: MachineName | None = None
    weight: NonNegInt | None = None
    reps: NonNegInt | None = None
    sets: NonNegInt | None = None

class ExerciseUpdate(BaseModel):
    machine_name: MachineName | None = None
    weight: NonNegInt | None = None
    reps: NonNegInt | None = None
    sets: NonNegInt | None = None

class ExerciseRead(BaseModel):
    id: int
    session_id: int
    machine_name: str
    weight: int
    reps: int
    sets: int

    model_config = {"from_attributes": True}
