from typing import Annotated
from pydantic import BaseModel, Field
from gymprogress.schemas.exercise import ExerciseRead

# The date suffix is appended server side
LabelStr = Annotated[str, Field(max_length=140)]

class SessionCreate(BaseModel):
    label: LabelStr

class SessionRead(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}

class SessionOverviewRead(BaseModel):
    session: SessionRead
    exercises: list[ExerciseRead]

    model_config = {"from_attributes": True}
