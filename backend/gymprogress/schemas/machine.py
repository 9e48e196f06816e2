from typing import Annotated, Optional
from pydantic import BaseModel, Field

# Blank names are rejected by the service layer with a user-facing message
MachineName = Annotated[str, Field(max_length=120)]

class MachineWrite(BaseModel):
    name: MachineName

class MachineRead(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}

class CascadeRead(BaseModel):
    machine_id: int
    old_name: str
    new_name: Optional[str] = None
    exercises_affected: int
    machines: list[MachineRead]

    model_config = {"from_attributes": True}
