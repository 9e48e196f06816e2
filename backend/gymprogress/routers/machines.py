from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from gymprogress.db import get_db
from gymprogress.schemas.machine import CascadeRead, MachineRead, MachineWrite
from gymprogress.services import machines as machine_service

router = APIRouter(prefix="/machines", tags=["machines"])

@router.get("", response_model=list[MachineRead])
def list_machines(db: Session = Depends(get_db)):
    return machine_service.list_machines(db)

@router.post("", response_model=list[MachineRead], status_code=status.HTTP_201_CREATED)
def create_machine(payload: MachineWrite, db: Session = Depends(get_db)):
    machine_service.create_machine(db, payload.name)
    return machine_service.list_machines(db)

@router.put("/{machine_id}", response_model=CascadeRead)
def rename_machine(machine_id: int, payload: MachineWrite, db: Session = Depends(get_db)):
    result = machine_service.rename_machine(db, machine_id, payload.name)
    return CascadeRead.model_validate(result)

@router.delete("/{machine_id}", response_model=CascadeRead)
def delete_machine(machine_id: int, db: Session = Depends(get_db)):
    result = machine_service.delete_machine(db, machine_id)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Machine not found")
    return CascadeRead.model_validate(result)
