from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from gymprogress.db import get_db
from gymprogress.schemas.exercise import ExerciseCreate, ExerciseRead
from gymprogress.schemas.machine import MachineRead
from gymprogress.schemas.session import SessionCreate, SessionOverviewRead, SessionRead
from gymprogress.services import workouts

router = APIRouter(prefix="/sessions", tags=["sessions"])

@router.post("", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
def create_session(payload: SessionCreate, db: Session = Depends(get_db)):
    return workouts.start_session(db, payload.label)

@router.get("", response_model=list[SessionOverviewRead])
def list_sessions(db: Session = Depends(get_db)):
    return [SessionOverviewRead.model_validate(o) for o in workouts.session_overview(db)]

@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: int, db: Session = Depends(get_db)):
    if not workouts.delete_session(db, session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{session_id}/exercises", response_model=list[ExerciseRead])
def list_exercises(session_id: int, db: Session = Depends(get_db)):
    return workouts.list_exercises(db, session_id)

@router.post("/{session_id}/exercises", response_model=list[ExerciseRead], status_code=status.HTTP_201_CREATED)
def add_exercise(session_id: int, payload: ExerciseCreate, db: Session = Depends(get_db)):
    return workouts.save_exercise(
        db,
        session_id,
        machine_name=payload.machine_name,
        weight=payload.weight,
        reps=payload.reps,
        sets=payload.sets,
    )

@router.get("/{session_id}/machines/available", response_model=list[MachineRead])
def available_machines(session_id: int, db: Session = Depends(get_db)):
    return workouts.available_machines(db, session_id)
