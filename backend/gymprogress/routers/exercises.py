from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from gymprogress.db import get_db
from gymprogress.schemas.exercise import ExerciseRead, ExerciseUpdate
from gymprogress.services import workouts

router = APIRouter(prefix="/exercises", tags=["exercises"])

@router.put("/{exercise_id}", response_model=list[ExerciseRead])
def update_exercise(exercise_id: int, payload: ExerciseUpdate, db: Session = Depends(get_db)):
    ex = workouts.update_exercise(db, exercise_id, **payload.model_dump(exclude_none=True))
    return workouts.list_exercises(db, ex.session_id)

@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise(exercise_id: int, db: Session = Depends(get_db)):
    if not workouts.delete_exercise(db, exercise_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
