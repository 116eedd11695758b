from datetime import date, datetime
from typing import List

from pydantic import Field

from app.schemas.base import MAX_INT, CamelModel


class ExerciseInput(CamelModel):
    name: str = Field(min_length=1)
    sets: int = Field(ge=1, le=MAX_INT)
    reps: int = Field(ge=1, le=MAX_INT)
    weight: float = Field(default=0, ge=0, allow_inf_nan=False)


class WorkoutCreate(CamelModel):
    name: str = Field(min_length=1)
    date: date
    exercises: List[ExerciseInput] = Field(min_length=1)


class ExerciseRead(CamelModel):
    id: int
    workout_id: int
    name: str
    sets: int
    reps: int
    weight: float


class WorkoutRead(CamelModel):
    id: int
    user_id: int
    name: str
    date: date
    created_at: datetime
    exercises: List[ExerciseRead]
