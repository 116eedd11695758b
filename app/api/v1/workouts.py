import logging
from typing import List

from fastapi import APIRouter, Depends

from app.core.dependencies import get_current_user, get_workout_repository
from app.core.exceptions import ensure_owner
from app.models.user import User
from app.models.workout import Workout, Exercise
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.base import SuccessResponse
from app.schemas.workout import WorkoutCreate, WorkoutRead

logger = logging.getLogger(__name__)

router = APIRouter(tags=["workouts"])


@router.post("", response_model=WorkoutRead)
async def create_workout(
    data: WorkoutCreate,
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository),
):
    """Создание тренировки вместе со всеми упражнениями (одна транзакция)"""
    workout = Workout(
        user_id=current_user.id,
        name=data.name,
        date=data.date,
    )
    exercises = [
        Exercise(name=ex.name, sets=ex.sets, reps=ex.reps, weight=ex.weight)
        for ex in data.exercises
    ]

    workout = await repo.create_with_exercises(workout, exercises)
    logger.info("Тренировка id=%s создана (%s упражнений)", workout.id, len(exercises))
    return workout


@router.get("", response_model=List[WorkoutRead])
async def list_workouts(
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository),
):
    """Все тренировки пользователя, новые сверху"""
    return await repo.list_for_user(current_user.id)


@router.get("/{workout_id}", response_model=WorkoutRead)
async def get_workout(
    workout_id: int,
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository),
):
    workout = await repo.get_by_id(workout_id)
    return ensure_owner(workout, current_user.id, "Workout")


@router.delete("/{workout_id}", response_model=SuccessResponse)
async def delete_workout(
    workout_id: int,
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository),
):
    """Удаление тренировки; упражнения удаляются каскадно"""
    workout = ensure_owner(await repo.get_by_id(workout_id), current_user.id, "Workout")
    await repo.delete(workout)
    return SuccessResponse()
