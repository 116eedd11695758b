from datetime import date
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.workout import Workout, Exercise


class WorkoutRepository:
    """Агрегат «тренировка + упражнения»: упражнения всегда загружены вместе с тренировкой."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_with_exercises(self, workout: Workout, exercises: List[Exercise]) -> Workout:
        """
        Тренировка и все её упражнения сохраняются одной транзакцией.
        Упражнения получают workout_id после flush родителя.
        """
        workout.exercises = list(exercises)
        self.db.add(workout)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return workout

    async def list_for_user(self, user_id: int) -> List[Workout]:
        # selectinload: один дополнительный запрос на все упражнения вместо N
        result = await self.db.execute(
            select(Workout)
            .where(Workout.user_id == user_id)
            .options(selectinload(Workout.exercises))
            .order_by(Workout.date.desc(), Workout.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, workout_id: int) -> Optional[Workout]:
        result = await self.db.execute(
            select(Workout)
            .where(Workout.id == workout_id)
            .options(selectinload(Workout.exercises))
        )
        return result.scalar_one_or_none()

    async def delete(self, workout: Workout) -> None:
        # cascade="all, delete-orphan" удаляет упражнения вместе с тренировкой
        await self.db.delete(workout)
        await self.db.commit()

    async def count_between(self, user_id: int, start: date, end: date) -> int:
        result = await self.db.execute(
            select(func.count(Workout.id)).where(
                Workout.user_id == user_id,
                Workout.date >= start,
                Workout.date <= end,
            )
        )
        return result.scalar_one()
