from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity import Activity

UPSERT_FIELDS = ("steps", "calories", "distance", "active_time")

_INSERT_BY_DIALECT = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class ActivityRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_date(self, user_id: int, activity_date: date) -> Optional[Activity]:
        result = await self.db.execute(
            select(Activity).where(
                Activity.user_id == user_id,
                Activity.date == activity_date,
            )
        )
        return result.scalar_one_or_none()

    async def upsert(
        self,
        user_id: int,
        activity_date: date,
        steps: int = 0,
        calories: int = 0,
        distance: float = 0,
        active_time: int = 0,
    ) -> Activity:
        """
        Атомарный upsert по (user_id, date) одним выражением
        INSERT ... ON CONFLICT DO UPDATE ... RETURNING.

        Параллельные запросы на одну дату не создают дубликатов:
        уникальный индекс сериализует их, побеждает последняя запись,
        и она перезаписывает все числовые поля целиком.
        """
        dialect = self.db.bind.dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect)
        if insert is None:
            raise RuntimeError(f"Upsert is not supported for dialect {dialect!r}")

        values = {
            "user_id": user_id,
            "date": activity_date,
            "steps": steps,
            "calories": calories,
            "distance": distance,
            "active_time": active_time,
        }
        stmt = insert(Activity).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Activity.user_id, Activity.date],
            set_={field: stmt.excluded[field] for field in UPSERT_FIELDS},
        ).returning(Activity)

        result = await self.db.execute(
            stmt, execution_options={"populate_existing": True}
        )
        activity = result.scalar_one()
        await self.db.commit()
        return activity

    async def list_for_user(self, user_id: int, limit: int = 7) -> List[Activity]:
        result = await self.db.execute(
            select(Activity)
            .where(Activity.user_id == user_id)
            .order_by(Activity.date.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_between(self, user_id: int, start: date, end: date) -> List[Activity]:
        result = await self.db.execute(
            select(Activity)
            .where(
                Activity.user_id == user_id,
                Activity.date >= start,
                Activity.date <= end,
            )
            .order_by(Activity.date)
        )
        return list(result.scalars().all())
