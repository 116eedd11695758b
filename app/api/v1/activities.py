from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.core.config import settings
from app.core.dependencies import get_current_user, get_activity_repository
from app.models.user import User
from app.repositories.activity_repository import ActivityRepository
from app.schemas.activity import ActivityRead, ActivityUpsert

router = APIRouter(tags=["activities"])


@router.get("", response_model=List[ActivityRead])
async def list_activities(
    limit: int = Query(settings.DEFAULT_ACTIVITY_LIMIT, ge=1, le=settings.MAX_ACTIVITY_LIMIT),
    current_user: User = Depends(get_current_user),
    repo: ActivityRepository = Depends(get_activity_repository),
):
    """Последние записи активности, новые сверху"""
    return await repo.list_for_user(current_user.id, limit)


@router.get("/{activity_date}", response_model=Optional[ActivityRead])
async def get_activity(
    activity_date: date,
    current_user: User = Depends(get_current_user),
    repo: ActivityRepository = Depends(get_activity_repository),
):
    """Активность за день или null"""
    return await repo.get_by_date(current_user.id, activity_date)


@router.post("", response_model=ActivityRead)
async def save_activity(
    data: ActivityUpsert,
    current_user: User = Depends(get_current_user),
    repo: ActivityRepository = Depends(get_activity_repository),
):
    """Создать запись за день или перезаписать существующую"""
    return await repo.upsert(
        user_id=current_user.id,
        activity_date=data.date,
        steps=data.steps,
        calories=data.calories,
        distance=data.distance,
        active_time=data.active_time,
    )
