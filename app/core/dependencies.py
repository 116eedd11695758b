from typing import Optional

from fastapi import Depends
from fastapi.security import APIKeyCookie
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.db import get_db
from app.core.exceptions import Unauthenticated
from app.models.user import User
from app.repositories.activity_repository import ActivityRepository
from app.repositories.goal_repository import GoalRepository
from app.repositories.session_repository import SessionRepository
from app.repositories.user_repository import UserRepository
from app.repositories.workout_repository import WorkoutRepository
from app.services.auth_service import auth_service
from app.services.report_service import ReportService


session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    """Фабрика репозитория, инжектируется в эндпоинты через Depends."""
    return UserRepository(db)


def get_session_repository(db: AsyncSession = Depends(get_db)) -> SessionRepository:
    return SessionRepository(db)


def get_workout_repository(db: AsyncSession = Depends(get_db)) -> WorkoutRepository:
    return WorkoutRepository(db)


def get_goal_repository(db: AsyncSession = Depends(get_db)) -> GoalRepository:
    return GoalRepository(db)


def get_activity_repository(db: AsyncSession = Depends(get_db)) -> ActivityRepository:
    return ActivityRepository(db)


def get_report_service(
        activities: ActivityRepository = Depends(get_activity_repository),
        workouts: WorkoutRepository = Depends(get_workout_repository),
        goals: GoalRepository = Depends(get_goal_repository),
) -> ReportService:
    return ReportService(activities, workouts, goals)


async def get_current_user(
        token: Optional[str] = Depends(session_cookie),
        sessions: SessionRepository = Depends(get_session_repository),
        repo: UserRepository = Depends(get_user_repository),
) -> User:
    """Пользователь текущей сессии; без валидной cookie 401, без частичных данных."""
    user_session = await auth_service.resolve_session(sessions, token)
    if user_session is None:
        raise Unauthenticated()

    user = await repo.get_by_id(user_session.user_id)
    if user is None:
        raise Unauthenticated()

    return user
