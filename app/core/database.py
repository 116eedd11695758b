import logging
from datetime import datetime

from app.core.config import settings
from app.core.base import Base
from app.core.db import engine, AsyncSessionLocal
from app.repositories.session_repository import SessionRepository

# Импортируем ВСЕ модели, чтобы metadata знала о таблицах
from app.models.user import User  # noqa: F401
from app.models.session import UserSession  # noqa: F401
from app.models.workout import Workout, Exercise  # noqa: F401
from app.models.goal import Goal  # noqa: F401
from app.models.activity import Activity  # noqa: F401

logger = logging.getLogger(__name__)


async def init_database():
    """Инициализация базы данных"""
    async with engine.begin() as conn:
        # Удаляем все таблицы если RESET_DATABASE=true
        if settings.RESET_DATABASE:
            logger.warning("RESET_DATABASE=true - пересоздаем БД")
            await conn.run_sync(Base.metadata.drop_all)

        await conn.run_sync(Base.metadata.create_all)
        logger.info("Таблицы БД созданы/проверены")


async def purge_expired_sessions() -> int:
    """Удалить истекшие сессии, накопившиеся с прошлого запуска"""
    async with AsyncSessionLocal() as session:
        removed = await SessionRepository(session).purge_expired(datetime.utcnow())
    if removed:
        logger.info("Удалено истекших сессий: %s", removed)
    return removed
