import secrets
from datetime import datetime
from typing import Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.session import UserSession


class SessionRepository:
    """Серверное хранилище сессий: cookie несёт только непрозрачный id."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user_id: int, expires_at: datetime) -> UserSession:
        user_session = UserSession(
            id=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=datetime.utcnow(),
            expires_at=expires_at,
        )
        self.db.add(user_session)
        await self.db.commit()
        return user_session

    async def get_active(self, session_id: str, now: datetime) -> Optional[UserSession]:
        result = await self.db.execute(
            select(UserSession).where(
                UserSession.id == session_id,
                UserSession.expires_at > now,
            )
        )
        return result.scalar_one_or_none()

    async def delete(self, session_id: str) -> None:
        await self.db.execute(delete(UserSession).where(UserSession.id == session_id))
        await self.db.commit()

    async def purge_expired(self, now: datetime) -> int:
        result = await self.db.execute(delete(UserSession).where(UserSession.expires_at <= now))
        await self.db.commit()
        return result.rowcount or 0
