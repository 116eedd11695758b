import logging
from datetime import datetime, timedelta
from typing import Optional, Tuple

import bcrypt
from jose import jwt, JWTError

from app.core.config import settings
from app.core.exceptions import DuplicateEmailError, EmailTaken
from app.models.session import UserSession
from app.models.user import User
from app.repositories.session_repository import SessionRepository
from app.repositories.user_repository import UserRepository
from app.schemas.auth import UserLogin, UserRegister

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self):
        self.SECRET_KEY = settings.SECRET_KEY
        self.ALGORITHM = settings.ALGORITHM
        self.SESSION_EXPIRE_DAYS = settings.SESSION_EXPIRE_DAYS
        # Хэш для сравнения, когда email не найден: время ответа не выдаёт существование аккаунта
        self._dummy_hash = self.hash_password("fittrack-dummy-password")

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')  # Декодируем bytes в string для хранения в БД

    def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                plain_password.encode('utf-8'),
                hashed_password.encode('utf-8')
            )
        except ValueError:
            # Значение в БД не является bcrypt-хэшем
            return False

    def create_session_token(self, session_id: str, expires_at: datetime) -> str:
        """Подписанное значение cookie: внутри только id серверной сессии."""
        return jwt.encode(
            {"sid": session_id, "exp": expires_at},
            self.SECRET_KEY,
            algorithm=self.ALGORITHM,
        )

    def decode_session_token(self, token: str) -> Optional[str]:
        try:
            payload = jwt.decode(token, self.SECRET_KEY, algorithms=[self.ALGORITHM])
        except JWTError:
            return None
        return payload.get("sid")

    async def authenticate_user(self, repo: UserRepository, login_data: UserLogin) -> Optional[User]:
        user = await repo.get_by_email(login_data.email)

        if user is None:
            self.verify_password(login_data.password, self._dummy_hash)
            return None
        if not self.verify_password(login_data.password, user.password):
            return None

        return user

    async def register_user(self, repo: UserRepository, user_data: UserRegister) -> User:
        if await repo.get_by_email(user_data.email):
            raise EmailTaken()

        new_user = User(
            email=user_data.email,
            password=self.hash_password(user_data.password),
            name=user_data.name,
            created_at=datetime.utcnow()
        )

        try:
            created = await repo.create_user(new_user)
        except DuplicateEmailError:
            # Параллельная регистрация с тем же email
            raise EmailTaken()

        logger.info("Зарегистрирован пользователь id=%s", created.id)
        return created

    async def open_session(self, sessions: SessionRepository, user: User) -> Tuple[str, datetime]:
        expires_at = datetime.utcnow() + timedelta(days=self.SESSION_EXPIRE_DAYS)
        user_session = await sessions.create(user.id, expires_at)
        return self.create_session_token(user_session.id, expires_at), expires_at

    async def resolve_session(self, sessions: SessionRepository, token: Optional[str]) -> Optional[UserSession]:
        if not token:
            return None
        session_id = self.decode_session_token(token)
        if session_id is None:
            return None
        return await sessions.get_active(session_id, datetime.utcnow())

    async def close_session(self, sessions: SessionRepository, token: Optional[str]) -> None:
        """Выход идемпотентен: отсутствующая или чужая cookie не ошибка."""
        if not token:
            return
        session_id = self.decode_session_token(token)
        if session_id is not None:
            await sessions.delete(session_id)


# Создаем экземпляр сервиса для импорта
auth_service = AuthService()
