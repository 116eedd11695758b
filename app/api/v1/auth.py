import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.core.config import settings
from app.core.dependencies import (
    get_current_user,
    get_session_repository,
    get_user_repository,
    session_cookie,
)
from app.core.exceptions import InvalidCredentials
from app.models.user import User
from app.repositories.session_repository import SessionRepository
from app.repositories.user_repository import UserRepository
from app.schemas.auth import UserLogin, UserRegister, UserEnvelope, UserRead
from app.schemas.base import SuccessResponse
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def set_session_cookie(response: Response, token: str, expires_at: datetime) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRE_DAYS * 24 * 60 * 60,
        expires=expires_at.strftime("%a, %d %b %Y %H:%M:%S GMT"),
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite=settings.SESSION_COOKIE_SAMESITE,
    )


def user_envelope(user: User) -> UserEnvelope:
    return UserEnvelope(user=UserRead.model_validate(user))


@router.post("/register", response_model=UserEnvelope)
async def register(
    user: UserRegister,
    response: Response,
    repo: UserRepository = Depends(get_user_repository),
    sessions: SessionRepository = Depends(get_session_repository),
):
    """Регистрация нового пользователя и сразу вход в новую сессию"""
    new_user = await auth_service.register_user(repo, user)

    token, expires_at = await auth_service.open_session(sessions, new_user)
    set_session_cookie(response, token, expires_at)

    return user_envelope(new_user)


@router.post("/login", response_model=UserEnvelope)
async def login(
    user: UserLogin,
    response: Response,
    repo: UserRepository = Depends(get_user_repository),
    sessions: SessionRepository = Depends(get_session_repository),
):
    """Проверка учётных данных и выдача сессионной cookie"""
    authenticated_user = await auth_service.authenticate_user(repo, user)
    if not authenticated_user:
        # Одинаковый ответ для неизвестного email и неверного пароля
        raise InvalidCredentials()

    token, expires_at = await auth_service.open_session(sessions, authenticated_user)
    set_session_cookie(response, token, expires_at)
    logger.info("Вход пользователя id=%s", authenticated_user.id)

    return user_envelope(authenticated_user)


@router.post("/logout", response_model=SuccessResponse)
async def logout(
    response: Response,
    token: Optional[str] = Depends(session_cookie),
    sessions: SessionRepository = Depends(get_session_repository),
):
    """Завершение сессии; повторный выход тоже успешен"""
    await auth_service.close_session(sessions, token)
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite=settings.SESSION_COOKIE_SAMESITE,
    )
    return SuccessResponse()


@router.get("/me", response_model=UserEnvelope)
async def me(current_user: User = Depends(get_current_user)):
    return user_envelope(current_user)
