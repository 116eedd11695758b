"""
Общие фикстуры для всех тестов FitTrack backend.

Стратегия:
- Тестовое FastAPI-приложение создаётся без lifespan (нет подключения к БД при старте).
- Для эндпоинтов репозитории заменяются на AsyncMock через dependency_overrides,
  а get_current_user — на лямбду с нужным пользователем.
- Для проверки SQL-семантики (upsert, каскад, транзакции) используется SQLite в памяти
  (aiosqlite + StaticPool), get_db подменяется на сессии этой БД.
- base_url https://, иначе httpx не отправит Secure-cookie сессии.
"""

import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from datetime import datetime
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.router import api_router
from app.core.base import Base
from app.core.db import get_db
from app.core.dependencies import (
    get_activity_repository,
    get_current_user,
    get_goal_repository,
    get_session_repository,
    get_user_repository,
    get_workout_repository,
)
from app.core.exceptions import register_exception_handlers
from app.models import User
from app.repositories.activity_repository import ActivityRepository
from app.repositories.goal_repository import GoalRepository
from app.repositories.session_repository import SessionRepository
from app.repositories.user_repository import UserRepository
from app.repositories.workout_repository import WorkoutRepository
from app.services.auth_service import auth_service

BASE_URL = "https://test"


# ---------------------------------------------------------------------------
# Вспомогательные функции
# ---------------------------------------------------------------------------

def create_test_app() -> FastAPI:
    """Тестовое FastAPI-приложение без lifespan."""
    test_app = FastAPI(title="FitTrack Test App")
    register_exception_handlers(test_app)
    test_app.include_router(api_router, prefix="/api")
    return test_app


def make_client(app: FastAPI) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL)


# ---------------------------------------------------------------------------
# Фикстуры пользователей
# ---------------------------------------------------------------------------

@pytest.fixture
def user_fixture() -> User:
    """Обычный пользователь."""
    return User(
        id=1,
        email="test@example.com",
        name="Tester",
        password=auth_service.hash_password("password123"),
        created_at=datetime.utcnow(),
    )


@pytest.fixture
def other_user_fixture() -> User:
    """Второй пользователь — владелец «чужих» записей."""
    return User(
        id=2,
        email="other@example.com",
        name="Other",
        password=auth_service.hash_password("other123"),
        created_at=datetime.utcnow(),
    )


# ---------------------------------------------------------------------------
# Мокированные репозитории
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_repo() -> AsyncMock:
    """Мокированный UserRepository для auth-эндпоинтов."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def mock_sessions() -> AsyncMock:
    return AsyncMock(spec=SessionRepository)


@pytest.fixture
def mock_workouts() -> AsyncMock:
    return AsyncMock(spec=WorkoutRepository)


@pytest.fixture
def mock_goals() -> AsyncMock:
    return AsyncMock(spec=GoalRepository)


@pytest.fixture
def mock_activities() -> AsyncMock:
    return AsyncMock(spec=ActivityRepository)


def _override_repositories(app, mock_repo, mock_sessions, mock_workouts, mock_goals, mock_activities):
    app.dependency_overrides[get_user_repository] = lambda: mock_repo
    app.dependency_overrides[get_session_repository] = lambda: mock_sessions
    app.dependency_overrides[get_workout_repository] = lambda: mock_workouts
    app.dependency_overrides[get_goal_repository] = lambda: mock_goals
    app.dependency_overrides[get_activity_repository] = lambda: mock_activities


# ---------------------------------------------------------------------------
# HTTP-клиенты на моках
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(
    mock_repo, mock_sessions, mock_workouts, mock_goals, mock_activities
) -> AsyncGenerator[AsyncClient, None]:
    """
    Анонимный клиент: все репозитории → AsyncMock.
    Аутентификация проходит через настоящую проверку cookie.
    """
    app = create_test_app()
    _override_repositories(app, mock_repo, mock_sessions, mock_workouts, mock_goals, mock_activities)
    async with make_client(app) as ac:
        yield ac


@pytest.fixture
async def user_client(
    user_fixture, mock_repo, mock_sessions, mock_workouts, mock_goals, mock_activities
) -> AsyncGenerator[AsyncClient, None]:
    """
    Клиент, аутентифицированный как обычный пользователь.
    get_current_user → user_fixture.
    """
    app = create_test_app()
    _override_repositories(app, mock_repo, mock_sessions, mock_workouts, mock_goals, mock_activities)
    app.dependency_overrides[get_current_user] = lambda: user_fixture
    async with make_client(app) as ac:
        yield ac


# ---------------------------------------------------------------------------
# SQLite в памяти
# ---------------------------------------------------------------------------

@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def db_sessionmaker(db_engine):
    return async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(db_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    async with db_sessionmaker() as session:
        yield session


async def create_db_user(session: AsyncSession, email: str, name: str = "Owner") -> User:
    return await UserRepository(session).create_user(User(
        email=email,
        name=name,
        password=auth_service.hash_password("owner123"),
    ))


@pytest.fixture
async def user_in_db(db_session) -> User:
    return await create_db_user(db_session, "owner@example.com")


@pytest.fixture
async def live_client(db_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """Полный HTTP-стек поверх SQLite: реальные репозитории и cookie-сессии."""
    app = create_test_app()

    async def override_get_db():
        async with db_sessionmaker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with make_client(app) as ac:
        yield ac
