from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://fittrack:fittrack@db:5432/fittrack"
    DATABASE_ECHO: bool = False
    # При продакшн/обычной разработке лучше не пересоздавать БД на каждом старте
    RESET_DATABASE: bool = False

    SECRET_KEY: str = "SECRET_KEY_FOR_FITTRACK"
    ALGORITHM: str = "HS256"

    SESSION_COOKIE_NAME: str = "fittrack_session"
    SESSION_EXPIRE_DAYS: int = 7
    SESSION_COOKIE_SECURE: bool = True
    SESSION_COOKIE_SAMESITE: str = "lax"

    CORS_ORIGINS: List[str] = [
        "http://localhost:5000",
        "http://127.0.0.1:5000",
        "http://localhost:5173",
    ]

    LOG_LEVEL: str = "INFO"

    DEFAULT_ACTIVITY_LIMIT: int = 7
    MAX_ACTIVITY_LIMIT: int = 366

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def async_database_url(self) -> str:
        if self.DATABASE_URL.startswith("postgresql://"):
            return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self.DATABASE_URL


settings = Settings()
