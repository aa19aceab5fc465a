from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

# Project root, one level above the ``app`` package
_BACKEND_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./csr_dashboard.db"

    # JWT. No hardcoded fallback secret, see ``app.utils.security.get_jwt_secret``
    JWT_SECRET: str | None = None
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 1440  # 24 hours

    # Session cookie
    SESSION_COOKIE_NAME: str = "auth-token"
    SESSION_MAX_AGE: int = 60 * 60 * 24  # 24 hours, in seconds

    # App
    APP_NAME: str = "CSR Dashboard"
    ENVIRONMENT: str = "development"  # "production" turns on secure cookies
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    SEED_ON_STARTUP: bool = True

    # Password assigned to users created from the master-data screen without one
    DEFAULT_USER_PASSWORD: str = "password123"

    # CORS, overridable with CORS_ORIGINS as a JSON array
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Server-rendered pages
    TEMPLATES_DIR: Path = _BACKEND_ROOT / "app" / "templates"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
