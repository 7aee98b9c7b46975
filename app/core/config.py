import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Application settings."""

    # Application
    PROJECT_NAME: str = "User Management API"
    PROJECT_DESCRIPTION: str = "Users resource with profiles, soft delete and restore"
    VERSION: str = "0.1.0"
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Security
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev_secret_key")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60  # 1 hour
    JWT_ALGORITHM: str = "HS256"

    # Registration policy: POST /users without credentials
    ALLOW_PUBLIC_REGISTRATION: bool = os.getenv("ALLOW_PUBLIC_REGISTRATION", "true").lower() == "true"

    # Pagination
    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "15"))
    MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "100"))

    # Email (Resend)
    RESEND_API_KEY: str = os.getenv("RESEND_API_KEY", "")
    EMAIL_FROM: str = os.getenv("EMAIL_FROM", "noreply@example.com")
    EMAIL_FROM_NAME: str = os.getenv("EMAIL_FROM_NAME", "User Management")
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:8080")

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost", "http://localhost:3000", "http://localhost:8080"]

    # Database
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOCAL_DATABASE_URL: str = os.getenv("LOCAL_DATABASE_URL", "sqlite+aiosqlite:///./users_dev.db")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    @property
    def database_url(self) -> str:
        """Database URL for the current environment, as configured."""
        if self.ENVIRONMENT == "development" or not self.DATABASE_URL:
            return self.LOCAL_DATABASE_URL
        return self.DATABASE_URL

    @property
    def async_database_url(self) -> str:
        """Get async database URL based on environment."""
        base_url = self.database_url.replace("\\x3a", ":")

        # Convert postgresql:// to postgresql+asyncpg://
        if base_url.startswith("postgresql://"):
            return base_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif base_url.startswith("postgres://"):
            return base_url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif base_url.startswith("sqlite://"):
            return base_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        else:
            return base_url

    @property
    def sync_database_url(self) -> str:
        """URL with a synchronous driver, used by Alembic."""
        url = self.database_url.replace("\\x3a", ":")
        if url.startswith("postgresql+asyncpg://"):
            return url.replace("postgresql+asyncpg://", "postgresql://", 1)
        if url.startswith("sqlite+aiosqlite://"):
            return url.replace("sqlite+aiosqlite://", "sqlite://", 1)
        return url

    # Async Connection Pool Configuration
    ASYNC_DB_POOL_SIZE: int = int(os.getenv("ASYNC_DB_POOL_SIZE", "20"))
    ASYNC_DB_MAX_OVERFLOW: int = int(os.getenv("ASYNC_DB_MAX_OVERFLOW", "30"))
    ASYNC_DB_POOL_RECYCLE: int = int(os.getenv("ASYNC_DB_POOL_RECYCLE", "3600"))  # 1 hour
    ASYNC_DB_POOL_PRE_PING: bool = os.getenv("ASYNC_DB_POOL_PRE_PING", "true").lower() == "true"
    ASYNC_DB_ECHO: bool = os.getenv("ASYNC_DB_ECHO", "false").lower() == "true"
    ASYNC_DB_POOL_TIMEOUT: int = int(os.getenv("ASYNC_DB_POOL_TIMEOUT", "30"))

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
