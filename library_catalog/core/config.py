"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "sqlite://",
    "sqlite+pysqlite://",
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "mysql://",
    "mysql+pymysql://",
)


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"

    # Single-user desktop default; point at Postgres or MySQL for a shared catalogue.
    DATABASE_URL: str = "sqlite:///./library.db"
    # Seconds to wait for a pooled connection before a storage call fails.
    DB_POOL_TIMEOUT_SEC: float = 30.0

    # JWT carries the authenticated role between requests
    JWT_SECRET: SecretStr = SecretStr("change-me-in-production")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60

    # First-run admin account. The password must be rotated after first login.
    BOOTSTRAP_ADMIN_USERNAME: str = "admin"
    BOOTSTRAP_ADMIN_PASSWORD: SecretStr = SecretStr("adminpassword")
    # Create missing tables and the admin account when the API starts.
    BOOTSTRAP_ON_STARTUP: bool = True

    # Oldest publication year accepted for a book.
    MIN_BOOK_YEAR: int = 1000

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.strip().startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a SQLite, PostgreSQL or MySQL URL "
                "(e.g. sqlite:///./library.db or postgresql://...)"
            )
        return v.strip()

    @field_validator("DB_POOL_TIMEOUT_SEC")
    @classmethod
    def validate_pool_timeout(cls, v: float) -> float:
        if v <= 0 or v > 300:
            raise ValueError("DB_POOL_TIMEOUT_SEC must be greater than 0 and at most 300")
        return v

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @field_validator("BOOTSTRAP_ADMIN_USERNAME")
    @classmethod
    def validate_bootstrap_admin_username(cls, v: str) -> str:
        if not v or not v.strip() or len(v.strip()) > 255:
            raise ValueError("BOOTSTRAP_ADMIN_USERNAME must be 1-255 characters")
        return v.strip()

    @field_validator("BOOTSTRAP_ADMIN_PASSWORD")
    @classmethod
    def validate_bootstrap_admin_password(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("BOOTSTRAP_ADMIN_PASSWORD must be set and non-empty")
        return v

    @field_validator("MIN_BOOK_YEAR")
    @classmethod
    def validate_min_book_year(cls, v: int) -> int:
        if v < 1:
            raise ValueError("MIN_BOOK_YEAR must be a positive year")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
