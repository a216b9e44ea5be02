from functools import lru_cache
from typing import Literal, Self

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Matchboard"
    app_env: Literal["development", "testing", "production"] = "development"
    debug: bool = False  # Console log rendering instead of JSON
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    enable_openapi: bool = True

    # Privacy and response hardening
    log_user_emails: bool = False  # GDPR: keep off outside local development
    csp_production: str = "default-src 'self'; frame-ancestors 'none'"

    # Database
    database_url: str
    database_migrations_url: str | None = None  # Falls back to database_url
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False

    # Seconds to let in-flight requests finish on shutdown
    shutdown_grace_period: int = 30

    # Bearer tokens are issued by the identity provider and only verified here
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if len(v) < 32:
            raise ValueError(
                "JWT_SECRET_KEY must be at least 32 characters. "
                "Generate one with: openssl rand -hex 32"
            )
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        # Credentials are allowed, so browsers reject a wildcard origin anyway
        if "*" in v:
            raise ValueError("CORS_ORIGINS must list explicit origins, not '*'")
        return v

    @model_validator(mode="after")
    def validate_production(self) -> Self:
        if self.app_env == "production" and self.debug:
            raise ValueError("DEBUG must be off when APP_ENV=production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
