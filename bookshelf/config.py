"""
Application Configuration Module

This module uses Pydantic Settings for type-safe configuration management.

WHY Pydantic Settings?
======================
1. Type Safety: All configuration values are validated against their types
2. Environment Variables: Automatically loads from environment variables
3. .env Support: Can load from .env files for local development
4. Validation: Catches configuration errors at startup, not runtime

PATTERN: Settings Singleton
===========================
We create a single Settings instance that's cached using @lru_cache.
All parts of the app share the same configuration and the .env file
is read only once.

Usage:
    from bookshelf.config import get_settings

    settings = get_settings()
    print(settings.app_name)
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Field(...) is used for required fields with descriptions.
    default=value is used for optional fields with defaults.

    SECURITY NOTE:
    ==============
    secret_key has a validator: placeholder values raise errors at startup.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Bookshelf API",
        description="Application name displayed in docs and logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (detailed errors, SQL echo)"
    )
    api_prefix: str = Field(
        default="/api",
        description="URL prefix for the resource routers"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=8001,
        description="Port to bind the server to"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # -------------------------------------------------------------------------
    # Database Settings
    # -------------------------------------------------------------------------
    database_url: str = Field(
        default="sqlite:///./bookshelf.db",
        description="SQLAlchemy database URL"
    )
    db_pool_size: int = Field(
        default=5,
        description="Number of permanent database connections"
    )
    db_max_overflow: int = Field(
        default=10,
        description="Maximum additional connections during high load"
    )

    # -------------------------------------------------------------------------
    # Cache Settings
    # -------------------------------------------------------------------------
    cache_backend: str = Field(
        default="memory",
        description="Cache backend: memory (per process) or redis"
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL, used when cache_backend=redis"
    )
    cache_ttl: int = Field(
        default=0,
        ge=0,
        description="Cache entry lifetime in seconds (0 = until invalidated)"
    )

    # -------------------------------------------------------------------------
    # Pagination & Versioning
    # -------------------------------------------------------------------------
    default_page_limit: int = Field(
        default=3,
        ge=1,
        description="Items per page when the limit query parameter is omitted"
    )
    max_page_limit: int = Field(
        default=100,
        ge=1,
        description="Upper bound for the limit query parameter"
    )
    default_api_version: str = Field(
        default="1.0",
        description="Serialization version used when the client sends none"
    )

    # -------------------------------------------------------------------------
    # Security Settings
    # -------------------------------------------------------------------------
    secret_key: str = Field(
        default="REPLACE_WITH_YOUR_GENERATED_SECRET_KEY",
        description="Secret key used to sign JWT access tokens"
    )
    access_token_expire_minutes: int = Field(
        default=60,
        ge=1,
        description="Lifetime of access tokens in minutes"
    )
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:8080",
        description="Comma-separated list of allowed CORS origins"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """
        Validate that secret_key is not a placeholder value.

        The application will fail to start if SECRET_KEY is not properly set.

        Raises:
            ValueError: If secret key is a placeholder or too short
        """
        placeholder_indicators = [
            "REPLACE_WITH",
            "change-me",
            "your-secret",
            "generate-with",
        ]

        for indicator in placeholder_indicators:
            if indicator.lower() in v.lower():
                raise ValueError(
                    "SECRET_KEY contains a placeholder value. "
                    "Generate a secure key with: openssl rand -hex 32"
                )

        if len(v) < 32:
            raise ValueError(
                "SECRET_KEY must be at least 32 characters long. "
                "Generate a secure key with: openssl rand -hex 32"
            )

        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        valid_envs = {"development", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v.lower()

    @field_validator("cache_backend")
    @classmethod
    def validate_cache_backend(cls, v: str) -> str:
        """Validate the cache backend name."""
        valid_backends = {"memory", "redis"}
        if v.lower() not in valid_backends:
            raise ValueError(f"cache_backend must be one of {valid_backends}")
        return v.lower()

    @field_validator("default_api_version")
    @classmethod
    def validate_default_api_version(cls, v: str) -> str:
        """The default version must be dotted integers, e.g. 1.0."""
        parts = v.split(".")
        if not all(part.isdigit() for part in parts):
            raise ValueError("default_api_version must look like 1.0")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    lru_cache makes this a process-wide singleton:
    - First call: Creates Settings instance, loads .env, validates
    - Subsequent calls: Returns the cached instance

    Returns:
        Cached Settings instance
    """
    return Settings()
