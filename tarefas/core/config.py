"""Application configuration using Pydantic Settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values come from ``TAREFAS_*`` environment variables or a local ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TAREFAS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # API
    APP_NAME: str = "Tarefas"
    VERSION: str = "0.1.0"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False, description="Debug mode")
    LOG_LEVEL: str = Field(default="INFO", description="Root logging level")

    # CORS
    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:4200", "http://localhost:3000"],
        description=(
            "Allowed CORS origins. "
            "Override in production, e.g. TAREFAS_CORS_ORIGINS='[\"https://app.example.com\"]'"
        ),
    )

    # Storage
    STORE_BACKEND: Literal["file", "redis", "memory"] = Field(
        default="file",
        description="Persistence backend: JSON files, Redis or process memory",
    )
    DATA_DIR: str = Field(default="./data", description="Directory for the JSON file store")
    REDIS_URL: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    REDIS_NAMESPACE: str = Field(default="tarefas", description="Prefix applied to every Redis key")
    FORCE_RESET_COUNTER: bool = Field(
        default=False,
        description="Reset the task id counter to 0 before each create (development only)",
    )
    PASSWORD_HASH_ITERATIONS: int = Field(default=120_000, gt=0, description="PBKDF2 iterations")

    # Client
    API_BASE_URL: str = Field(
        default="http://localhost:8000/api",
        description="Base URL the HTTP client services talk to",
    )
    HTTP_TIMEOUT: float = Field(default=10.0, description="HTTP client timeout in seconds")
    ITEMS_PER_PAGE: int = Field(default=10, gt=0, description="Rows per page in the task list")


settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return settings
