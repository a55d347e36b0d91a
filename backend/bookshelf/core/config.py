"""Application configuration and settings management."""
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings loaded from environment variables or .env."""

    model_config = SettingsConfigDict(
        env_file=(Path(__file__).resolve().parent.parent / ".." / ".env"),
        env_file_encoding="utf-8",
        env_prefix="BOOKSHELF_",
        extra="ignore",
    )

    app_name: str = "Book Management System"
    docs_url: str = "/api-docs"
    host: str = "0.0.0.0"
    port: int = 3000

    # Required, supplied out-of-band
    database_url: str
    secret_key: str

    # Database pool
    db_pool_size: int = 10
    db_pool_timeout_seconds: float = 2.0
    db_pool_recycle_seconds: int = 30

    # Security
    access_token_expire_minutes: int = 60
    allowed_origins: Annotated[List[str], NoDecode] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    log_level: str = "INFO"

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: List[str] | str) -> List[str]:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @property
    def access_token_expire_seconds(self) -> int:
        return self.access_token_expire_minutes * 60


@lru_cache
def get_settings() -> Settings:
    """Return memoized settings instance."""

    return Settings()
