"""Service configuration via environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    # HTTP
    host: str = "0.0.0.0"
    port: int = 8080

    # Database
    database_url: str
    store_timeout_seconds: float = 10.0

    # Logging
    log_level: LogLevel = "INFO"
    log_format: str = "json"

    # JWT Auth
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = 24

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process. Raises pydantic.ValidationError when required values are missing."""
    return Settings()
