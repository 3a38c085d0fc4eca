from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentVariables(BaseSettings):
    """Simple primitive values loaded from environment variables and .env files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Environment and deployment
    environment: Literal["development", "production", "test"] = Field(
        default="development"
    )
    config_file: str | None = Field(default=None)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)

    # Database
    db_driver: str = Field(default="sqlite")
    db_dsn: str = Field(default="test.db")

    # Logging
    log_level: str = Field(default="info")
    log_format: str = Field(default="pretty")
    log_file: str | None = Field(default=None)
