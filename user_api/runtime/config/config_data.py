"""Pydantic models describing the application configuration.

The same models back both configuration sources: plain environment variables
(see ``settings.EnvironmentVariables``) and the optional templated YAML file
(see ``config_template.load_templated_yaml``).
"""

from __future__ import annotations

import re
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field, field_validator
from sqlalchemy.engine import URL

from user_api.runtime.config.settings import EnvironmentVariables

SUPPORTED_DRIVERS = ("sqlite", "mysql")

# user:password@tcp(host:port)/dbname?param=value
_GO_MYSQL_DSN = re.compile(
    r"^(?:(?P<credentials>.*)@)?"
    r"(?:(?P<protocol>[a-z]+)(?:\((?P<address>[^)]*)\))?)?"
    r"/(?P<database>[^?/]*)"
    r"(?:\?(?P<params>.*))?$"
)

# Only these DSN parameters mean anything to PyMySQL
_MYSQL_PASSTHROUGH_PARAMS = ("charset",)


def mysql_url_from_dsn(dsn: str) -> str:
    """Translate a Go-driver style MySQL DSN into a SQLAlchemy URL string.

    Full SQLAlchemy URLs are returned unchanged.
    """
    if "://" in dsn:
        return dsn

    match = _GO_MYSQL_DSN.match(dsn)
    if match is None:
        raise ValueError(f"Unrecognised MySQL DSN: {dsn!r}")

    username = password = None
    if match.group("credentials"):
        username, _, password = match.group("credentials").partition(":")

    host = port = None
    query: dict[str, str] = {}
    address = match.group("address") or ""
    if match.group("protocol") == "unix":
        query["unix_socket"] = address
    elif address:
        host, _, port_str = address.rpartition(":") if ":" in address else (address, "", "")
        port = int(port_str) if port_str else None

    for pair in (match.group("params") or "").split("&"):
        key, _, value = pair.partition("=")
        if key in _MYSQL_PASSTHROUGH_PARAMS and value:
            query[key] = value

    url = URL.create(
        "mysql+pymysql",
        username=username or None,
        password=password or None,
        host=host or None,
        port=port,
        database=match.group("database") or None,
        query=query,
    )
    return url.render_as_string(hide_password=False)


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(default=["*"])
    allow_credentials: bool = False
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class ServerConfig(BaseModel):
    """HTTP listener configuration."""

    host: str = Field(default="0.0.0.0", description="Listen address")
    port: int = Field(default=8080, description="Listen port")


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="info", description="Logging level")
    format: Literal["pretty", "console", "json"] = Field(
        default="pretty", description="Log format"
    )
    file: str | None = Field(default=None, description="Optional log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )

    @field_validator("format", mode="before")
    @classmethod
    def _normalise_format(cls, value: str) -> str:
        # Anything that is not a console format is treated as JSON
        value = (value or "").lower()
        return value if value in ("pretty", "console") else "json"


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    driver: str = Field(default="sqlite", description="Database driver: sqlite or mysql")
    dsn: str = Field(default="test.db", description="Driver specific data source name")
    echo: bool = Field(default=False, description="Echo SQL statements")
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")

    @field_validator("driver", mode="before")
    @classmethod
    def _fallback_driver(cls, value: str) -> str:
        driver = (value or "").lower()
        if driver not in SUPPORTED_DRIVERS:
            logger.warning("Unknown database driver '{}', falling back to sqlite", value)
            return "sqlite"
        return driver

    @property
    def is_memory(self) -> bool:
        """Whether this is an in-process SQLite database."""
        return self.driver == "sqlite" and (
            self.dsn in ("", ":memory:") or "mode=memory" in self.dsn
        )

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the SQLAlchemy URL for the configured driver and DSN."""
        if self.driver == "mysql":
            return mysql_url_from_dsn(self.dsn)

        if "://" in self.dsn:
            return self.dsn
        if self.dsn in ("", ":memory:"):
            return "sqlite://"
        return f"sqlite:///{self.dsn}"


class AppConfig(BaseModel):
    """Application configuration model."""

    name: str = Field(default="user-api", description="Service name")
    version: str = Field(default="1.0.0", description="Service version")
    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    server: ServerConfig = Field(
        default_factory=ServerConfig, description="HTTP server configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @classmethod
    def from_environment(cls, env_vars: EnvironmentVariables) -> ConfigData:
        """Build the configuration from plain environment variables."""
        return cls(
            app=AppConfig(environment=env_vars.environment),
            server=ServerConfig(host=env_vars.host, port=env_vars.port),
            database=DatabaseConfig(driver=env_vars.db_driver, dsn=env_vars.db_dsn),
            logging=LoggingConfig(
                level=env_vars.log_level,
                format=env_vars.log_format,
                file=env_vars.log_file,
            ),
        )
