"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import StaticPool, text
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from user_api.runtime.config.config_data import DatabaseConfig


class DbSessionService:
    def __init__(self, db_config: DatabaseConfig, environment: str = "development"):
        """Initialize the shared database engine and session factory."""

        logger.info("Setting up database engine for driver {}", db_config.driver)
        self._config = db_config

        engine_kwargs = {
            # Validate connections before use
            "pool_pre_ping": True,
            "echo": db_config.echo,
            "connect_args": self._get_connect_args(db_config, environment),
        }

        if db_config.is_memory:
            # A single shared connection, otherwise every session would see
            # its own empty in-memory database
            engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                }
            )

        self._engine = create_engine(db_config.connection_string, **engine_kwargs)

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def driver(self) -> str:
        return self._config.driver

    def _get_connect_args(self, db_config: DatabaseConfig, environment: str) -> dict:
        """Get database-specific connection arguments."""
        connect_args = {}

        if db_config.driver == "sqlite":
            connect_args.update(
                {
                    "check_same_thread": False,  # Sessions are used from the threadpool
                    "timeout": 20,  # Lock timeout
                }
            )

            if environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider MySQL for better performance and reliability."
                )

        elif db_config.driver == "mysql":
            connect_args["connect_timeout"] = 30

        return connect_args

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # Returned entities stay readable after commit
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Run a unit of work: commit on success, roll back and re-raise on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.bind(
                error_type=type(e).__name__,
                error_message=str(e),
            ).error("Database transaction failed")
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.bind(
                error_type=type(e).__name__,
                error_message=str(e),
            ).error("Database health check failed")
            return False

    def get_pool_status(self) -> dict:
        """Get current connection pool status for monitoring."""
        pool = self._engine.pool
        return {
            "size": getattr(pool, "size", lambda: 0)(),
            "checked_in": getattr(pool, "checkedin", lambda: 0)(),
            "checked_out": getattr(pool, "checkedout", lambda: 0)(),
            "overflow": getattr(pool, "overflow", lambda: 0)(),
        }

    def dispose(self) -> None:
        """Close all pooled connections."""
        self._engine.dispose()
