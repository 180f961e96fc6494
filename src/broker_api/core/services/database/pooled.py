"""Pooled database connection used across the application."""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import StaticPool, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, create_engine

from src.broker_api.core.exceptions import ConfigurationError, DatabaseError
from src.broker_api.core.services.database.base import (
    CommandResult,
    Database,
    Row,
    bind_positional,
    command_tag,
)
from src.broker_api.runtime.config.config_data import ConfigData


class PooledDatabase(Database):
    def __init__(self, config: ConfigData):
        """Create the shared engine and its connection pool.

        Raises:
            ConfigurationError: If the connection string is missing or invalid
        """
        db_config = config.database
        connection_string = db_config.connection_string

        logger.info(
            "Configuring database engine for environment: {}", config.app.environment
        )
        engine_kwargs: dict[str, Any] = {
            "pool_pre_ping": True,  # Validate connections before use
            "echo": False,
            "connect_args": self._get_connect_args(config),
        }

        if db_config.is_sqlite:
            if ":memory:" in connection_string or connection_string.rstrip("/") == "sqlite:":
                # One shared connection, otherwise every checkout sees an empty database
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

        try:
            self._engine = create_engine(connection_string, **engine_kwargs)
        except (SQLAlchemyError, ImportError, ValueError) as e:
            raise ConfigurationError(f"Failed to create connection pool: {e}") from e

        logger.bind(
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
            pool_recycle=db_config.pool_recycle,
        ).info("Database engine initialized")

    def _get_connect_args(self, config: ConfigData) -> dict:
        """Driver-specific connection arguments."""
        connect_args: dict[str, Any] = {}

        if config.database.is_sqlite:
            connect_args.update(
                {
                    "check_same_thread": False,
                    "timeout": 20,  # Lock timeout
                }
            )
            if config.app.environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )
        else:
            connect_args.update(
                {
                    # Application name for connection tracking
                    "application_name": f"{config.app.environment}_broker_api",
                    "connect_timeout": config.database.connect_timeout,
                }
            )

        return connect_args

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Transaction scope: commit on success, rollback and log on failure."""
        db = Session(self._engine, expire_on_commit=False)
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

    def query(self, sql: str, args: Sequence[Any] = ()) -> list[Row]:
        try:
            with self._engine.connect() as connection:
                result = connection.execute(text(sql), bind_positional(args))
                return [dict(row) for row in result.mappings()]
        except SQLAlchemyError as e:
            raise DatabaseError(str(e)) from e

    def execute(self, sql: str, args: Sequence[Any] = ()) -> CommandResult:
        try:
            with self.session_scope() as session:
                result = session.exec(text(sql), params=bind_positional(args))
                return CommandResult(tag=command_tag(sql), rows_affected=result.rowcount)
        except SQLAlchemyError as e:
            raise DatabaseError(str(e)) from e

    def health_check(self) -> None:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.bind(
                error_type=type(e).__name__,
                error_message=str(e),
            ).error("Database health check failed")
            raise DatabaseError(f"Failed to ping database: {e}") from e

    def close(self) -> None:
        self._engine.dispose()
        logger.info("Database connection closed.")

    def get_pool_status(self) -> dict[str, int]:
        """Get current connection pool status for monitoring."""
        pool = self._engine.pool
        return {
            "size": getattr(pool, "size", lambda: 0)(),
            "checked_in": getattr(pool, "checkedin", lambda: 0)(),
            "checked_out": getattr(pool, "checkedout", lambda: 0)(),
            "overflow": getattr(pool, "overflow", lambda: 0)(),
        }
