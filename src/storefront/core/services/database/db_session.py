"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from src.storefront.runtime.config.config_data import ConfigData, DatabaseConfig
from src.storefront.runtime.context import get_config


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    """Unicode-aware case folding for catalog search on SQLite."""
    dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)


class DbSessionService:
    def __init__(self, connection_string: str | None = None, config: ConfigData | None = None):
        """Initialize the shared database engine.

        Args:
            connection_string: Overrides the configured database URL
            config: Configuration to read pool settings from; defaults to the
                current application config
        """
        main_config = config or get_config()
        db_config = main_config.database
        url = connection_string or db_config.url

        logger.info(
            "Configuring database engine for environment: {}",
            main_config.app.environment,
        )
        engine_kwargs = self._engine_kwargs(url, db_config)
        if url.startswith("sqlite") and main_config.app.environment == "production":
            logger.warning(
                "SQLite is not recommended for production use. "
                "Consider PostgreSQL for better performance and reliability."
            )

        self._engine = create_engine(url, **engine_kwargs)
        if url.startswith("sqlite"):
            event.listen(self._engine, "connect", _register_sqlite_functions)
        logger.info(
            "Database engine initialized for {}",
            self._engine.url.render_as_string(hide_password=True),
        )

    @staticmethod
    def _engine_kwargs(url: str, db_config: DatabaseConfig) -> dict[str, Any]:
        """Engine arguments for the database dialect in ``url``."""
        kwargs: dict[str, Any] = {"echo": db_config.echo}

        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            # Every connection to ":memory:" is a separate database
            if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
                kwargs["poolclass"] = StaticPool
            return kwargs

        kwargs.update(
            {
                "pool_size": db_config.pool_size,
                "max_overflow": db_config.max_overflow,
                "pool_timeout": db_config.pool_timeout,
                "pool_recycle": db_config.pool_recycle,
                "pool_pre_ping": True,
            }
        )
        if url.startswith("postgresql"):
            kwargs["connect_args"] = {"connect_timeout": 30}
        return kwargs

    @property
    def engine(self):
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False, autoflush=True)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Transactional scope: commit on success, roll back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error("Database transaction failed: {}: {}", type(e).__name__, e)
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.error("Database health check failed: {}: {}", type(e).__name__, e)
            return False

    def dispose(self) -> None:
        self._engine.dispose()
