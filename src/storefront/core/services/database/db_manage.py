"""Schema management for the storefront database."""

from loguru import logger
from sqlmodel import SQLModel

from src.storefront.core.services.database.db_session import DbSessionService


class DbManageService:
    def __init__(self, db_service: DbSessionService):
        self._engine = db_service.engine

    def create_all(self) -> None:
        """Create all database tables."""
        from src.storefront.entities.product import ProductTable  # noqa: F401
        from src.storefront.entities.user import UserTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        """Drop all database tables."""
        from src.storefront.entities.product import ProductTable  # noqa: F401
        from src.storefront.entities.user import UserTable  # noqa: F401

        SQLModel.metadata.drop_all(self._engine)
        logger.warning("Database tables dropped.")
