"""User database table model."""

from sqlmodel import Field

from src.storefront.entities._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users."""

    __tablename__ = "users"

    name: str
    email: str = Field(unique=True, index=True)
    password_hash: str
