"""Product database table model."""

from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field

from src.storefront.entities._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products.

    Reviews stay embedded in the row as a JSON array, the way the catalog
    serves them.
    """

    __tablename__ = "products"

    name: str = Field(index=True)
    title: str
    description: str
    price: float = Field(index=True)
    category: str = Field(index=True)
    brand: str = Field(index=True)
    image: str
    rating: float
    stock: int
    reviews: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
