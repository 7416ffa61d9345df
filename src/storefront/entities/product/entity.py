"""Entity: Product."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.storefront.entities._base import Entity, utc_now


class Review(BaseModel):
    """A customer review embedded in a product."""

    user: str
    comment: str
    rating: float = Field(ge=0, le=5)
    date: datetime = Field(default_factory=utc_now)


class Product(Entity):
    """A catalog item as seen by the query engine."""

    name: str
    title: str
    description: str
    price: float = Field(ge=0)
    category: str
    brand: str
    image: str
    rating: float = Field(ge=0, le=5)
    stock: int = Field(ge=0)
    reviews: list[Review] = Field(default_factory=list)
