"""Request and response bodies of the HTTP API (camelCase on the wire)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    message: str


class RegisterRequest(BaseModel):
    # Optional so that missing fields surface as "All fields are required"
    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserOut(CamelModel):
    id: str
    name: str
    email: str
    created_at: datetime


class AuthResponse(MessageResponse):
    user: UserOut


class ReviewOut(CamelModel):
    user: str
    comment: str
    rating: float
    date: datetime


class ProductOut(CamelModel):
    id: str
    name: str
    title: str
    description: str
    price: float
    category: str
    brand: str
    image: str
    rating: float
    stock: int
    reviews: list[ReviewOut]
    created_at: datetime
    updated_at: datetime


class PaginationOut(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ProductListResponse(BaseModel):
    products: list[ProductOut]
    pagination: PaginationOut


class SeedResponse(MessageResponse):
    count: int


class HealthResponse(BaseModel):
    status: str
    message: str
