"""Entity package: Product."""

from .entity import Product, Review
from .repository import ProductRepository
from .table import ProductTable

__all__ = ["Product", "ProductRepository", "ProductTable", "Review"]
