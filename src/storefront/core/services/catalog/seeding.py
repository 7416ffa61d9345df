"""Demo catalog generation and seed-file loading."""

import json
import random
import uuid
from datetime import timedelta
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from src.storefront.entities._base import utc_now
from src.storefront.entities.product import Product, Review

SEED_CATEGORIES = (
    "Fruits",
    "Vegetables",
    "Dairy",
    "Bakery",
    "Beverages",
    "Snacks",
    "Meat",
    "Seafood",
)
SEED_BRANDS = (
    "FreshFarm",
    "OrganicPro",
    "GreenValley",
    "PureHarvest",
    "NatureBest",
    "FarmFresh",
)

_SEED_REVIEWS = (
    {"user": "John Doe", "comment": "Great product! Highly recommended.", "rating": 5},
    {"user": "Jane Smith", "comment": "Good quality and fresh delivery.", "rating": 4},
)

# Keys produced by document stores or by this API's own responses
_KEY_ALIASES = {"createdAt": "created_at", "updatedAt": "updated_at"}
_IGNORED_KEYS = {"_id", "__v"}


def generate_seed_products(
    count: int = 50, rng: random.Random | None = None
) -> list[Product]:
    """Generate ``count`` demo products.

    Categories and brands cycle in a fixed order; price, rating and stock are
    drawn from ``rng`` (pass a seeded ``random.Random`` for reproducible
    output). Creation timestamps are one second apart in generation order.
    """
    if count < 0:
        raise ValueError("count must be non-negative")
    rng = rng or random.Random()
    start = utc_now() - timedelta(seconds=count)

    products = []
    for i in range(count):
        category = SEED_CATEGORIES[i % len(SEED_CATEGORIES)]
        brand = SEED_BRANDS[i % len(SEED_BRANDS)]
        created_at = start + timedelta(seconds=i)
        products.append(
            Product(
                name=f"Product {i + 1}",
                title=f"Premium {category} Item {i + 1}",
                description=(
                    f"This is a high-quality {category.lower()} product from {brand}. "
                    "Fresh, organic, and delivered straight to your door. "
                    "Perfect for your daily needs and healthy lifestyle."
                ),
                price=float(rng.randint(10, 59)),
                category=category,
                brand=brand,
                image=f"https://images.unsplash.com/photo-{1500000000000 + i}?w=400&h=400&fit=crop",
                rating=round(rng.uniform(3, 5), 1),
                stock=rng.randint(10, 109),
                reviews=[Review(**review, date=created_at) for review in _SEED_REVIEWS],
                created_at=created_at,
                updated_at=created_at,
            )
        )
    return products


def _normalize(document: dict[str, Any]) -> dict[str, Any]:
    data = {
        _KEY_ALIASES.get(key, key): value
        for key, value in document.items()
        if key not in _IGNORED_KEYS
    }
    # Product ids are UUIDs; foreign ids get a fresh one
    try:
        uuid.UUID(str(data["id"]))
    except (KeyError, ValueError):
        data.pop("id", None)
    return data


def load_seed_file(path: str | Path) -> list[Product]:
    """Load products from a JSON array of product documents.

    Documents without a creation time get increasing timestamps in file order.

    Raises:
        ValueError: If the file is not a JSON array of valid products
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"Seed file {path} must contain a JSON array")

    start = utc_now() - timedelta(seconds=len(raw))
    products = []
    for index, document in enumerate(raw):
        if not isinstance(document, dict):
            raise ValueError(f"Seed file {path}: entry {index} is not an object")
        data = _normalize(document)
        data.setdefault("created_at", start + timedelta(seconds=index))
        try:
            products.append(Product.model_validate(data))
        except PydanticValidationError as exc:
            raise ValueError(f"Seed file {path}: entry {index} is invalid: {exc}") from exc
    return products
