"""Translate raw listing parameters into a validated ``QuerySpec``.

Parameters arrive as untyped, client-controlled strings. Parsing is strict:
anything malformed or out of bounds raises ``ValidationError`` instead of
being coerced.
"""

import math
import re
from collections.abc import Mapping

from src.storefront.core.errors import ValidationError
from src.storefront.core.models.catalog import (
    ASCENDING,
    DESCENDING,
    ExactMatch,
    Pagination,
    PriceRange,
    QuerySpec,
    SortDirective,
    TextSearch,
)
from src.storefront.runtime.config.config_data import CatalogConfig

# Public sort keys and the canonical fields they map to
SORT_FIELDS: dict[str, str] = {
    "createdAt": "created_at",
    "price": "price",
    "rating": "rating",
    "name": "name",
    "title": "title",
    "brand": "brand",
    "category": "category",
    "stock": "stock",
}

SORT_ORDERS: dict[str, int] = {"asc": ASCENDING, "desc": DESCENDING}

LISTING_PARAMS = (
    "page",
    "limit",
    "search",
    "sortBy",
    "order",
    "category",
    "brand",
    "minPrice",
    "maxPrice",
)

MAX_PAGE = 1_000_000

_INTEGER = re.compile(r"\d+")
_MAX_DIGITS = 9
_DECIMAL = re.compile(r"\d+(\.\d+)?")


def _text(params: Mapping[str, str], key: str) -> str | None:
    value = params.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_int(name: str, raw: str | None, default: int, maximum: int) -> int:
    if raw is None:
        return default
    if not _INTEGER.fullmatch(raw):
        raise ValidationError(f"'{name}' must be a positive integer")
    # int() refuses very long digit strings; bounds are far below this
    digits = raw.lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        raise ValidationError(f"'{name}' must be between 1 and {maximum}")
    value = int(digits)
    if not 1 <= value <= maximum:
        raise ValidationError(f"'{name}' must be between 1 and {maximum}")
    return value


def _parse_price(name: str, raw: str | None) -> float | None:
    if raw is None:
        return None
    if not _DECIMAL.fullmatch(raw):
        raise ValidationError(f"'{name}' must be a non-negative number")
    value = float(raw)
    if not math.isfinite(value):
        raise ValidationError(f"'{name}' must be a non-negative number")
    return value


def parse_pagination(params: Mapping[str, str], settings: CatalogConfig) -> Pagination:
    page = _parse_int("page", _text(params, "page"), 1, MAX_PAGE)
    limit = _parse_int(
        "limit", _text(params, "limit"), settings.default_page_size, settings.max_page_size
    )
    return Pagination(page=page, limit=limit)


def parse_sort(params: Mapping[str, str]) -> SortDirective:
    sort_by = _text(params, "sortBy") or "createdAt"
    if sort_by not in SORT_FIELDS:
        allowed = ", ".join(SORT_FIELDS)
        raise ValidationError(f"'sortBy' must be one of: {allowed}")

    order = (_text(params, "order") or "desc").lower()
    if order not in SORT_ORDERS:
        raise ValidationError("'order' must be 'asc' or 'desc'")

    return SortDirective(field=SORT_FIELDS[sort_by], direction=SORT_ORDERS[order])


def build_query_spec(
    params: Mapping[str, str], settings: CatalogConfig | None = None
) -> QuerySpec:
    """Build the listing query for ``GET /api/products``.

    Args:
        params: Raw query parameters (single value per key)
        settings: Page size defaults and bounds

    Returns:
        QuerySpec with predicates AND-combined in a fixed order:
        search, category, brand, price

    Raises:
        ValidationError: On malformed or out-of-bounds parameters
    """
    settings = settings or CatalogConfig()
    predicates = []

    search = _text(params, "search")
    if search is not None:
        if len(search) > settings.max_search_length:
            raise ValidationError(
                f"'search' must be at most {settings.max_search_length} characters"
            )
        predicates.append(TextSearch(term=search))

    for field in ("category", "brand"):
        value = _text(params, field)
        if value is not None:
            predicates.append(ExactMatch(field=field, value=value))

    min_price = _parse_price("minPrice", _text(params, "minPrice"))
    max_price = _parse_price("maxPrice", _text(params, "maxPrice"))
    if min_price is not None and max_price is not None and min_price > max_price:
        raise ValidationError("'minPrice' cannot exceed 'maxPrice'")
    if min_price is not None or max_price is not None:
        predicates.append(PriceRange(minimum=min_price, maximum=max_price))

    return QuerySpec(
        predicates=tuple(predicates),
        sort=parse_sort(params),
        pagination=parse_pagination(params, settings),
    )


def parse_latest_limit(raw: str | None, settings: CatalogConfig | None = None) -> int:
    """Parse the ``limit`` of ``GET /api/products/latest``."""
    settings = settings or CatalogConfig()
    value = raw.strip() if raw is not None else None
    return _parse_int(
        "limit", value or None, settings.latest_default_limit, settings.max_page_size
    )
