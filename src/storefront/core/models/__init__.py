"""Query models for the catalog."""

from .catalog import (
    ASCENDING,
    DESCENDING,
    SEARCH_FIELDS,
    ExactMatch,
    Pagination,
    Predicate,
    PriceRange,
    QuerySpec,
    SortDirective,
    TextSearch,
)

__all__ = [
    "ASCENDING",
    "DESCENDING",
    "SEARCH_FIELDS",
    "ExactMatch",
    "Pagination",
    "Predicate",
    "PriceRange",
    "QuerySpec",
    "SortDirective",
    "TextSearch",
]
