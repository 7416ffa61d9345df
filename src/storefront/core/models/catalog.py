"""Store-agnostic description of a catalog listing query.

The SQL product repository compiles a ``QuerySpec`` into SQLAlchemy clauses.
``to_document_filter`` and ``to_document_sort`` are the equivalent rendering
for a MongoDB-style document store.
"""

from __future__ import annotations

import math
import re
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

SEARCH_FIELDS: tuple[str, ...] = ("name", "title", "brand", "category")

ASCENDING = 1
DESCENDING = -1


class TextSearch(BaseModel):
    """Case-insensitive literal substring match on any of ``fields``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text_search"] = "text_search"
    term: str = Field(min_length=1)
    fields: tuple[str, ...] = SEARCH_FIELDS


class ExactMatch(BaseModel):
    """Field equals value (case-sensitive)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["exact_match"] = "exact_match"
    field: Literal["category", "brand"]
    value: str


class PriceRange(BaseModel):
    """Inclusive bounds on price; either bound may be absent."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["price_range"] = "price_range"
    minimum: float | None = Field(default=None, ge=0)
    maximum: float | None = Field(default=None, ge=0)


Predicate = Annotated[
    Union[TextSearch, ExactMatch, PriceRange], Field(discriminator="kind")
]


class SortDirective(BaseModel):
    """Primary sort key; ``id`` ascending always breaks ties."""

    model_config = ConfigDict(frozen=True)

    field: str = "created_at"
    direction: Literal[1, -1] = DESCENDING
    tie_breaker: str = "id"


class Pagination(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=8, gt=0)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def page_count(self, total: int) -> int:
        return math.ceil(total / self.limit) if total > 0 else 0


class QuerySpec(BaseModel):
    """Conjunction of predicates plus one sort directive and a page window."""

    model_config = ConfigDict(frozen=True)

    predicates: tuple[Predicate, ...] = ()
    sort: SortDirective = Field(default_factory=SortDirective)
    pagination: Pagination = Field(default_factory=Pagination)

    def to_document_filter(self) -> dict[str, Any]:
        """Render the predicates as a MongoDB-style filter document.

        The search term is escaped so it is matched literally.
        """
        document: dict[str, Any] = {}
        for predicate in self.predicates:
            if isinstance(predicate, TextSearch):
                pattern = re.escape(predicate.term)
                document["$or"] = [
                    {field: {"$regex": pattern, "$options": "i"}}
                    for field in predicate.fields
                ]
            elif isinstance(predicate, ExactMatch):
                document[predicate.field] = predicate.value
            elif isinstance(predicate, PriceRange):
                bounds: dict[str, float] = {}
                if predicate.minimum is not None:
                    bounds["$gte"] = predicate.minimum
                if predicate.maximum is not None:
                    bounds["$lte"] = predicate.maximum
                document["price"] = bounds
        return document

    def to_document_sort(self) -> list[tuple[str, int]]:
        """Render the sort as ordered (field, direction) pairs."""
        return [
            (self.sort.field, self.sort.direction),
            (self.sort.tie_breaker, ASCENDING),
        ]
