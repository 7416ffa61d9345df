import uuid
from collections.abc import Iterable, Sequence

from sqlalchemy import and_, delete, func, or_
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import Session, select

from src.storefront.core.models import (
    ASCENDING,
    ExactMatch,
    Predicate,
    PriceRange,
    QuerySpec,
    TextSearch,
)

from .entity import Product
from .table import ProductTable

DISTINCT_FIELDS = ("category", "brand")


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _text_match(field: str, term: str, dialect: str) -> ColumnElement[bool]:
    column = getattr(ProductTable, field)
    if dialect == "sqlite":
        # SQLite lower() and LIKE only fold ASCII; casefold is registered per connection
        pattern = f"%{_escape_like(term.casefold())}%"
        return func.casefold(column).like(pattern, escape="\\")
    return column.ilike(f"%{_escape_like(term)}%", escape="\\")


def _compile_predicate(predicate: Predicate, dialect: str) -> ColumnElement[bool]:
    if isinstance(predicate, TextSearch):
        return or_(
            *(_text_match(field, predicate.term, dialect) for field in predicate.fields)
        )
    if isinstance(predicate, ExactMatch):
        return getattr(ProductTable, predicate.field) == predicate.value
    if isinstance(predicate, PriceRange):
        bounds = []
        if predicate.minimum is not None:
            bounds.append(ProductTable.price >= predicate.minimum)
        if predicate.maximum is not None:
            bounds.append(ProductTable.price <= predicate.maximum)
        return and_(*bounds)
    raise TypeError(f"Unsupported predicate: {type(predicate).__name__}")


def _conditions(
    predicates: Iterable[Predicate], dialect: str
) -> list[ColumnElement[bool]]:
    return [_compile_predicate(predicate, dialect) for predicate in predicates]


def _to_row(product: Product) -> ProductTable:
    data = product.model_dump()
    # JSON columns only hold JSON-native values
    data["reviews"] = [review.model_dump(mode="json") for review in product.reviews]
    return ProductTable.model_validate(data)


class ProductRepository:
    """Data-access layer for the product catalog.

    Write methods flush but do not commit; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def _dialect(self) -> str:
        return self._session.get_bind().dialect.name

    def find(self, spec: QuerySpec) -> list[Product]:
        """Return one page of products matching ``spec`` in sort order."""
        column = getattr(ProductTable, spec.sort.field)
        primary = column.asc() if spec.sort.direction == ASCENDING else column.desc()
        tie_breaker = getattr(ProductTable, spec.sort.tie_breaker).asc()

        statement = (
            select(ProductTable)
            .where(*_conditions(spec.predicates, self._dialect))
            .order_by(primary, tie_breaker)
            .offset(spec.pagination.offset)
            .limit(spec.pagination.limit)
        )
        rows = self._session.exec(statement).all()
        return [Product.model_validate(row, from_attributes=True) for row in rows]

    def count(self, predicates: Sequence[Predicate] = ()) -> int:
        statement = (
            select(func.count())
            .select_from(ProductTable)
            .where(*_conditions(predicates, self._dialect))
        )
        return self._session.exec(statement).one()

    def latest(self, limit: int) -> list[Product]:
        statement = (
            select(ProductTable)
            .order_by(ProductTable.created_at.desc(), ProductTable.id.asc())
            .limit(limit)
        )
        rows = self._session.exec(statement).all()
        return [Product.model_validate(row, from_attributes=True) for row in rows]

    def get(self, product_id: str) -> Product | None:
        """Return the product with ``product_id``, or None if it is unknown or malformed."""
        try:
            uuid.UUID(product_id)
        except (ValueError, TypeError, AttributeError):
            return None
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return Product.model_validate(row, from_attributes=True)

    def distinct(self, field: str) -> list[str]:
        """Sorted distinct non-empty values of ``category`` or ``brand``."""
        if field not in DISTINCT_FIELDS:
            raise ValueError(f"Distinct values are not available for '{field}'")
        column = getattr(ProductTable, field)
        statement = select(column).where(column != "").distinct().order_by(column)
        return list(self._session.exec(statement).all())

    def insert_many(self, products: Iterable[Product]) -> int:
        rows = [_to_row(product) for product in products]
        self._session.add_all(rows)
        self._session.flush()
        return len(rows)

    def delete_all(self) -> int:
        result = self._session.exec(delete(ProductTable))
        return result.rowcount or 0

    def replace_all(self, products: Iterable[Product]) -> int:
        """Delete every product and insert ``products`` in the current transaction."""
        self.delete_all()
        return self.insert_many(products)

    def count_by(self, field: str) -> list[tuple[str, int]]:
        """Product counts grouped by ``category`` or ``brand``, sorted by value."""
        if field not in DISTINCT_FIELDS:
            raise ValueError(f"Grouped counts are not available for '{field}'")
        column = getattr(ProductTable, field)
        statement = select(column, func.count()).group_by(column).order_by(column)
        return [(value, total) for value, total in self._session.exec(statement).all()]
