"""Read and bulk-write operations over the product catalog."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from loguru import logger
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from src.storefront.core.errors import NotFoundError, StoreFaultError
from src.storefront.core.models import QuerySpec
from src.storefront.entities.product import Product, ProductRepository


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ProductPage(BaseModel):
    """One page of listing results plus the totals for the whole filter."""

    items: list[Product]
    pagination: PaginationMeta


@contextmanager
def _store_faults(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Catalog store failure during {}", operation)
        raise StoreFaultError() from exc


class CatalogQueryService:
    def __init__(self, db_session: Session):
        self._db_session = db_session
        self._products = ProductRepository(db_session)

    def list(self, spec: QuerySpec) -> ProductPage:
        """Return the page of products selected by ``spec``.

        ``total`` counts every product matching the predicates, independent of
        the page window.
        """
        with _store_faults("list"):
            items = self._products.find(spec)
            total = self._products.count(spec.predicates)

        pagination = spec.pagination
        return ProductPage(
            items=items,
            pagination=PaginationMeta(
                page=pagination.page,
                limit=pagination.limit,
                total=total,
                pages=pagination.page_count(total),
            ),
        )

    def latest(self, limit: int) -> list[Product]:
        with _store_faults("latest"):
            return self._products.latest(limit)

    def get_by_id(self, product_id: str) -> Product:
        with _store_faults("get_by_id"):
            product = self._products.get(product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def distinct_categories(self) -> list[str]:
        with _store_faults("distinct_categories"):
            return self._products.distinct("category")

    def distinct_brands(self) -> list[str]:
        with _store_faults("distinct_brands"):
            return self._products.distinct("brand")

    def category_counts(self) -> list[tuple[str, int]]:
        with _store_faults("category_counts"):
            return self._products.count_by("category")

    def reseed(self, products: Sequence[Product]) -> int:
        """Replace the whole catalog with ``products`` in one transaction.

        Readers see either the previous catalog or the new one. On failure the
        previous catalog is kept.
        """
        try:
            inserted = self._products.replace_all(products)
            self._db_session.commit()
        except SQLAlchemyError as exc:
            self._db_session.rollback()
            logger.exception("Catalog reseed failed; previous catalog kept")
            raise StoreFaultError() from exc

        logger.info("Catalog reseeded with {} products", inserted)
        return inserted

    def seed_if_empty(self, products: Sequence[Product]) -> int:
        """Seed the catalog only when it holds no products.

        Returns:
            Number of products inserted, 0 when the catalog was not empty
        """
        with _store_faults("seed_if_empty"):
            existing = self._products.count()
        if existing:
            logger.info("Catalog already holds {} products; skipping seed", existing)
            return 0
        return self.reseed(products)
