"""Unit tests for the catalog query service."""

import math
import uuid

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from src.storefront.core.errors import NotFoundError, StoreFaultError
from src.storefront.core.services import CatalogQueryService, DbSessionService, build_query_spec
from src.storefront.core.services.catalog import generate_seed_products
from src.storefront.entities.product import Product, ProductRepository

SEARCH_FIELDS = ("name", "title", "brand", "category")


@pytest.fixture
def catalog(session: Session, seed_products: list[Product]) -> CatalogQueryService:
    service = CatalogQueryService(session)
    service.reseed(seed_products)
    return service


class TestList:
    """Test listing, filtering and pagination."""

    def test_default_listing(self, catalog: CatalogQueryService):
        page = catalog.list(build_query_spec({}))

        assert len(page.items) == 8
        assert page.pagination.model_dump() == {"page": 1, "limit": 8, "total": 50, "pages": 7}

    def test_every_search_hit_matches_a_text_field(self, catalog: CatalogQueryService):
        page = catalog.list(build_query_spec({"search": "fRuIt", "limit": "100"}))

        assert page.items
        for product in page.items:
            assert any("fruit" in getattr(product, f).lower() for f in SEARCH_FIELDS)

    def test_search_total_counts_all_matches(self, catalog: CatalogQueryService, seed_products):
        expected = sum(
            1 for p in seed_products if any("dairy" in getattr(p, f).lower() for f in SEARCH_FIELDS)
        )

        page = catalog.list(build_query_spec({"search": "Dairy", "limit": "2"}))

        assert page.pagination.total == expected
        assert page.pagination.pages == math.ceil(expected / 2)

    def test_total_ignores_page_and_limit(self, catalog: CatalogQueryService):
        first = catalog.list(build_query_spec({"category": "Fruits", "limit": "2"}))
        later = catalog.list(build_query_spec({"category": "Fruits", "limit": "3", "page": "2"}))

        assert first.pagination.total == later.pagination.total == 7
        assert later.pagination.pages == 3

    def test_pages_are_disjoint_contiguous_slices(self, catalog: CatalogQueryService):
        everything = catalog.list(build_query_spec({"limit": "16"})).items
        page_1 = catalog.list(build_query_spec({"page": "1"})).items
        page_2 = catalog.list(build_query_spec({"page": "2"})).items

        assert {p.id for p in page_1}.isdisjoint(p.id for p in page_2)
        assert [p.id for p in page_1 + page_2] == [p.id for p in everything]

    def test_page_beyond_end_is_empty(self, catalog: CatalogQueryService):
        page = catalog.list(build_query_spec({"page": "99"}))

        assert page.items == []
        assert page.pagination.total == 50

    def test_price_sort_within_category(self, catalog: CatalogQueryService):
        page = catalog.list(
            build_query_spec({"category": "Fruits", "sortBy": "price", "order": "asc", "limit": "5"})
        )

        prices = [p.price for p in page.items]
        assert len(prices) == 5
        assert prices == sorted(prices)
        assert all(p.category == "Fruits" for p in page.items)

    def test_no_match_gives_zero_pages(self, catalog: CatalogQueryService):
        page = catalog.list(build_query_spec({"search": "no such product"}))

        assert page.items == []
        assert page.pagination.total == 0
        assert page.pagination.pages == 0


class TestLookups:
    """Test latest, point lookup and distinct values."""

    def test_latest_ignores_filters_and_returns_newest(self, catalog: CatalogQueryService):
        latest = catalog.latest(3)

        assert [p.name for p in latest] == ["Product 50", "Product 49", "Product 48"]

    def test_get_by_id(self, catalog: CatalogQueryService):
        product = catalog.latest(1)[0]

        assert catalog.get_by_id(product.id) == product

    @pytest.mark.parametrize("product_id", ["invalid-id", str(uuid.uuid4())])
    def test_get_by_id_raises_not_found(self, catalog: CatalogQueryService, product_id):
        with pytest.raises(NotFoundError, match="Product not found"):
            catalog.get_by_id(product_id)

    def test_distinct_categories_and_brands(self, catalog: CatalogQueryService):
        assert catalog.distinct_categories() == sorted(
            ["Fruits", "Vegetables", "Dairy", "Bakery", "Beverages", "Snacks", "Meat", "Seafood"]
        )
        assert catalog.distinct_brands() == sorted(
            ["FreshFarm", "OrganicPro", "GreenValley", "PureHarvest", "NatureBest", "FarmFresh"]
        )


class TestSeeding:
    """Test reseed and seed-if-empty."""

    def test_reseed_replaces_catalog(self, catalog: CatalogQueryService):
        inserted = catalog.reseed(generate_seed_products(5))

        assert inserted == 5
        assert catalog.list(build_query_spec({})).pagination.total == 5

    def test_failed_reseed_keeps_previous_catalog(
        self, catalog: CatalogQueryService, session: Session, monkeypatch
    ):
        def broken_insert(self, products):
            raise OperationalError("INSERT", {}, Exception("disk full"))

        monkeypatch.setattr(ProductRepository, "insert_many", broken_insert)

        with pytest.raises(StoreFaultError):
            catalog.reseed(generate_seed_products(5))

        monkeypatch.undo()
        assert CatalogQueryService(session).list(build_query_spec({})).pagination.total == 50

    def test_seed_if_empty_skips_populated_catalog(self, catalog: CatalogQueryService):
        assert catalog.seed_if_empty(generate_seed_products(3)) == 0
        assert catalog.list(build_query_spec({})).pagination.total == 50

    def test_seed_if_empty_fills_empty_catalog(self, session: Session):
        service = CatalogQueryService(session)

        assert service.seed_if_empty(generate_seed_products(4)) == 4

    def test_reseed_is_visible_to_other_sessions(self, db_service: DbSessionService):
        with db_service.session_scope() as db:
            CatalogQueryService(db).reseed(generate_seed_products(6))

        with db_service.session_scope() as db:
            assert CatalogQueryService(db).category_counts() == [
                ("Bakery", 1),
                ("Beverages", 1),
                ("Dairy", 1),
                ("Fruits", 1),
                ("Snacks", 1),
                ("Vegetables", 1),
            ]


class TestStoreFaults:
    """Test that store failures surface as StoreFaultError."""

    def test_list_wraps_store_errors(self, session: Session, monkeypatch):
        def broken_find(self, spec):
            raise OperationalError("SELECT", {}, Exception("connection lost"))

        monkeypatch.setattr(ProductRepository, "find", broken_find)

        with pytest.raises(StoreFaultError):
            CatalogQueryService(session).list(build_query_spec({}))
