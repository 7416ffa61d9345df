"""Unit tests for the SQL product repository."""

import uuid
from datetime import timedelta

import pytest
from sqlmodel import Session

from src.storefront.core.models import (
    ExactMatch,
    Pagination,
    PriceRange,
    QuerySpec,
    SortDirective,
    TextSearch,
)
from src.storefront.entities._base import utc_now
from src.storefront.entities.product import Product, ProductRepository, Review


def _product(name: str, **overrides) -> Product:
    fields = {
        "name": name,
        "title": f"{name} title",
        "price": 10.0,
        "category": "Fruits",
        "brand": "FreshFarm",
        "description": f"About {name}",
        "image": "https://example.com/product.jpg",
        "rating": 4.0,
        "stock": 10,
    }
    fields.update(overrides)
    return Product(**fields)


@pytest.fixture
def repository(session: Session) -> ProductRepository:
    return ProductRepository(session)


class TestProductRepository:
    """Test query execution against SQLite."""

    def test_insert_and_get_round_trip_with_reviews(self, repository: ProductRepository):
        product = _product(
            "Apple", reviews=[Review(user="Ann", comment="Tasty", rating=5)]
        )
        repository.insert_many([product])

        loaded = repository.get(product.id)

        assert loaded is not None
        assert loaded.name == "Apple"
        assert loaded.reviews[0].user == "Ann"
        assert loaded.reviews[0].rating == 5

    @pytest.mark.parametrize("product_id", ["not-a-uuid", "", "12345"])
    def test_get_with_malformed_id_returns_none(self, repository: ProductRepository, product_id):
        assert repository.get(product_id) is None

    def test_get_unknown_id_returns_none(self, repository: ProductRepository):
        assert repository.get(str(uuid.uuid4())) is None

    def test_search_is_literal_and_case_insensitive(self, repository: ProductRepository):
        repository.insert_many(
            [
                _product("Green Apple"),
                _product("100% Juice", category="Beverages"),
                _product("Bread", category="Bakery", brand="Apple_Farms"),
            ]
        )

        def names(term: str) -> set[str]:
            spec = QuerySpec(predicates=(TextSearch(term=term),))
            return {p.name for p in repository.find(spec)}

        assert names("APPLE") == {"Green Apple", "Bread"}
        assert names("%") == {"100% Juice"}
        assert names("_") == {"Bread"}
        assert names("bakery") == {"Bread"}

    def test_search_folds_non_ascii_case(self, repository: ProductRepository):
        repository.insert_many(
            [
                _product("Crème fraîche", brand="Émile"),
                _product("Straßenbrot", category="Bakery"),
                _product("Emile bread", category="Bakery"),
            ]
        )

        def names(term: str) -> set[str]:
            spec = QuerySpec(predicates=(TextSearch(term=term),))
            return {p.name for p in repository.find(spec)}

        assert names("émile") == {"Crème fraîche"}
        assert names("CRÈME") == {"Crème fraîche"}
        assert names("STRASSE") == {"Straßenbrot"}
        assert repository.count((TextSearch(term="ÉMILE"),)) == 1

    def test_filters_and_count_ignore_pagination(self, repository: ProductRepository):
        repository.insert_many(
            [_product(f"P{i}", price=float(i), category="Dairy" if i % 2 else "Meat") for i in range(10)]
        )
        predicates = (
            ExactMatch(field="category", value="Dairy"),
            PriceRange(minimum=3, maximum=7),
        )
        spec = QuerySpec(
            predicates=predicates,
            sort=SortDirective(field="price", direction=1),
            pagination=Pagination(page=1, limit=2),
        )

        page = repository.find(spec)

        assert [p.price for p in page] == [3.0, 5.0]
        assert repository.count(predicates) == 3
        assert repository.count() == 10

    def test_exact_match_is_case_sensitive(self, repository: ProductRepository):
        repository.insert_many([_product("A", category="Fruits")])

        spec = QuerySpec(predicates=(ExactMatch(field="category", value="fruits"),))

        assert repository.find(spec) == []

    def test_ties_are_broken_by_id(self, repository: ProductRepository):
        products = [_product(f"Same {i}", price=20.0) for i in range(6)]
        repository.insert_many(products)
        expected = sorted(p.id for p in products)

        ids = []
        for page in (1, 2, 3):
            spec = QuerySpec(
                sort=SortDirective(field="price", direction=-1),
                pagination=Pagination(page=page, limit=2),
            )
            ids.extend(p.id for p in repository.find(spec))

        assert ids == expected

    def test_latest_orders_by_creation_time(self, repository: ProductRepository):
        now = utc_now()
        repository.insert_many(
            [
                _product("old", created_at=now - timedelta(days=2)),
                _product("new", created_at=now),
                _product("mid", created_at=now - timedelta(days=1)),
            ]
        )

        assert [p.name for p in repository.latest(2)] == ["new", "mid"]

    def test_distinct_values_are_sorted(self, repository: ProductRepository):
        repository.insert_many(
            [
                _product("a", category="Snacks", brand="Zeta"),
                _product("b", category="Dairy", brand="Alpha"),
                _product("c", category="Snacks", brand="Alpha"),
            ]
        )

        assert repository.distinct("category") == ["Dairy", "Snacks"]
        assert repository.distinct("brand") == ["Alpha", "Zeta"]
        assert repository.count_by("category") == [("Dairy", 1), ("Snacks", 2)]

    def test_distinct_rejects_other_fields(self, repository: ProductRepository):
        with pytest.raises(ValueError):
            repository.distinct("password_hash")

    def test_replace_all_swaps_the_catalog(self, repository: ProductRepository, session: Session):
        repository.insert_many([_product("old")])
        session.commit()

        inserted = repository.replace_all([_product("new 1"), _product("new 2")])
        session.commit()

        assert inserted == 2
        assert sorted(p.name for p in repository.find(QuerySpec())) == ["new 1", "new 2"]
