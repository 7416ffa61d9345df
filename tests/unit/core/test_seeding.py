"""Unit tests for demo catalog generation and seed files."""

import json
import random

import pytest

from src.storefront.core.services.catalog.seeding import (
    SEED_BRANDS,
    SEED_CATEGORIES,
    generate_seed_products,
    load_seed_file,
)


class TestGenerateSeedProducts:
    """Test the generated demo catalog."""

    def test_fifty_products_by_default(self):
        assert len(generate_seed_products()) == 50

    def test_names_titles_and_cycles(self):
        products = generate_seed_products(10, rng=random.Random(0))

        assert products[0].name == "Product 1"
        assert products[0].title == "Premium Fruits Item 1"
        assert products[9].title == "Premium Vegetables Item 10"
        assert [p.category for p in products[:8]] == list(SEED_CATEGORIES)
        assert [p.brand for p in products[:6]] == list(SEED_BRANDS)
        assert products[6].brand == "FreshFarm"

    def test_value_ranges(self):
        for product in generate_seed_products(200, rng=random.Random(7)):
            assert 10 <= product.price <= 59
            assert product.price == int(product.price)
            assert 3.0 <= product.rating <= 5.0
            assert round(product.rating, 1) == product.rating
            assert 10 <= product.stock <= 109

    def test_description_image_and_reviews(self):
        product = generate_seed_products(2)[1]

        assert "vegetables product from OrganicPro" in product.description
        assert product.image == "https://images.unsplash.com/photo-1500000000001?w=400&h=400&fit=crop"
        assert [(r.user, r.rating) for r in product.reviews] == [("John Doe", 5), ("Jane Smith", 4)]

    def test_creation_times_increase(self):
        products = generate_seed_products(5)

        created = [p.created_at for p in products]
        assert created == sorted(created)
        assert len(set(created)) == 5

    def test_seeded_rng_is_reproducible(self):
        first = generate_seed_products(5, rng=random.Random(42))
        second = generate_seed_products(5, rng=random.Random(42))

        assert [p.price for p in first] == [p.price for p in second]
        assert [p.rating for p in first] == [p.rating for p in second]

    def test_negative_count_is_rejected(self):
        with pytest.raises(ValueError):
            generate_seed_products(-1)


class TestLoadSeedFile:
    """Test loading products from JSON."""

    def test_loads_documents(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "_id": "64b7f0c2e1d3",
                        "name": "Kale",
                        "title": "Organic Kale",
                        "price": 3.5,
                        "category": "Vegetables",
                        "brand": "GreenValley",
                        "description": "Curly kale",
                        "image": "kale.jpg",
                        "rating": 4.5,
                        "stock": 12,
                        "reviews": [{"user": "Sam", "comment": "ok", "rating": 3}],
                    },
                    {
                        "name": "Milk",
                        "title": "Whole Milk",
                        "price": 2,
                        "category": "Dairy",
                        "brand": "FarmFresh",
                        "description": "Full fat",
                        "image": "milk.jpg",
                        "rating": 4,
                        "stock": 30,
                        "createdAt": "2024-01-01T00:00:00Z",
                    },
                ]
            )
        )

        products = load_seed_file(path)

        assert [p.name for p in products] == ["Kale", "Milk"]
        assert products[0].reviews[0].user == "Sam"
        assert products[0].id != "64b7f0c2e1d3"
        assert products[1].created_at.year == 2024

    def test_rejects_non_array(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps({"name": "Kale"}))

        with pytest.raises(ValueError):
            load_seed_file(path)

    def test_rejects_invalid_product(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps([{"name": "Kale", "price": -1}]))

        with pytest.raises(ValueError, match="entry 0"):
            load_seed_file(path)

    def test_rejects_product_missing_required_fields(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "name": "Kale",
                        "title": "Organic Kale",
                        "price": 3.5,
                        "category": "Vegetables",
                        "brand": "GreenValley",
                    }
                ]
            )
        )

        with pytest.raises(ValueError, match="entry 0"):
            load_seed_file(path)
