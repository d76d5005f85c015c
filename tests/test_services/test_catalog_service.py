"""
Unit tests for CatalogService

Repositories are mocked; the service logic (ranking, filtering, fallbacks)
is tested in isolation.
"""
from datetime import datetime
from decimal import Decimal
from unittest.mock import Mock

from storefront.domain.product import Category
from storefront.services.catalog_service import CatalogService


def _service(products=None, categories=None, stores=None, error=None):
    product_repo = Mock()
    if error:
        product_repo.find_approved.side_effect = error
        product_repo.find_by_slug.side_effect = error
    else:
        product_repo.find_approved.return_value = products or []
    category_repo = Mock()
    category_repo.find_active.return_value = categories or []
    store_repo = stores or Mock()
    return CatalogService(products=product_repo, categories=category_repo, stores=store_repo)


class TestListings:

    def test_featured_are_in_stock_by_rating(self, product_factory):
        products = [
            product_factory(id="a", rating=3.0),
            product_factory(id="b", rating=5.0, in_stock=False),
            product_factory(id="c", rating=4.8),
            product_factory(id="d", rating=4.0),
        ]

        featured = _service(products).fetch_featured_products(limit=2)

        assert [p.id for p in featured] == ["c", "d"]

    def test_new_arrivals_newest_first(self, product_factory):
        products = [
            product_factory(id="old", created_at=datetime(2024, 1, 1)),
            product_factory(id="new", created_at=datetime(2025, 6, 1)),
        ]

        assert [p.id for p in _service(products).fetch_new_arrivals()] == ["new", "old"]

    def test_popular_ranked_by_reviews_times_rating(self, product_factory):
        products = [
            product_factory(id="a", rating=5.0, review_count=2),
            product_factory(id="b", rating=4.0, review_count=10),
            product_factory(id="c", rating=0, review_count=0),
        ]

        assert [p.id for p in _service(products).fetch_popular_products()] == ["b", "a"]

    def test_popular_falls_back_to_first_products(self, product_factory):
        products = [product_factory(id=str(i), rating=0, review_count=0) for i in range(6)]

        popular = _service(products).fetch_popular_products(limit=4)

        assert [p.id for p in popular] == ["0", "1", "2", "3"]

    def test_best_sellers_need_rating_and_reviews(self, product_factory):
        products = [
            product_factory(id="few-reviews", rating=5.0, review_count=9),
            product_factory(id="low-rating", rating=3.9, review_count=100),
            product_factory(id="ok", rating=4.0, review_count=10),
            product_factory(id="best", rating=4.5, review_count=50),
        ]

        assert [p.id for p in _service(products).fetch_best_sellers()] == ["best", "ok"]

    def test_deals_sorted_by_discount(self, product_factory):
        products = [
            product_factory(id="ten", price=Decimal("90"), compare_at_price=Decimal("100")),
            product_factory(id="none", price=Decimal("90"), compare_at_price=None),
            product_factory(id="half", price=Decimal("50"), compare_at_price=Decimal("100")),
        ]

        assert [p.id for p in _service(products).fetch_deals()] == ["half", "ten"]

    def test_category_match_is_case_insensitive(self, product_factory):
        products = [
            product_factory(id="a", category="Electronics"),
            product_factory(id="b", category="Fashion"),
        ]

        assert [p.id for p in _service(products).fetch_products_by_category("electronics")] == ["a"]

    def test_subcategory_is_partial_match(self, product_factory):
        products = [
            product_factory(id="a", category="Electronics", subcategory="Audio & Headphones"),
            product_factory(id="b", category="Electronics", subcategory="Phones"),
            product_factory(id="c", category="Electronics", subcategory=None),
            product_factory(id="d", category="Home", subcategory="Audio"),
        ]

        result = _service(products).fetch_products_by_subcategory("ELECTRONICS", "audio")

        assert [p.id for p in result] == ["a"]

    def test_related_excludes_product_itself(self, product_factory):
        products = [
            product_factory(id="a", category="Electronics"),
            product_factory(id="b", category="Electronics"),
            product_factory(id="c", category="Fashion"),
        ]

        assert [p.id for p in _service(products).fetch_related_products("a", "Electronics")] == ["b"]

    def test_search_matches_name_description_and_category(self, product_factory):
        products = [
            product_factory(id="name", name="Leather Wallet", description="", category="Fashion"),
            product_factory(id="desc", name="Card Holder", description="Slim leather design", category="Fashion"),
            product_factory(id="none", name="Desk Lamp", description="LED", category="Home"),
        ]

        assert [p.id for p in _service(products).search_products("  LEATHER ")] == ["name", "desc"]


class TestFallbacks:

    def test_product_errors_yield_empty_list(self):
        service = _service(error=Exception("db down"))

        assert service.fetch_all_products() == []
        assert service.fetch_featured_products() == []
        assert service.fetch_deals() == []

    def test_product_by_slug_error_yields_none(self):
        assert _service(error=Exception("db down")).fetch_product_by_slug("x") is None

    def test_store_error_yields_none(self):
        stores = Mock()
        stores.find_by_slug.side_effect = Exception("db down")

        assert _service(stores=stores).fetch_store_by_slug("gadget-hub") is None


class TestCategories:

    def _categories(self):
        return [
            Category(id="1", name="Electronics", slug="electronics"),
            Category(id="2", name="Garden", slug="garden"),
        ]

    def test_unfiltered_returns_all(self):
        service = _service(categories=self._categories())

        assert [c.name for c in service.fetch_categories()] == ["Electronics", "Garden"]
        service.products.category_has_products.assert_not_called()

    def test_filter_keeps_categories_with_products(self):
        service = _service(categories=self._categories())
        service.products.category_has_products.side_effect = lambda name: name == "Electronics"

        assert [c.name for c in service.fetch_categories(filter_by_products=True)] == ["Electronics"]

    def test_error_yields_empty_list(self):
        service = _service()
        service.categories.find_active.side_effect = Exception("db down")

        assert service.fetch_categories() == []
