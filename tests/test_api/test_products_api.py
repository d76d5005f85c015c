"""
API tests for products, categories and stores
"""
from unittest.mock import patch

from storefront.domain.product import Category
from storefront.domain.vendor import Store


class TestProductsAPI:

    @patch('storefront.api.products.CatalogService')
    def test_listing_is_paginated(self, mock_service, client, product_factory):
        mock_service.return_value.fetch_all_products.return_value = [
            product_factory(id=str(i), slug=f"p-{i}") for i in range(30)
        ]

        response = client.get("/api/v1/products/", params={"page": 3, "per_page": 12})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert [item["id"] for item in body["items"]] == [str(i) for i in range(24, 30)]
        assert body["total"] == 30
        assert body["total_pages"] == 3
        assert body["window"] == [1, 2, 3]

    @patch('storefront.api.products.CatalogService')
    def test_search_takes_precedence(self, mock_service, client):
        service = mock_service.return_value
        service.search_products.return_value = []

        client.get("/api/v1/products/", params={"search": "earbuds", "category": "Electronics"})

        service.search_products.assert_called_once_with("earbuds")
        service.fetch_products_by_category.assert_not_called()

    @patch('storefront.api.products.CatalogService')
    def test_category_and_subcategory(self, mock_service, client):
        service = mock_service.return_value
        service.fetch_products_by_subcategory.return_value = []

        client.get("/api/v1/products/", params={"category": "Electronics", "subcategory": "Audio"})

        service.fetch_products_by_subcategory.assert_called_once_with("Electronics", "Audio")

    @patch('storefront.api.products.CatalogService')
    def test_featured_rail(self, mock_service, client, product_factory):
        mock_service.return_value.fetch_featured_products.return_value = [product_factory()]

        response = client.get("/api/v1/products/featured", params={"limit": 4})

        assert response.json()["count"] == 1
        assert response.json()["data"][0]["price"] == 499.0
        mock_service.return_value.fetch_featured_products.assert_called_once_with(4)

    @patch('storefront.api.products.CatalogService')
    def test_product_page_with_related(self, mock_service, client, product_factory):
        service = mock_service.return_value
        service.fetch_product_by_slug.return_value = product_factory()
        service.fetch_related_products.return_value = [product_factory(id="prod-2", slug="case")]

        response = client.get("/api/v1/products/wireless-earbuds")

        assert response.status_code == 200
        assert response.json()["data"]["slug"] == "wireless-earbuds"
        assert [p["id"] for p in response.json()["related"]] == ["prod-2"]
        service.fetch_related_products.assert_called_once_with("prod-1", "Electronics", 4)

    @patch('storefront.api.products.CatalogService')
    def test_unknown_product(self, mock_service, client):
        mock_service.return_value.fetch_product_by_slug.return_value = None

        response = client.get("/api/v1/products/nope")

        assert response.status_code == 404

    @patch('storefront.api.products.CatalogService')
    def test_service_error_is_500(self, mock_service, client):
        mock_service.return_value.fetch_deals.side_effect = Exception("boom")

        response = client.get("/api/v1/products/deals")

        assert response.status_code == 500
        assert "Error fetching deals" in response.json()["detail"]


class TestCategoriesAPI:

    @patch('storefront.api.categories.CatalogService')
    def test_filtered_categories(self, mock_service, client):
        mock_service.return_value.fetch_categories.return_value = [
            Category(id="1", name="Electronics", slug="electronics"),
        ]

        response = client.get("/api/v1/categories/", params={"with_products": "true"})

        assert response.status_code == 200
        assert response.json()["data"][0]["name"] == "Electronics"
        mock_service.return_value.fetch_categories.assert_called_once_with(filter_by_products=True)


class TestStoresAPI:

    @patch('storefront.api.stores.CatalogService')
    def test_unknown_store(self, mock_service, client):
        mock_service.return_value.fetch_store_by_slug.return_value = None

        assert client.get("/api/v1/stores/nope").status_code == 404

    @patch('storefront.api.stores.CatalogService')
    def test_store_page(self, mock_service, client, product_factory):
        service = mock_service.return_value
        service.fetch_store_by_slug.return_value = Store(id="store-1", vendor_id="vendor-1", name="Gadget Hub", slug="gadget-hub")
        service.fetch_products_by_store.return_value = [product_factory()]

        response = client.get("/api/v1/stores/gadget-hub")

        assert response.status_code == 200
        assert response.json()["store"]["name"] == "Gadget Hub"
        assert response.json()["products"]["total"] == 1
