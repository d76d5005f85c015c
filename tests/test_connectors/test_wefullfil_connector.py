"""
Unit tests for WeFulFilConnector

HTTP calls go through httpx.MockTransport; no network access.
"""
import asyncio
import json
import pytest
from unittest.mock import patch

import httpx

from storefront.core.config import settings
from storefront.connectors.wefullfil_connector import WeFulFilAPIError, WeFulFilConnector
from storefront.domain.wefullfil import WeFulFilProductFilter

BASE_URL = "https://wefullfil.test"

PRODUCT = {
    "id": 101,
    "title": "Smart Watch Pro",
    "price": "899.00",
    "inventory_quantity": 25,
    "images": ["https://cdn.wefullfill.com/sw-1.jpg"],
    "categories": ["Electronics"],
}


def _connector(handler) -> WeFulFilConnector:
    return WeFulFilConnector(api_token="token-123", base_url=BASE_URL, transport=httpx.MockTransport(handler))


class TestConnector:

    def test_requires_token(self):
        with patch.object(settings, "WEFULLFIL_API_TOKEN", ""):
            with pytest.raises(ValueError, match="WEFULLFIL_API_TOKEN"):
                WeFulFilConnector()

    def test_sends_token_and_filters(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen['url'] = request.url
            seen['auth'] = request.headers.get("Authorization")
            return httpx.Response(200, json={
                "data": [PRODUCT],
                "meta": {"pagination": {"total": 1, "count": 1, "per_page": 20, "current_page": 2, "total_pages": 1}},
            })

        response = asyncio.run(_connector(handler).get_products(
            WeFulFilProductFilter(search="watch", page=2, per_page=20)
        ))

        assert seen['url'].path == "/api/products"
        assert seen['url'].params["api_token"] == "token-123"
        assert seen['url'].params["search"] == "watch"
        assert seen['url'].params["page"] == "2"
        assert seen['url'].params["per_page"] == "20"
        assert seen['auth'] == "Bearer token-123"
        assert response.data[0].id == "101"
        assert response.meta.pagination.current_page == 2

    def test_empty_search_not_sent(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen['params'] = dict(request.url.params)
            return httpx.Response(200, json={"data": []})

        asyncio.run(_connector(handler).get_products())

        assert "search" not in seen['params']

    def test_bare_list_response(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=json.dumps([PRODUCT, {**PRODUCT, "id": 102}]))

        response = asyncio.run(_connector(handler).get_products())

        assert [p.id for p in response.data] == ["101", "102"]

    def test_single_product_unwraps_data(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/products/101"
            return httpx.Response(200, json={"data": PRODUCT})

        product = asyncio.run(_connector(handler).get_product("101"))

        assert product.title == "Smart Watch Pro"
        assert product.in_stock

    def test_error_status_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"message": "Unauthenticated."})

        with pytest.raises(WeFulFilAPIError) as exc_info:
            asyncio.run(_connector(handler).get_products())

        assert exc_info.value.status_code == 401
        assert "Unauthenticated" in exc_info.value.details


class TestConnection:

    def test_success(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["per_page"] == "1"
            return httpx.Response(200, json={"data": [PRODUCT], "meta": {"pagination": {"total": 340}}})

        result = asyncio.run(_connector(handler).test_connection())

        assert result == {"success": True, "message": "Connected to WeFulFil", "total_products": 340}

    def test_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="Server Error")

        result = asyncio.run(_connector(handler).test_connection())

        assert result["success"] is False
        assert "500" in result["message"]
