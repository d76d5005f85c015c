"""
WeFulFil API Connector
Reads the WeFulFil dropshipping catalog

API CONFIGURATION:
- Base URL: https://app.wefullfill.com (WEFULLFIL_BASE_URL)
- Products: GET /api/products?search=&page=&per_page=&sort_by=&sort_order=
- Product: GET /api/products/{id}

AUTHENTICATION:
- api_token query parameter AND Bearer token in the Authorization header
"""
from typing import Dict, Optional, Any
import httpx
import logging

from storefront.core.config import settings
from storefront.domain.wefullfil import WeFulFilProduct, WeFulFilProductFilter, WeFulFilResponse

logger = logging.getLogger(__name__)


class WeFulFilAPIError(Exception):
    """Raised when the WeFulFil API answers with an error status"""

    def __init__(self, status_code: int, message: str, details: str = ""):
        super().__init__(f"WeFulFil API Error: {status_code} - {message}")
        self.status_code = status_code
        self.details = details


class WeFulFilConnector:
    """
    Connector for the WeFulFil REST API

    Handles:
    - Product search and listing
    - Single product lookup
    - Connection checks
    """

    PRODUCTS_PATH = "/api/products"

    def __init__(
        self,
        api_token: str = None,
        base_url: str = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize WeFulFil connector

        Args:
            api_token: WeFulFil API token
            base_url: API host (defaults to WEFULLFIL_BASE_URL)
            transport: Optional httpx transport (tests)
        """
        self.api_token = api_token or settings.WEFULLFIL_API_TOKEN
        self.base_url = (base_url or settings.WEFULLFIL_BASE_URL).rstrip("/")
        self._transport = transport

        if not self.api_token:
            raise ValueError("WeFulFil API token not configured. Set WEFULLFIL_API_TOKEN")

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get(self, path: str, params: Dict[str, str] = None) -> Any:
        query = dict(params or {})
        query["api_token"] = self.api_token

        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.get(
                f"{self.base_url}{path}",
                params=query,
                headers=self._headers,
                timeout=30.0
            )

            if response.status_code >= 400:
                logger.error(f"WeFulFil API Error: {response.status_code} {response.text}")
                raise WeFulFilAPIError(response.status_code, response.reason_phrase, response.text)

            return response.json()

    async def get_products(self, filters: Optional[WeFulFilProductFilter] = None) -> WeFulFilResponse:
        """
        Search the WeFulFil catalog

        Args:
            filters: Search text, paging and sorting

        Returns:
            WeFulFilResponse with products and pagination meta
        """
        filters = filters or WeFulFilProductFilter()
        data = await self._get(self.PRODUCTS_PATH, filters.to_params())

        # Some accounts return a bare list instead of the data/meta envelope
        if isinstance(data, list):
            return WeFulFilResponse(data=data)

        return WeFulFilResponse.model_validate(data)

    async def get_product(self, product_id: str) -> WeFulFilProduct:
        data = await self._get(f"{self.PRODUCTS_PATH}/{product_id}")
        if isinstance(data, dict) and "data" in data:
            data = data["data"]
        return WeFulFilProduct.model_validate(data)

    async def test_connection(self) -> Dict[str, Any]:
        """
        Check the token against the products endpoint

        Returns:
            Dict with success flag and message
        """
        try:
            response = await self.get_products(WeFulFilProductFilter(per_page=1))
            return {
                "success": True,
                "message": "Connected to WeFulFil",
                "total_products": response.meta.pagination.total,
            }
        except Exception as e:
            logger.error(f"WeFulFil connection test failed: {e}")
            return {"success": False, "message": str(e)}
