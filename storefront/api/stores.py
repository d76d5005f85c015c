"""
Stores API Endpoints
Vendor store pages
"""
from fastapi import APIRouter, HTTPException, Query

from storefront.services.catalog_service import CatalogService
from storefront.services.pagination import paginate

router = APIRouter()


@router.get("/{store_slug}")
async def get_store(
    store_slug: str,
    page: int = Query(1, ge=1),
    per_page: int = Query(12, ge=1, le=100)
):
    """Store details with a page of its approved products"""
    try:
        service = CatalogService()
        store = service.fetch_store_by_slug(store_slug)

        if not store:
            raise HTTPException(status_code=404, detail=f"Store {store_slug} not found")

        products = service.fetch_products_by_store(store_slug)
        result = paginate([product.to_dict() for product in products], page, per_page)

        return {
            "status": "success",
            "store": store.model_dump(),
            "products": result.model_dump()
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching store: {str(e)}")
