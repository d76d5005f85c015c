"""
Categories API Endpoints
"""
from fastapi import APIRouter, HTTPException, Query

from storefront.services.catalog_service import CatalogService

router = APIRouter()


@router.get("/")
async def get_categories(
    with_products: bool = Query(False, description="Only categories that have approved products")
):
    """Active categories with their subcategories, by sort order"""
    try:
        categories = CatalogService().fetch_categories(filter_by_products=with_products)

        return {
            "status": "success",
            "count": len(categories),
            "data": [category.model_dump() for category in categories]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching categories: {str(e)}")


@router.get("/{category_id}/subcategories")
async def get_subcategories(category_id: str):
    try:
        subcategories = CatalogService().fetch_subcategories_by_category(category_id)

        return {
            "status": "success",
            "count": len(subcategories),
            "data": [subcategory.model_dump() for subcategory in subcategories]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching subcategories: {str(e)}")
