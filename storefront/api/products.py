"""
Products API Endpoints
Storefront product listings: shop page, home page rails, deals, best sellers
and the product page
"""
from fastapi import APIRouter, HTTPException, Query
from typing import Optional, List

from storefront.domain.product import Product
from storefront.services.catalog_service import CatalogService
from storefront.services.pagination import paginate

router = APIRouter()


def _rail(products: List[Product]) -> dict:
    return {
        "status": "success",
        "count": len(products),
        "data": [product.to_dict() for product in products]
    }


def _page(products: List[Product], page: int, per_page: int) -> dict:
    result = paginate([product.to_dict() for product in products], page, per_page)
    return {
        "status": "success",
        **result.model_dump()
    }


@router.get("/")
async def get_products(
    search: Optional[str] = Query(None, description="Search by name, description or category"),
    category: Optional[str] = Query(None, description="Filter by category name"),
    subcategory: Optional[str] = Query(None, description="Filter by subcategory (requires category)"),
    store: Optional[str] = Query(None, description="Filter by store slug"),
    page: int = Query(1, ge=1),
    per_page: int = Query(12, ge=1, le=100)
):
    """
    Shop page listing

    Filters apply in order of precedence: search, category + subcategory,
    category, store. Without filters every approved product is listed.
    """
    try:
        service = CatalogService()

        if search:
            products = service.search_products(search)
        elif category and subcategory:
            products = service.fetch_products_by_subcategory(category, subcategory)
        elif category:
            products = service.fetch_products_by_category(category)
        elif store:
            products = service.fetch_products_by_store(store)
        else:
            products = service.fetch_all_products()

        return _page(products, page, per_page)

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching products: {str(e)}")


@router.get("/featured")
async def get_featured_products(limit: int = Query(4, ge=1, le=50)):
    try:
        return _rail(CatalogService().fetch_featured_products(limit))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching featured products: {str(e)}")


@router.get("/new-arrivals")
async def get_new_arrivals(limit: int = Query(4, ge=1, le=50)):
    try:
        return _rail(CatalogService().fetch_new_arrivals(limit))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching new arrivals: {str(e)}")


@router.get("/popular")
async def get_popular_products(limit: int = Query(4, ge=1, le=50)):
    try:
        return _rail(CatalogService().fetch_popular_products(limit))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching popular products: {str(e)}")


@router.get("/best-sellers")
async def get_best_sellers(
    limit: int = Query(20, ge=1, le=100),
    page: int = Query(1, ge=1),
    per_page: int = Query(12, ge=1, le=100)
):
    """Best sellers page: rating >= 4 with at least 10 reviews"""
    try:
        return _page(CatalogService().fetch_best_sellers(limit), page, per_page)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching best sellers: {str(e)}")


@router.get("/deals")
async def get_deals(
    limit: int = Query(20, ge=1, le=100),
    page: int = Query(1, ge=1),
    per_page: int = Query(12, ge=1, le=100)
):
    """Deals page: products on sale, biggest discount first"""
    try:
        return _page(CatalogService().fetch_deals(limit), page, per_page)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching deals: {str(e)}")


@router.get("/{slug}")
async def get_product(slug: str, related_limit: int = Query(4, ge=0, le=20)):
    """Product page: the product and related products of its category"""
    try:
        service = CatalogService()
        product = service.fetch_product_by_slug(slug)

        if not product:
            raise HTTPException(status_code=404, detail=f"Product {slug} not found")

        related = service.fetch_related_products(product.id, product.category, related_limit)

        return {
            "status": "success",
            "data": product.to_dict(),
            "related": [item.to_dict() for item in related]
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching product: {str(e)}")
