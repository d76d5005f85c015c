"""
SEO API Endpoints
Meta tags and JSON-LD for pages rendered by the storefront client
"""
from fastapi import APIRouter, HTTPException, Query
from typing import Optional

from storefront.core.config import settings
from storefront.services.catalog_service import CatalogService
from storefront.services.seo_service import (
    BreadcrumbEntry,
    breadcrumb_schema,
    build_page_meta,
    organization_schema,
    product_schema,
    website_schema,
)

router = APIRouter()


@router.get("/site")
async def get_site_metadata():
    """Home page meta with the organization and website documents"""
    meta = build_page_meta(f"{settings.SITE_NAME} - Your Premier Online Marketplace")
    return {
        "status": "success",
        "meta": meta.model_dump(),
        "structured_data": [organization_schema(), website_schema()]
    }


@router.get("/products/{slug}")
async def get_product_metadata(slug: str):
    try:
        product = CatalogService().fetch_product_by_slug(slug)
        if not product:
            raise HTTPException(status_code=404, detail=f"Product {slug} not found")

        path = f"/product/{product.slug}"
        crumbs = [
            BreadcrumbEntry(name="Home", url="/"),
            BreadcrumbEntry(name=product.category or "Shop", url=f"/category/{product.category.lower()}" if product.category else "/shop"),
            BreadcrumbEntry(name=product.name, url=path),
        ]
        meta = build_page_meta(
            product.name,
            description=product.description[:160] or f"Buy {product.name} on {settings.SITE_NAME}",
            path=path,
            image=product.image or None,
            page_type="product",
            structured_data=product_schema(product),
        )

        return {
            "status": "success",
            "meta": meta.model_dump(),
            "breadcrumbs": breadcrumb_schema(crumbs)
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error building product metadata: {str(e)}")


@router.get("/categories/{category}")
async def get_category_metadata(category: str, subcategory: Optional[str] = Query(None)):
    """Category or subcategory page meta"""
    category_path = f"/category/{category.lower()}"
    crumbs = [
        BreadcrumbEntry(name="Home", url="/"),
        BreadcrumbEntry(name=category, url=category_path),
    ]

    if subcategory:
        path = f"{category_path}/{subcategory.lower()}"
        title = f"{subcategory} - {category}"
        crumbs.append(BreadcrumbEntry(name=subcategory, url=path))
    else:
        path = category_path
        title = category

    meta = build_page_meta(
        title,
        description=f"Shop {title} from trusted vendors on {settings.SITE_NAME}",
        path=path,
    )

    return {
        "status": "success",
        "meta": meta.model_dump(),
        "breadcrumbs": breadcrumb_schema(crumbs)
    }
