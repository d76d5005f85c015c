"""
SEO metadata

schema.org JSON-LD documents and page meta tags (title, canonical URL,
Open Graph, Twitter) for the storefront pages.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from storefront.core.config import settings
from storefront.domain.product import Product

SCHEMA_CONTEXT = "https://schema.org"
SITE_DESCRIPTION = "Your Premier Online Marketplace for quality products from trusted vendors"
DEFAULT_SHARE_IMAGE = "/uploads/logo.png"


class BreadcrumbEntry(BaseModel):
    name: str
    url: str


class PageMeta(BaseModel):
    title: str
    description: str
    canonical_url: str
    robots: Optional[str] = None
    open_graph: Dict[str, str]
    twitter: Dict[str, str]
    structured_data: Optional[Dict[str, Any]] = None


def _absolute(path: str) -> str:
    if path.startswith("http://") or path.startswith("https://"):
        return path
    return f"{settings.SITE_URL.rstrip('/')}/{path.lstrip('/')}"


def organization_schema() -> Dict[str, Any]:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "Organization",
        "name": settings.SITE_NAME,
        "url": settings.SITE_URL,
        "logo": _absolute(DEFAULT_SHARE_IMAGE),
        "description": SITE_DESCRIPTION,
        "contactPoint": {
            "@type": "ContactPoint",
            "contactType": "Customer Service",
            "availableLanguage": "English",
        },
    }


def website_schema() -> Dict[str, Any]:
    """WebSite document with the shop search action"""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "WebSite",
        "name": settings.SITE_NAME,
        "url": settings.SITE_URL,
        "potentialAction": {
            "@type": "SearchAction",
            "target": {
                "@type": "EntryPoint",
                "urlTemplate": _absolute("/shop?search={search_term_string}"),
            },
            "query-input": "required name=search_term_string",
        },
    }


def product_schema(product: Product) -> Dict[str, Any]:
    """
    Product document with its offer

    aggregateRating is only present when the product has both a rating and
    reviews.
    """
    seller = product.vendor_name or settings.SITE_NAME
    schema: Dict[str, Any] = {
        "@context": SCHEMA_CONTEXT,
        "@type": "Product",
        "name": product.name,
        "description": product.description or "",
        "image": product.image,
        "brand": {"@type": "Brand", "name": seller},
        "offers": {
            "@type": "Offer",
            "url": _absolute(f"/product/{product.slug}"),
            "priceCurrency": settings.CURRENCY,
            "price": float(product.price),
            "availability": (
                "https://schema.org/InStock" if product.in_stock
                else "https://schema.org/OutOfStock"
            ),
            "seller": {"@type": "Organization", "name": seller},
        },
    }

    if product.rating and product.review_count:
        schema["aggregateRating"] = {
            "@type": "AggregateRating",
            "ratingValue": product.rating,
            "reviewCount": product.review_count,
        }

    return schema


def breadcrumb_schema(entries: List[BreadcrumbEntry]) -> Dict[str, Any]:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": [
            {
                "@type": "ListItem",
                "position": position,
                "name": entry.name,
                "item": _absolute(entry.url),
            }
            for position, entry in enumerate(entries, start=1)
        ],
    }


def build_page_meta(
    title: str,
    description: str = SITE_DESCRIPTION,
    path: str = "/",
    image: Optional[str] = None,
    page_type: str = "website",
    noindex: bool = False,
    structured_data: Optional[Dict[str, Any]] = None
) -> PageMeta:
    """
    Meta tags for a page

    The title gets the site name appended unless it already contains it.
    """
    full_title = title if settings.SITE_NAME in title else f"{title} | {settings.SITE_NAME}"
    canonical = _absolute(path)
    share_image = _absolute(image or DEFAULT_SHARE_IMAGE)

    return PageMeta(
        title=full_title,
        description=description,
        canonical_url=canonical,
        robots="noindex, nofollow" if noindex else None,
        open_graph={
            "og:type": page_type,
            "og:url": canonical,
            "og:title": full_title,
            "og:description": description,
            "og:image": share_image,
            "og:site_name": settings.SITE_NAME,
        },
        twitter={
            "twitter:card": "summary_large_image",
            "twitter:url": canonical,
            "twitter:title": full_title,
            "twitter:description": description,
            "twitter:image": share_image,
        },
        structured_data=structured_data,
    )
