"""
Unit tests for SEO metadata
"""
from decimal import Decimal
from unittest.mock import patch

from storefront.core.config import settings
from storefront.services.seo_service import (
    BreadcrumbEntry,
    breadcrumb_schema,
    build_page_meta,
    organization_schema,
    product_schema,
    website_schema,
)


class TestSchemas:

    def test_product_schema(self, product_factory):
        schema = product_schema(product_factory(price=Decimal("499.00")))

        assert schema["@type"] == "Product"
        assert schema["image"] == "https://cdn.example.com/earbuds.jpg"
        assert schema["brand"]["name"] == "Gadget Hub"
        assert schema["offers"]["price"] == 499.0
        assert schema["offers"]["priceCurrency"] == "ZAR"
        assert schema["offers"]["availability"] == "https://schema.org/InStock"
        assert schema["offers"]["url"].endswith("/product/wireless-earbuds")
        assert schema["aggregateRating"] == {
            "@type": "AggregateRating",
            "ratingValue": 4.5,
            "reviewCount": 12,
        }

    def test_no_rating_without_reviews(self, product_factory):
        schema = product_schema(product_factory(rating=4.5, review_count=0))

        assert "aggregateRating" not in schema

    def test_out_of_stock_and_site_as_seller(self, product_factory):
        schema = product_schema(product_factory(in_stock=False, vendor_name=""))

        assert schema["offers"]["availability"] == "https://schema.org/OutOfStock"
        assert schema["offers"]["seller"]["name"] == settings.SITE_NAME

    def test_breadcrumb_positions_start_at_one(self):
        with patch.object(settings, "SITE_URL", "https://shop.example.com"):
            schema = breadcrumb_schema([
                BreadcrumbEntry(name="Home", url="/"),
                BreadcrumbEntry(name="Electronics", url="/category/electronics"),
            ])

        items = schema["itemListElement"]
        assert [item["position"] for item in items] == [1, 2]
        assert items[1]["item"] == "https://shop.example.com/category/electronics"

    def test_website_search_action(self):
        with patch.object(settings, "SITE_URL", "https://shop.example.com"):
            schema = website_schema()

        assert schema["potentialAction"]["target"]["urlTemplate"] == (
            "https://shop.example.com/shop?search={search_term_string}"
        )

    def test_organization(self):
        assert organization_schema()["name"] == settings.SITE_NAME


class TestPageMeta:

    def test_site_name_appended(self):
        meta = build_page_meta("Electronics", path="/category/electronics")

        assert meta.title == f"Electronics | {settings.SITE_NAME}"
        assert meta.open_graph["og:title"] == meta.title
        assert meta.twitter["twitter:card"] == "summary_large_image"
        assert meta.robots is None

    def test_site_name_not_repeated(self):
        title = f"{settings.SITE_NAME} - Online Marketplace"

        assert build_page_meta(title).title == title

    def test_canonical_and_image_are_absolute(self):
        with patch.object(settings, "SITE_URL", "https://shop.example.com/"):
            meta = build_page_meta("Cart", path="/cart", image="/uploads/cart.png", noindex=True)

        assert meta.canonical_url == "https://shop.example.com/cart"
        assert meta.open_graph["og:image"] == "https://shop.example.com/uploads/cart.png"
        assert meta.robots == "noindex, nofollow"

    def test_external_image_kept(self):
        meta = build_page_meta("Earbuds", image="https://cdn.example.com/earbuds.jpg")

        assert meta.twitter["twitter:image"] == "https://cdn.example.com/earbuds.jpg"
