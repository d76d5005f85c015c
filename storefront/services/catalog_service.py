"""
Catalog Service

Storefront listings (home page rails, category and subcategory pages, deals,
best sellers, store pages, product page). Every listing is derived from the
approved catalog; a failed query is logged and yields an empty result so the
page can render its "not found" state.
"""
import logging
from typing import List, Optional

from storefront.domain.product import Product, Category, Subcategory
from storefront.domain.vendor import Store
from storefront.repositories.product_repository import ProductRepository
from storefront.repositories.category_repository import CategoryRepository
from storefront.repositories.store_repository import StoreRepository

logger = logging.getLogger(__name__)

BEST_SELLER_MIN_RATING = 4.0
BEST_SELLER_MIN_REVIEWS = 10


class CatalogService:
    """Read-side queries behind the storefront pages"""

    def __init__(
        self,
        products: Optional[ProductRepository] = None,
        categories: Optional[CategoryRepository] = None,
        stores: Optional[StoreRepository] = None
    ):
        self.products = products or ProductRepository()
        self.categories = categories or CategoryRepository()
        self.stores = stores or StoreRepository()

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def fetch_all_products(self) -> List[Product]:
        """Approved products, newest first"""
        try:
            return self.products.find_approved()
        except Exception as e:
            logger.error(f"Error fetching products: {e}")
            return []

    def fetch_products_by_store(self, store_slug: str) -> List[Product]:
        try:
            return self.products.find_approved(store_slug=store_slug)
        except Exception as e:
            logger.error(f"Error fetching products for store {store_slug}: {e}")
            return []

    def fetch_featured_products(self, limit: int = 4) -> List[Product]:
        """In-stock products with the best rating"""
        in_stock = [product for product in self.fetch_all_products() if product.in_stock]
        return sorted(in_stock, key=lambda p: p.rating, reverse=True)[:limit]

    def fetch_new_arrivals(self, limit: int = 4) -> List[Product]:
        products = self.fetch_all_products()
        return sorted(products, key=lambda p: p.created_at, reverse=True)[:limit]

    def fetch_popular_products(self, limit: int = 4) -> List[Product]:
        """
        Products ranked by review_count x rating

        Falls back to the newest products when nothing has been rated yet.
        """
        products = self.fetch_all_products()
        rated = [p for p in products if p.review_count > 0 or p.rating > 0]
        popular = sorted(rated, key=lambda p: p.review_count * p.rating, reverse=True)[:limit]
        return popular if popular else products[:limit]

    def fetch_products_by_category(self, category_name: str) -> List[Product]:
        wanted = category_name.lower()
        return [p for p in self.fetch_all_products() if p.category.lower() == wanted]

    def fetch_products_by_subcategory(self, category: str, subcategory: str) -> List[Product]:
        """Category must match exactly and subcategory partially (case-insensitive)"""
        wanted_category = category.lower()
        wanted_sub = subcategory.lower()
        return [
            p for p in self.fetch_all_products()
            if p.category.lower() == wanted_category
            and p.subcategory
            and wanted_sub in p.subcategory.lower()
        ]

    def fetch_best_sellers(self, limit: int = 20) -> List[Product]:
        qualified = [
            p for p in self.fetch_all_products()
            if p.rating >= BEST_SELLER_MIN_RATING and p.review_count >= BEST_SELLER_MIN_REVIEWS
        ]
        return sorted(qualified, key=lambda p: p.rating * p.review_count, reverse=True)[:limit]

    def fetch_deals(self, limit: int = 20) -> List[Product]:
        """Products on sale, biggest discount first"""
        on_sale = [p for p in self.fetch_all_products() if p.is_on_sale]
        return sorted(on_sale, key=lambda p: p.discount_percentage, reverse=True)[:limit]

    def fetch_product_by_slug(self, slug: str) -> Optional[Product]:
        try:
            return self.products.find_by_slug(slug)
        except Exception as e:
            logger.error(f"Error fetching product {slug}: {e}")
            return None

    def fetch_related_products(self, product_id: str, category: str, limit: int = 4) -> List[Product]:
        """Other products of the same category"""
        return [
            p for p in self.fetch_all_products()
            if p.id != product_id and p.category == category
        ][:limit]

    def search_products(self, query: str) -> List[Product]:
        """Substring search over name, description and category"""
        needle = query.strip().lower()
        if not needle:
            return self.fetch_all_products()

        return [
            p for p in self.fetch_all_products()
            if needle in p.name.lower()
            or needle in p.description.lower()
            or needle in p.category.lower()
        ]

    # ------------------------------------------------------------------
    # Categories and stores
    # ------------------------------------------------------------------

    def fetch_categories(self, filter_by_products: bool = False) -> List[Category]:
        """
        Active categories with their subcategories

        Args:
            filter_by_products: Keep only categories that have approved or
                active products (consumer-facing pages)
        """
        try:
            categories = self.categories.find_active()

            if filter_by_products:
                categories = [
                    category for category in categories
                    if self.products.category_has_products(category.name)
                ]

            return categories
        except Exception as e:
            logger.error(f"Error fetching categories: {e}")
            return []

    def fetch_subcategories_by_category(self, category_id: str) -> List[Subcategory]:
        try:
            return self.categories.find_subcategories(category_id)
        except Exception as e:
            logger.error(f"Error fetching subcategories for {category_id}: {e}")
            return []

    def fetch_store_by_slug(self, store_slug: str) -> Optional[Store]:
        try:
            return self.stores.find_by_slug(store_slug)
        except Exception as e:
            logger.error(f"Error fetching store {store_slug}: {e}")
            return None
