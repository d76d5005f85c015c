"""
WeFulFil Import Service

Copies WeFulFil catalog products into the storefront catalog under the
"WeFulFill Store". Products are matched on (external_source, external_id):
known products are refreshed, new ones are inserted as approved together
with their images. One failing product never aborts the batch.
"""
import re
import logging
from datetime import date
from typing import List, Optional

from storefront.connectors.wefullfil_connector import WeFulFilConnector
from storefront.domain.product import ProductRecord
from storefront.domain.wefullfil import AdminProduct, ImportResult, WeFulFilProduct, WeFulFilProductFilter
from storefront.repositories.import_job_repository import ImportJobRepository
from storefront.repositories.product_repository import ProductRepository
from storefront.repositories.store_repository import StoreRepository
from storefront.services.pagination import Page

logger = logging.getLogger(__name__)

EXTERNAL_SOURCE = "wefullfill"
STORE_SLUG = "wefullfill-store"
STORE_NAME = "WeFulFill Store"
VENDOR_NAME = "WeFulFill"
STORE_DESCRIPTION = "Official WeFulFill product catalog"

ADMIN_STATUSES = {"approved", "pending", "rejected"}
IMPORT_PAGE_SIZE = 100


def slugify(name: str) -> str:
    """Lowercase, runs of non-alphanumerics become '-', no leading/trailing '-'"""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def to_product_record(product: WeFulFilProduct, store_id: str) -> ProductRecord:
    return ProductRecord(
        store_id=store_id,
        name=product.title,
        slug=slugify(product.title),
        description=product.description,
        price=product.price,
        compare_at_price=product.compare_at_price,
        quantity=product.inventory_quantity,
        category=product.primary_category,
        subcategory=product.subcategory,
        sku=product.sku,
        status="approved",
        external_source=EXTERNAL_SOURCE,
        external_id=product.id,
    )


def to_admin_product(product: WeFulFilProduct) -> AdminProduct:
    """Admin products table row for a WeFulFil product awaiting review"""
    return AdminProduct(
        id=product.id,
        name=product.title,
        vendor_name="WeFulFil",
        price=product.price,
        status="pending",
        category="Imported",
        date_added=date.today().isoformat(),
        store_id="wefullfil",
        external_id=product.id,
        external_source=EXTERNAL_SOURCE,
        inventory_quantity=product.inventory_quantity,
        sku=product.sku,
    )


class WeFulFilImportService:
    """Imports WeFulFil products into the catalog"""

    def __init__(
        self,
        products: Optional[ProductRepository] = None,
        stores: Optional[StoreRepository] = None,
        jobs: Optional[ImportJobRepository] = None
    ):
        self.products = products or ProductRepository()
        self.stores = stores or StoreRepository()
        self.jobs = jobs or ImportJobRepository()

    def _store_id(self, user_id: Optional[str]) -> str:
        return self.stores.get_or_create_store(
            slug=STORE_SLUG,
            store_name=STORE_NAME,
            vendor_business_name=VENDOR_NAME,
            description=STORE_DESCRIPTION,
            user_id=user_id,
        )

    def _start_job(self, total: int, user_id: Optional[str]) -> Optional[str]:
        try:
            return self.jobs.start(EXTERNAL_SOURCE, total, created_by=user_id)
        except Exception as e:
            logger.error(f"Could not record import job: {e}")
            return None

    def _finish_job(self, job_id: Optional[str], result: ImportResult, failed_ids: List[str]) -> None:
        if job_id is None:
            return
        try:
            self.jobs.finish(
                job_id,
                successful=result.success,
                failed=result.failed,
                metadata={"failed_external_ids": failed_ids},
            )
        except Exception as e:
            logger.error(f"Could not close import job {job_id}: {e}")

    def import_product(self, product: WeFulFilProduct, store_id: str) -> str:
        """
        Upsert one product

        Returns:
            Catalog product ID
        """
        record = to_product_record(product, store_id)
        existing_id = self.products.find_id_by_external(EXTERNAL_SOURCE, product.id)

        if existing_id:
            self.products.update_from_record(existing_id, record)
            return existing_id

        product_id = self.products.insert(record)
        if product.images:
            self.products.add_images(product_id, product.images)
        return product_id

    def import_products(self, products: List[WeFulFilProduct], user_id: Optional[str] = None) -> ImportResult:
        """
        Import a batch of WeFulFil products

        Args:
            products: Products to import
            user_id: Admin running the import (recorded on the job)

        Returns:
            ImportResult with success and failure counts
        """
        store_id = self._store_id(user_id)
        result = ImportResult(total=len(products))
        result.job_id = self._start_job(len(products), user_id)

        failed_ids: List[str] = []
        for product in products:
            try:
                self.import_product(product, store_id)
                result.success += 1
            except Exception as e:
                logger.error(f"Failed to import product {product.id}: {e}")
                result.failed += 1
                failed_ids.append(product.id)

        self._finish_job(result.job_id, result, failed_ids)
        logger.info(f"Import complete: {result.success} success, {result.failed} failed")

        return result

    def import_selected(self, products: List[WeFulFilProduct], user_id: Optional[str] = None) -> ImportResult:
        """
        Bulk import of the products an admin selected, skipping out-of-stock ones

        Raises:
            ValueError: No selected product is in stock
        """
        importable = [product for product in products if product.in_stock]
        if not importable:
            raise ValueError("No in-stock products selected for import")

        skipped = len(products) - len(importable)
        if skipped:
            logger.info(f"Skipping {skipped} out-of-stock products")

        return self.import_products(importable, user_id)

    def list_imported_products(self, page: int = 1, per_page: int = 10) -> Page[AdminProduct]:
        """Previously imported products, newest first"""
        offset = (page - 1) * per_page
        rows, total = self.products.find_by_external_source(EXTERNAL_SOURCE, limit=per_page, offset=offset)

        items = [
            AdminProduct(
                id=str(row['id']),
                name=row['name'],
                vendor_name=row.get('store_name') or VENDOR_NAME,
                price=row['price'],
                status=row['status'] if row.get('status') in ADMIN_STATUSES else "pending",
                category=row.get('category') or "Imported",
                subcategory=row.get('subcategory'),
                date_added=row['created_at'].date().isoformat() if row.get('created_at') else "",
                store_id=str(row['store_id']) if row.get('store_id') else "",
                external_id=row.get('external_id'),
                external_source=row.get('external_source'),
                inventory_quantity=row.get('quantity'),
                sku=row.get('sku'),
            )
            for row in rows
        ]

        return Page[AdminProduct].build(items, total, page, per_page)

    async def import_all(
        self,
        connector: WeFulFilConnector,
        search: Optional[str] = None,
        user_id: Optional[str] = None
    ) -> ImportResult:
        """Walk every page of the WeFulFil catalog and import what it returns"""
        products: List[WeFulFilProduct] = []
        page = 1

        while True:
            response = await connector.get_products(
                WeFulFilProductFilter(search=search, page=page, per_page=IMPORT_PAGE_SIZE)
            )
            products.extend(response.data)

            pagination = response.meta.pagination
            if not response.data or page >= pagination.total_pages:
                break
            page += 1

        logger.info(f"Fetched {len(products)} products from WeFulFil")
        return self.import_products(products, user_id)
