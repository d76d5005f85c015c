"""
Product Repository - Data Access Layer for Products

Handles all database queries for products and returns Product domain models.
Products are joined with their images (ordered by position) and the store and
vendor that sell them.
"""
from typing import List, Optional, Tuple, Dict
from storefront.domain.product import Product, ProductRecord
from storefront.core.database import get_db_connection_dict


PRODUCT_SELECT = """
    SELECT
        p.id, p.name, p.slug, p.description, p.price, p.compare_at_price,
        p.category, p.subcategory, p.rating, p.review_count, p.quantity,
        p.created_at, p.product_type,
        s.id AS store_id, s.name AS store_name, s.slug AS store_slug,
        v.business_name AS vendor_business_name,
        COALESCE(
            array_agg(pi.image_url ORDER BY pi.position)
                FILTER (WHERE pi.image_url IS NOT NULL),
            '{}'
        ) AS images
    FROM products p
    LEFT JOIN stores s ON s.id = p.store_id
    LEFT JOIN vendors v ON v.id = s.vendor_id
    LEFT JOIN product_images pi ON pi.product_id = p.id
"""

PRODUCT_GROUP_BY = "GROUP BY p.id, s.id, v.id"


class ProductRepository:
    """
    Repository for Product data access

    All SQL queries for products are centralized here.
    Returns Product domain models, not raw dictionaries.
    """

    @staticmethod
    def _map_row_to_product(row: dict) -> Product:
        """Map a joined products row to the storefront Product model"""
        return Product(
            id=str(row['id']),
            name=row['name'],
            slug=row['slug'],
            description=row.get('description') or "",
            price=row['price'],
            compare_at_price=row.get('compare_at_price') or None,
            images=list(row.get('images') or []),
            category=row.get('category') or "",
            subcategory=row.get('subcategory'),
            rating=float(row.get('rating') or 0),
            review_count=row.get('review_count') or 0,
            in_stock=(row.get('quantity') or 0) > 0,
            vendor_id=str(row['store_id']) if row.get('store_id') else None,
            vendor_name=row.get('store_name') or row.get('vendor_business_name') or "Store",
            vendor_slug=row.get('store_slug'),
            created_at=row['created_at'],
            product_type=row.get('product_type'),
        )

    def find_approved(self, store_slug: Optional[str] = None) -> List[Product]:
        """
        Find approved products, newest first

        Args:
            store_slug: Only products of this store

        Returns:
            List of products
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            conditions = ["p.status = 'approved'"]
            params = []

            if store_slug:
                conditions.append("s.slug = %s")
                params.append(store_slug)

            where_clause = " AND ".join(conditions)

            cursor.execute(f"""
                {PRODUCT_SELECT}
                WHERE {where_clause}
                {PRODUCT_GROUP_BY}
                ORDER BY p.created_at DESC
            """, params)

            rows = cursor.fetchall()
            return [self._map_row_to_product(row) for row in rows]

        finally:
            cursor.close()
            conn.close()

    def find_by_slug(self, slug: str) -> Optional[Product]:
        """Find an approved product by slug"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                {PRODUCT_SELECT}
                WHERE p.slug = %s AND p.status = 'approved'
                {PRODUCT_GROUP_BY}
            """, (slug,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_product(row)

        finally:
            cursor.close()
            conn.close()

    def find_by_ids(self, product_ids: List[str]) -> Dict[str, Product]:
        """
        Find approved products by ID

        Returns:
            Dict of product ID -> Product (missing IDs are absent)
        """
        if not product_ids:
            return {}

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                {PRODUCT_SELECT}
                WHERE p.id::text = ANY(%s) AND p.status = 'approved'
                {PRODUCT_GROUP_BY}
            """, (list(product_ids),))

            products = [self._map_row_to_product(row) for row in cursor.fetchall()]
            return {product.id: product for product in products}

        finally:
            cursor.close()
            conn.close()

    def category_has_products(self, category_name: str) -> bool:
        """Check whether a category has at least one approved or active product"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT id
                FROM products
                WHERE category = %s AND status IN ('approved', 'active')
                LIMIT 1
            """, (category_name,))

            return cursor.fetchone() is not None

        finally:
            cursor.close()
            conn.close()

    # ------------------------------------------------------------------
    # Writes (imports)
    # ------------------------------------------------------------------

    def find_id_by_external(self, external_source: str, external_id: str) -> Optional[str]:
        """Find the catalog ID of a product imported from an external source"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT id
                FROM products
                WHERE external_source = %s AND external_id = %s
            """, (external_source, external_id))

            row = cursor.fetchone()
            return str(row['id']) if row else None

        finally:
            cursor.close()
            conn.close()

    def insert(self, record: ProductRecord) -> str:
        """
        Insert a product row

        Returns:
            ID of the new product
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                INSERT INTO products (
                    store_id, name, slug, description, price, compare_at_price,
                    quantity, category, subcategory, sku, status,
                    external_source, external_id
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING id
            """, (
                record.store_id, record.name, record.slug, record.description,
                record.price, record.compare_at_price, record.quantity,
                record.category, record.subcategory, record.sku, record.status,
                record.external_source, record.external_id,
            ))

            product_id = cursor.fetchone()['id']
            conn.commit()
            return str(product_id)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def update_from_record(self, product_id: str, record: ProductRecord) -> None:
        """Refresh the catalog fields of an existing product (slug and store are kept)"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                UPDATE products
                SET name = %s,
                    description = %s,
                    price = %s,
                    compare_at_price = %s,
                    quantity = %s,
                    category = %s,
                    subcategory = %s,
                    sku = %s,
                    status = %s,
                    updated_at = NOW()
                WHERE id = %s
            """, (
                record.name, record.description, record.price,
                record.compare_at_price, record.quantity, record.category,
                record.subcategory, record.sku, record.status, product_id,
            ))
            conn.commit()

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def add_images(self, product_id: str, image_urls: List[str]) -> int:
        """Attach images to a product in the given order"""
        if not image_urls:
            return 0

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.executemany("""
                INSERT INTO product_images (product_id, image_url, position)
                VALUES (%s, %s, %s)
            """, [(product_id, url, position) for position, url in enumerate(image_urls)])
            conn.commit()
            return len(image_urls)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def find_by_external_source(
        self,
        external_source: str,
        limit: int = 10,
        offset: int = 0
    ) -> Tuple[List[dict], int]:
        """
        List products imported from an external source, newest first

        Returns:
            Tuple of (list of rows, total count)
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT COUNT(*) as total
                FROM products
                WHERE external_source = %s
            """, (external_source,))
            total = cursor.fetchone()['total']

            cursor.execute("""
                SELECT
                    p.id, p.name, p.price, p.status, p.category, p.subcategory,
                    p.sku, p.quantity, p.external_id, p.external_source,
                    p.store_id, p.created_at, s.name AS store_name
                FROM products p
                LEFT JOIN stores s ON s.id = p.store_id
                WHERE p.external_source = %s
                ORDER BY p.created_at DESC
                LIMIT %s OFFSET %s
            """, (external_source, limit, offset))

            return cursor.fetchall(), total

        finally:
            cursor.close()
            conn.close()
