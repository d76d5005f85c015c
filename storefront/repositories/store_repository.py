"""
Store Repository - Data Access Layer for vendors, stores and payouts
"""
from typing import List, Optional
from storefront.domain.vendor import Vendor, Store, Payout
from storefront.domain.order import OrderItem
from storefront.core.database import get_db_connection_dict


class StoreRepository:
    """Repository for the vendors, stores and payouts tables"""

    @staticmethod
    def _map_row_to_store(row: dict) -> Store:
        vendor = None
        if row.get('vendor_business_name'):
            vendor = Vendor(
                id=str(row['vendor_id']),
                business_name=row['vendor_business_name'],
                description=row.get('vendor_description'),
                logo_url=row.get('vendor_logo_url'),
                status=row.get('vendor_status') or "pending",
            )

        return Store(
            id=str(row['id']),
            vendor_id=str(row['vendor_id']),
            name=row['name'],
            slug=row['slug'],
            description=row.get('description'),
            logo_url=row.get('logo_url'),
            banner_url=row.get('banner_url'),
            shipping_policy=row.get('shipping_policy'),
            return_policy=row.get('return_policy'),
            vendor=vendor,
            created_at=row.get('created_at'),
        )

    def find_by_slug(self, slug: str) -> Optional[Store]:
        """Find a store with its vendor by slug"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    s.id, s.vendor_id, s.name, s.slug, s.description, s.logo_url,
                    s.banner_url, s.shipping_policy, s.return_policy, s.created_at,
                    v.business_name AS vendor_business_name,
                    v.description AS vendor_description,
                    v.logo_url AS vendor_logo_url,
                    v.status AS vendor_status
                FROM stores s
                LEFT JOIN vendors v ON v.id = s.vendor_id
                WHERE s.slug = %s
            """, (slug,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_store(row)

        finally:
            cursor.close()
            conn.close()

    def find_vendor_by_user(self, user_id: str) -> Optional[Vendor]:
        """Find the vendor account owned by a user"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    id, user_id, business_name, description, logo_url, status,
                    subscription_tier, subscription_status, trial_end_date, created_at
                FROM vendors
                WHERE user_id = %s
            """, (user_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return Vendor(**{**row, 'id': str(row['id']), 'user_id': str(row['user_id'])})

        finally:
            cursor.close()
            conn.close()

    def find_stores_by_vendor(self, vendor_id: str) -> List[Store]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    id, vendor_id, name, slug, description, logo_url, banner_url,
                    shipping_policy, return_policy, created_at
                FROM stores
                WHERE vendor_id = %s
                ORDER BY created_at
            """, (vendor_id,))

            return [self._map_row_to_store(row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()

    def find_payouts_by_vendor(self, vendor_id: str) -> List[Payout]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT id, vendor_id, amount, status, payout_date, created_at
                FROM payouts
                WHERE vendor_id = %s
                ORDER BY created_at DESC
            """, (vendor_id,))

            return [
                Payout(**{**row, 'id': str(row['id']), 'vendor_id': str(row['vendor_id'])})
                for row in cursor.fetchall()
            ]

        finally:
            cursor.close()
            conn.close()

    def find_order_items_by_vendor(self, vendor_id: str, limit: int = 100) -> List[OrderItem]:
        """Order lines sold through any of the vendor's stores, newest first"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    oi.id, oi.order_id, oi.product_id, oi.store_id, oi.variation_id,
                    oi.quantity, oi.price, oi.status, oi.vendor_status, oi.created_at,
                    p.name AS product_name
                FROM order_items oi
                JOIN stores s ON s.id = oi.store_id
                LEFT JOIN products p ON p.id = oi.product_id
                WHERE s.vendor_id = %s
                ORDER BY oi.created_at DESC
                LIMIT %s
            """, (vendor_id, limit))

            return [
                OrderItem(**{
                    **row,
                    'id': str(row['id']),
                    'order_id': str(row['order_id']),
                    'product_id': str(row['product_id']),
                    'store_id': str(row['store_id']),
                })
                for row in cursor.fetchall()
            ]

        finally:
            cursor.close()
            conn.close()

    def get_or_create_store(
        self,
        slug: str,
        store_name: str,
        vendor_business_name: str,
        description: Optional[str] = None,
        user_id: Optional[str] = None
    ) -> str:
        """
        Find a store by slug, creating it (and an approved vendor) when missing

        Returns:
            Store ID
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("SELECT id FROM stores WHERE slug = %s", (slug,))
            row = cursor.fetchone()
            if row:
                return str(row['id'])

            cursor.execute("""
                INSERT INTO vendors (business_name, status, user_id)
                VALUES (%s, 'approved', %s)
                RETURNING id
            """, (vendor_business_name, user_id))
            vendor_id = cursor.fetchone()['id']

            cursor.execute("""
                INSERT INTO stores (vendor_id, name, slug, description)
                VALUES (%s, %s, %s, %s)
                RETURNING id
            """, (vendor_id, store_name, slug, description))
            store_id = cursor.fetchone()['id']

            conn.commit()
            return str(store_id)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()
