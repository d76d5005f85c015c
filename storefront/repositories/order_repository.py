"""
Order Repository - Data Access Layer for orders and order items
"""
from decimal import Decimal
from typing import List, Optional, Dict, Any
from psycopg2.extras import Json

from storefront.domain.order import Order, OrderItem
from storefront.core.database import get_db_connection_dict


ORDER_COLUMNS = """
    id, user_id, status, total, shipping_address, shipping_method,
    payment_method, payment_status, tracking_number, tracking_url, notes,
    created_at, updated_at
"""


class OrderRepository:
    """Repository for the orders and order_items tables"""

    @staticmethod
    def _map_row_to_order(row: dict, items: Optional[List[OrderItem]] = None) -> Order:
        return Order(
            id=str(row['id']),
            user_id=str(row['user_id']),
            status=row['status'],
            total=row['total'],
            shipping_address=row.get('shipping_address') or {},
            shipping_method=row.get('shipping_method'),
            payment_method=row.get('payment_method'),
            payment_status=row['payment_status'],
            tracking_number=row.get('tracking_number'),
            tracking_url=row.get('tracking_url'),
            notes=row.get('notes'),
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at'),
            items=items or [],
        )

    @staticmethod
    def _map_row_to_item(row: dict) -> OrderItem:
        return OrderItem(
            id=str(row['id']),
            order_id=str(row['order_id']),
            product_id=str(row['product_id']),
            store_id=str(row['store_id']) if row.get('store_id') else None,
            variation_id=row.get('variation_id'),
            product_name=row.get('product_name'),
            quantity=row['quantity'],
            price=row['price'],
            status=row['status'],
            vendor_status=row['vendor_status'],
            created_at=row.get('created_at'),
        )

    def create(
        self,
        user_id: str,
        total: Decimal,
        shipping_address: Dict[str, Any],
        items: List[OrderItem],
        payment_method: str,
        shipping_method: Optional[str] = None,
        notes: Optional[str] = None
    ) -> Order:
        """
        Create a pending order and its line items in one transaction

        Returns:
            The created order with its items
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO orders (
                    user_id, total, status, payment_method, payment_status,
                    shipping_address, shipping_method, notes
                )
                VALUES (%s, %s, 'pending', %s, 'pending', %s, %s, %s)
                RETURNING {ORDER_COLUMNS}
            """, (user_id, total, payment_method, Json(shipping_address), shipping_method, notes))
            order_row = cursor.fetchone()

            created_items = []
            for item in items:
                cursor.execute("""
                    INSERT INTO order_items (
                        order_id, product_id, store_id, variation_id, quantity,
                        price, status, vendor_status
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, 'pending', 'pending')
                    RETURNING id, order_id, product_id, store_id, variation_id,
                              quantity, price, status, vendor_status, created_at
                """, (
                    order_row['id'], item.product_id, item.store_id,
                    item.variation_id, item.quantity, item.price,
                ))
                item_row = cursor.fetchone()
                created_items.append(
                    self._map_row_to_item({**item_row, 'product_name': item.product_name})
                )

            conn.commit()
            return self._map_row_to_order(order_row, created_items)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def find_by_id(self, order_id: str) -> Optional[Order]:
        """Find an order with its items (product names joined from the catalog)"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders
                WHERE id = %s
            """, (order_id,))

            order_row = cursor.fetchone()
            if not order_row:
                return None

            cursor.execute("""
                SELECT
                    oi.id, oi.order_id, oi.product_id, oi.store_id, oi.variation_id,
                    oi.quantity, oi.price, oi.status, oi.vendor_status, oi.created_at,
                    p.name AS product_name
                FROM order_items oi
                LEFT JOIN products p ON p.id = oi.product_id
                WHERE oi.order_id = %s
                ORDER BY oi.created_at
            """, (order_id,))

            items = [self._map_row_to_item(row) for row in cursor.fetchall()]
            return self._map_row_to_order(order_row, items)

        finally:
            cursor.close()
            conn.close()

    def find_by_user(self, user_id: str, limit: int = 50, offset: int = 0) -> List[Order]:
        """Orders of a customer, newest first (without items)"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders
                WHERE user_id = %s
                ORDER BY created_at DESC
                LIMIT %s OFFSET %s
            """, (user_id, limit, offset))

            return [self._map_row_to_order(row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()

    def update_payment(self, order_id: str, payment_status: str, status: Optional[str] = None) -> bool:
        """
        Record the outcome of a payment

        Args:
            order_id: Order ID
            payment_status: pending, paid, failed or refunded
            status: New order status (unchanged when None)

        Returns:
            True when the order exists
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                UPDATE orders
                SET payment_status = %s,
                    status = COALESCE(%s, status),
                    updated_at = NOW()
                WHERE id = %s
            """, (payment_status, status, order_id))

            updated = cursor.rowcount > 0
            conn.commit()
            return updated

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()
