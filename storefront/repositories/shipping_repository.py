"""
Shipping Repository - Data Access Layer for shipping rates
"""
from typing import List, Optional
from storefront.domain.shipping import ShippingRate, ShippingRateCreate, ShippingRateUpdate
from storefront.core.database import get_db_connection_dict


RATE_COLUMNS = """
    id, zone_id, name, rate_type, min_order_value, max_order_value,
    price, free_shipping_threshold, is_active
"""


class ShippingRepository:
    """Repository for the shipping_rates table"""

    @staticmethod
    def _map_row_to_rate(row: dict) -> ShippingRate:
        return ShippingRate(
            id=str(row['id']),
            zone_id=str(row['zone_id']) if row.get('zone_id') else None,
            name=row['name'],
            rate_type=row.get('rate_type') or "flat_rate",
            min_order_value=row.get('min_order_value') or 0,
            max_order_value=row.get('max_order_value'),
            price=row.get('price') or 0,
            free_shipping_threshold=row.get('free_shipping_threshold'),
            is_active=row.get('is_active', True),
        )

    def find_active(self) -> List[ShippingRate]:
        """Active rates ordered by min_order_value ascending"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {RATE_COLUMNS}
                FROM shipping_rates
                WHERE is_active = true
                ORDER BY min_order_value ASC NULLS FIRST
            """)

            return [self._map_row_to_rate(row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()

    def find_all(self) -> List[ShippingRate]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {RATE_COLUMNS}
                FROM shipping_rates
                ORDER BY zone_id, min_order_value ASC NULLS FIRST
            """)

            return [self._map_row_to_rate(row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()

    def create(self, rate: ShippingRateCreate) -> ShippingRate:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO shipping_rates (
                    zone_id, name, rate_type, min_order_value, max_order_value,
                    price, free_shipping_threshold, is_active
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING {RATE_COLUMNS}
            """, (
                rate.zone_id, rate.name, rate.rate_type, rate.min_order_value,
                rate.max_order_value, rate.price, rate.free_shipping_threshold,
                rate.is_active,
            ))

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_rate(row)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def update(self, rate_id: str, changes: ShippingRateUpdate) -> Optional[ShippingRate]:
        """
        Update the provided fields of a rate

        Returns:
            Updated rate, or None when the rate does not exist
        """
        fields = changes.model_dump(exclude_unset=True)
        if not fields:
            raise ValueError("No fields to update")

        assignments = ", ".join(f"{column} = %s" for column in fields)
        params = list(fields.values()) + [rate_id]

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE shipping_rates
                SET {assignments}, updated_at = NOW()
                WHERE id = %s
                RETURNING {RATE_COLUMNS}
            """, params)

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_rate(row) if row else None

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def delete(self, rate_id: str) -> bool:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM shipping_rates WHERE id = %s", (rate_id,))
            deleted = cursor.rowcount > 0
            conn.commit()
            return deleted

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()
