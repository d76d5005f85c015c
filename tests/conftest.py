"""
Pytest fixtures and configuration for the storefront backend tests

Shared builders for domain objects and a mocked psycopg2 connection.
"""
import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

from storefront.domain.product import Product
from storefront.domain.shipping import ShippingRate
from storefront.domain.order import Order, OrderItem


def build_product(**overrides) -> Product:
    """Approved, in-stock product with sensible defaults"""
    data = {
        'id': 'prod-1',
        'name': 'Wireless Earbuds',
        'slug': 'wireless-earbuds',
        'description': 'Bluetooth earbuds with charging case',
        'price': Decimal('499.00'),
        'compare_at_price': None,
        'images': ['https://cdn.example.com/earbuds.jpg'],
        'category': 'Electronics',
        'subcategory': 'Audio',
        'rating': 4.5,
        'review_count': 12,
        'in_stock': True,
        'vendor_id': 'store-1',
        'vendor_name': 'Gadget Hub',
        'vendor_slug': 'gadget-hub',
        'created_at': datetime(2025, 1, 1, 12, 0, 0),
        'product_type': 'simple',
    }
    data.update(overrides)
    return Product(**data)


def build_rate(**overrides) -> ShippingRate:
    data = {
        'id': 'rate-1',
        'zone_id': 'zone-za',
        'name': 'Standard',
        'rate_type': 'flat_rate',
        'min_order_value': Decimal('0'),
        'max_order_value': None,
        'price': Decimal('60.00'),
        'free_shipping_threshold': None,
        'is_active': True,
    }
    data.update(overrides)
    return ShippingRate(**data)


def build_order(**overrides) -> Order:
    data = {
        'id': '7f3c2a10-5b6e-4c1d-9a8b-0e1f2a3b4c5d',
        'user_id': 'user-1',
        'status': 'pending',
        'total': Decimal('1207.70'),
        'shipping_address': {
            'first_name': 'Thandi',
            'last_name': 'Nkosi',
            'email': 'thandi@example.com',
            'street': '12 Long Street',
            'city': 'Cape Town',
            'postal_code': '8001',
            'country': 'South Africa',
        },
        'payment_method': 'payfast',
        'payment_status': 'pending',
        'created_at': datetime(2025, 3, 1, 9, 30, 0),
        'items': [
            OrderItem(
                id='item-1',
                order_id='7f3c2a10-5b6e-4c1d-9a8b-0e1f2a3b4c5d',
                product_id='prod-1',
                store_id='store-1',
                product_name='Wireless Earbuds',
                quantity=2,
                price=Decimal('499.00'),
            )
        ],
    }
    data.update(overrides)
    return Order(**data)


@pytest.fixture
def product_factory():
    return build_product


@pytest.fixture
def rate_factory():
    return build_rate


@pytest.fixture
def order_factory():
    return build_order


@pytest.fixture
def mock_connection():
    """
    Mocked psycopg2 connection and cursor

    Returns:
        Tuple of (connection, cursor)
    """
    conn = MagicMock()
    cursor = MagicMock()
    conn.cursor.return_value = cursor
    return conn, cursor
