"""
Domain Layer - Business Entities

Pydantic models mirroring the storefront's backend tables. They carry
optional-field defaults and a few derived properties; no other invariants.
"""
from storefront.domain.product import Product, Category, Subcategory, ProductRecord
from storefront.domain.vendor import Vendor, Store, Payout
from storefront.domain.shipping import ShippingRate
from storefront.domain.order import Order, OrderItem, OrderSummary, ShippingAddress, CheckoutRequest
from storefront.domain.cart import Cart, CartItem, CartItemInput, Wishlist
from storefront.domain.user import UserProfile, LoginRequest, RegisterRequest

__all__ = [
    'Product', 'Category', 'Subcategory', 'ProductRecord',
    'Vendor', 'Store', 'Payout',
    'ShippingRate',
    'Order', 'OrderItem', 'OrderSummary', 'ShippingAddress', 'CheckoutRequest',
    'Cart', 'CartItem', 'CartItemInput', 'Wishlist',
    'UserProfile', 'LoginRequest', 'RegisterRequest',
]
