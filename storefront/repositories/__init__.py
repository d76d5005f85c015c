"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from business logic.
"""
from storefront.repositories.product_repository import ProductRepository
from storefront.repositories.category_repository import CategoryRepository
from storefront.repositories.store_repository import StoreRepository
from storefront.repositories.shipping_repository import ShippingRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.profile_repository import ProfileRepository
from storefront.repositories.import_job_repository import ImportJobRepository

__all__ = [
    'ProductRepository',
    'CategoryRepository',
    'StoreRepository',
    'ShippingRepository',
    'OrderRepository',
    'ProfileRepository',
    'ImportJobRepository',
]
