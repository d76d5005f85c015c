"""
API test fixtures

TestClient over the real app with the auth and cart-store dependencies
overridden; services are patched per test.
"""
import pytest
from fastapi.testclient import TestClient

from storefront.core.auth import get_current_user
from storefront.domain.user import UserProfile
from storefront.main import app
from storefront.services.cart_service import CartStore, get_cart_store


@pytest.fixture
def cart_store():
    store = CartStore()
    app.dependency_overrides[get_cart_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_cart_store, None)


@pytest.fixture
def client(cart_store):
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_current_user, None)


@pytest.fixture
def login_as():
    """Sign requests in as a user with the given role"""
    def _login(role: str = "consumer", user_id: str = "user-1") -> UserProfile:
        user = UserProfile(id=user_id, email=f"{role}@example.com", name=role.title(), role=role)
        app.dependency_overrides[get_current_user] = lambda: user
        return user
    return _login
