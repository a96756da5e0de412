import pytest

from django.contrib.auth import get_user_model
from django.core.cache import cache

from rest_framework.test import APIClient

from modules.products.models import Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    user = get_user_model().objects.create_user(
        username="storeclerk", password="testpass123"
    )
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def make_product():
    """Factory for persisted products: ``make_product("Milk", 10)``."""

    def _make(name: str = "Whole Milk 1L", stock_quantity: int = 10) -> Product:
        return Product.objects.create(name=name, stock_quantity=stock_quantity)

    return _make
