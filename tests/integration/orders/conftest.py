import pytest

from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    OrderLineItemDjangoRepository,
)
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository


@pytest.fixture()
def order_service():
    """OrderService wired to the Django repositories."""
    return OrderService(
        order_repository=OrderDjangoRepository(),
        line_item_repository=OrderLineItemDjangoRepository(),
        product_repository=ProductDjangoRepository(),
    )
