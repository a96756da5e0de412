"""Order repositories package."""

from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    OrderLineItemDjangoRepository,
)
from modules.orders.repositories.interfaces import (
    IOrderLineItemRepository,
    IOrderRepository,
)

__all__ = [
    "IOrderLineItemRepository",
    "IOrderRepository",
    "OrderDjangoRepository",
    "OrderLineItemDjangoRepository",
]
