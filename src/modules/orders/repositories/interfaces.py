"""Order repository interfaces (Order Store and OrderLineItem Store).

``IOrderRepository`` extends ``IRepository[Order]`` with the methods the
Order aggregate needs: creation, row-locked reads and aggregate reads
that bring the line items along.  ``IOrderLineItemRepository`` persists
line items; they are read back only as part of their Order.

The Service Layer depends exclusively on these contracts (DIP).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderLineItem
    from modules.products.models import Product


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def create(self) -> Order:
        """Persist a new unpaid order shell and return it with its id."""

    @abstractmethod
    def save(
        self, entity: Order, update_fields: Optional[Sequence[str]] = None
    ) -> Order:
        """Persist an order, optionally restricted to *update_fields*."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its line items and their products."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order holding a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders (newest first) with optional filters, e.g. ``{"paid": True}``."""


class IOrderLineItemRepository(ABC):
    """Repository contract for line items owned by an Order."""

    @abstractmethod
    def create(
        self,
        order: Order,
        product: Product,
        quantity: int,
        position: int,
    ) -> OrderLineItem:
        """Persist a line item attached to *order*."""
