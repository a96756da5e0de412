"""Django ORM implementation of the Order repositories.

Reads of the Order aggregate use ``prefetch_related("items__product")``
so line items and their products arrive in two batched queries
regardless of the number of orders (no N+1).

Concurrency control on payment uses ``select_for_update()`` (no
``version`` field exists on the model).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.orders.models import Order, OrderLineItem
from modules.orders.repositories.interfaces import (
    IOrderLineItemRepository,
    IOrderRepository,
)
from modules.products.models import Product

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    @transaction.atomic
    def create(self) -> Order:
        """Insert an unpaid order; ``created_at`` is stamped by the database layer."""
        order = Order(paid=False)
        order.save()
        logger.info("order.persisted", order_id=str(order.id))
        return order

    @transaction.atomic
    def save(
        self, entity: Order, update_fields: Optional[Sequence[str]] = None
    ) -> Order:
        """Persist (create or update) an order."""
        if update_fields is not None:
            entity.save(update_fields=list(update_fields))
        else:
            entity.save()
        logger.info("order.saved", order_id=str(entity.id), paid=entity.paid)
        return entity

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with eager-loaded line items.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._aggregate_queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE).

        Eager-loads line items so the caller can build the view while the
        row is locked.  Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._aggregate_queryset().select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders with optional filters and eager-loaded line items.

        Supported filter keys:
        - ``paid``
        """
        queryset = self._aggregate_queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @staticmethod
    def _aggregate_queryset():
        return Order.objects.prefetch_related("items__product")


class OrderLineItemDjangoRepository(IOrderLineItemRepository):
    """Concrete OrderLineItem repository backed by Django ORM."""

    @transaction.atomic
    def create(
        self,
        order: Order,
        product: Product,
        quantity: int,
        position: int,
    ) -> OrderLineItem:
        item = OrderLineItem(
            order=order,
            product=product,
            quantity=quantity,
            position=position,
        )
        item.save()
        logger.info(
            "order.line_item_persisted",
            order_id=str(order.id),
            product_id=str(product.id),
            quantity=quantity,
            position=position,
        )
        return item
