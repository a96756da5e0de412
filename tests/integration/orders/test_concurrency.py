"""Concurrent order creation against the same product.

Needs a database with row locks and real concurrent connections; SQLite
serialises writers at the file level and is skipped.
"""

from __future__ import annotations

import threading

import pytest
from django.db import connection
from django.test import TransactionTestCase

from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import InsufficientStock, OrderAlreadyPaid
from modules.orders.models import Order
from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    OrderLineItemDjangoRepository,
)
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

pytestmark = pytest.mark.integration

WORKERS = 8


def _service() -> OrderService:
    return OrderService(
        order_repository=OrderDjangoRepository(),
        line_item_repository=OrderLineItemDjangoRepository(),
        product_repository=ProductDjangoRepository(),
    )


class ConcurrentOrderTests(TransactionTestCase):
    def setUp(self):
        if connection.vendor == "sqlite":
            self.skipTest("row-level locking needs a server database")

    def _run_concurrently(self, target) -> list:
        barrier = threading.Barrier(WORKERS)
        outcomes: list = []
        lock = threading.Lock()

        def worker():
            barrier.wait()
            try:
                result = target()
            except (InsufficientStock, OrderAlreadyPaid) as exc:
                result = exc
            finally:
                connection.close()
            with lock:
                outcomes.append(result)

        threads = [threading.Thread(target=worker) for _ in range(WORKERS)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return outcomes

    def test_stock_never_oversold(self):
        product = Product.objects.create(name="Last Loaves", stock_quantity=5)
        dto = CreateOrderDTO(
            items=[CreateOrderItemDTO(product_id=product.id, quantity=1)]
        )

        outcomes = self._run_concurrently(lambda: _service().create_order(dto))

        failures = [o for o in outcomes if isinstance(o, InsufficientStock)]
        assert len(outcomes) - len(failures) == 5
        assert len(failures) == WORKERS - 5
        product.refresh_from_db()
        assert product.stock_quantity == 0
        assert Order.objects.count() == 5

    def test_order_paid_exactly_once(self):
        product = Product.objects.create(name="Milk", stock_quantity=1)
        view = _service().create_order(
            CreateOrderDTO(
                items=[CreateOrderItemDTO(product_id=product.id, quantity=1)]
            )
        )

        outcomes = self._run_concurrently(lambda: _service().pay_order(str(view.id)))

        conflicts = [o for o in outcomes if isinstance(o, OrderAlreadyPaid)]
        assert len(conflicts) == WORKERS - 1
        assert Order.objects.get(id=view.id).paid is True
