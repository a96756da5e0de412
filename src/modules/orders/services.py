"""Order service layer (Use Cases).

Orchestrates order creation, payment and the order read paths.
All write operations are atomic: the service defines the unit-of-work
boundary, and every domain exception is raised inside it so nothing
done so far in the call survives.

Business rules enforced:
- An order is created only if every line item fits the product's stock
  at the moment it is processed; any failure aborts the whole order.
- Stock is decremented per line item, in request order, through the
  Product Store's conditional decrement (never goes negative).
- An order is paid at most once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import transaction

from modules.orders.dtos import OrderLineItemViewDTO, OrderViewDTO
from modules.orders.exceptions import (
    InsufficientStock,
    OrderAlreadyPaid,
    OrderNotFound,
    ProductNotFound,
)
from modules.products.dtos import ProductOutputDTO

if TYPE_CHECKING:
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.repositories.interfaces import (
        IOrderLineItemRepository,
        IOrderRepository,
    )
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        line_item_repository: IOrderLineItemRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._order_repo = order_repository
        self._line_item_repo = line_item_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> OrderViewDTO:
        """Create an order, reserving stock for each line item.

        Steps:
        1. Persist the order shell (``created_at`` is server-assigned).
        2. For each item, in the order given:
           - Lock and load the product.
           - Validate sufficient stock.
           - Decrement stock (conditional update) and reload the product.
           - Persist the line item.
        3. Return the order view built from the processed items.

        Raises:
            ProductNotFound: a referenced product does not exist.
            InsufficientStock: requested quantity exceeds available stock.
        """
        log = logger.bind(item_count=len(dto.items))
        log.info("order.creation_started")

        order = self._order_repo.create()
        log = log.bind(order_id=str(order.id))

        view_items: List[OrderLineItemViewDTO] = []
        for position, item_dto in enumerate(dto.items):
            product = self._product_repo.get_for_update(str(item_dto.product_id))
            if not product:
                log.warning(
                    "order.product_not_found",
                    product_id=str(item_dto.product_id),
                )
                raise ProductNotFound("Product not found")

            if not product.has_stock(item_dto.quantity):
                log.warning(
                    "order.insufficient_stock",
                    product_id=str(product.id),
                    available=product.stock_quantity,
                    requested=item_dto.quantity,
                )
                raise InsufficientStock(f"Insufficient stock: {product.name}")

            if not self._product_repo.decrement_stock(
                str(product.id), item_dto.quantity
            ):
                log.warning(
                    "order.stock_changed_concurrently",
                    product_id=str(product.id),
                    requested=item_dto.quantity,
                )
                raise InsufficientStock(f"Insufficient stock: {product.name}")
            self._product_repo.refresh(product)

            log.info(
                "order.stock_reserved",
                product_id=str(product.id),
                quantity=item_dto.quantity,
                remaining=product.stock_quantity,
            )

            self._line_item_repo.create(
                order=order,
                product=product,
                quantity=item_dto.quantity,
                position=position,
            )
            view_items.append(
                OrderLineItemViewDTO(
                    product=ProductOutputDTO.from_entity(product),
                    quantity=item_dto.quantity,
                )
            )

        log.info("order.created")
        return OrderViewDTO(
            id=order.id,
            created_at=order.created_at,
            paid=order.paid,
            items=view_items,
        )

    @transaction.atomic
    def pay_order(self, order_id: str) -> OrderViewDTO:
        """Mark an unpaid order as paid.

        Locks the order row first so two concurrent payments cannot
        both pass the guard.  Line items are left untouched.

        Raises:
            OrderNotFound: order does not exist.
            OrderAlreadyPaid: the order was paid before.
        """
        log = logger.bind(order_id=str(order_id))
        log.info("order.payment_started")

        order = self._order_repo.get_for_update(str(order_id))
        if not order:
            log.warning("order.payment_order_not_found")
            raise OrderNotFound(f"Order with ID {order_id} not found")

        if order.paid:
            log.warning("order.already_paid")
            raise OrderAlreadyPaid(f"Order with ID {order_id} already paid")

        order.paid = True
        self._order_repo.save(order, update_fields=["paid"])

        log.info("order.paid")
        return OrderViewDTO.from_entity(order)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all_orders(self) -> List[OrderViewDTO]:
        """Return every order, newest first."""
        logger.info("order.list_all")
        return [OrderViewDTO.from_entity(o) for o in self._order_repo.list()]

    def get_order(self, order_id: str) -> OrderViewDTO:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(str(order_id))
        if not order:
            logger.warning("order.not_found", order_id=str(order_id))
            raise OrderNotFound("Order not found")
        return OrderViewDTO.from_entity(order)

    def get_orders_by_paid_status(self, paid: bool) -> List[OrderViewDTO]:
        """Return the orders whose ``paid`` flag equals *paid*."""
        logger.info("order.list_by_paid_status", paid=paid)
        orders = self._order_repo.list({"paid": paid})
        return [OrderViewDTO.from_entity(o) for o in orders]
