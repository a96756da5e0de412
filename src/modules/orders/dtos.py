"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line item.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``OrderLineItemViewDTO``: a product snapshot paired with its quantity.
- ``OrderViewDTO``: the order read model (order + resolved line items).
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.products.dtos import ProductOutputDTO

if TYPE_CHECKING:
    from modules.orders.models import Order


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single line item in a creation request."""

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Items keep the order they were sent in.  The same product may appear
    more than once; each occurrence becomes its own line item.
    """

    model_config = ConfigDict(frozen=True)

    items: List[CreateOrderItemDTO]

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderLineItemViewDTO(BaseModel):
    """Immutable DTO for a resolved line item."""

    model_config = ConfigDict(frozen=True)

    product: ProductOutputDTO
    quantity: int


class OrderViewDTO(BaseModel):
    """Immutable read model for an order.

    A projection of the Order aggregate; it is never persisted.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    created_at: datetime
    paid: bool
    items: List[OrderLineItemViewDTO]

    @classmethod
    def from_entity(cls, order: Order) -> OrderViewDTO:
        """Build the view from an Order model instance.

        Assumes ``items__product`` is prefetched.
        """
        items = [
            OrderLineItemViewDTO(
                product=ProductOutputDTO.from_entity(item.product),
                quantity=item.quantity,
            )
            for item in order.items.all()
        ]
        return cls(
            id=order.id,
            created_at=order.created_at,
            paid=order.paid,
            items=items,
        )
