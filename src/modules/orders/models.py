"""Order and OrderLineItem models.

Business rules implemented:
- ``created_at`` is stamped by the server at insert (inherited
  ``auto_now_add``); callers cannot influence it.
- ``paid`` starts ``False`` and flips to ``True`` at most once
  (guarded at service layer).
- An Order owns its line items: CASCADE on the order FK.
- A line item references a Product it does not own: PROTECT on the
  product FK keeps sold products from disappearing.
- Line item ``quantity`` is at least 1 and never changes after creation.
- ``position`` preserves the order in which items were requested.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Order(BaseModel):
    """Order aggregate root."""

    paid: models.BooleanField = models.BooleanField(default=False)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["paid"], name="orders_paid_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    def __str__(self) -> str:
        state = "paid" if self.paid else "unpaid"
        return f"Order {self.id} ({state})"


class OrderLineItem(BaseModel):
    """Line item linking an Order to a Product with a fixed quantity."""

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_line_items",
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )
    position: models.PositiveIntegerField = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "order_line_items"
        ordering = ["position"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_line_items_quantity_positive",
            ),
        ]

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})

    def __str__(self) -> str:
        return f"{self.product} x{self.quantity}"
