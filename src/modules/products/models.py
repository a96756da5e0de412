"""Product model: the stock ledger.

Business rules implemented:
- ``stock_quantity`` can never be negative (unsigned column + CHECK).
- Stock is set when the product is registered; afterwards the only
  writer is the order service, which decrements it through
  ``IProductRepository.decrement_stock``.
"""

from __future__ import annotations

import structlog
from django.core.exceptions import ValidationError
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Product(BaseModel):
    """Product aggregate root."""

    name = models.CharField(max_length=255)
    stock_quantity = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock_quantity__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Stock arithmetic
    # ------------------------------------------------------------------

    def has_stock(self, quantity: int) -> bool:
        """Return ``True`` if *quantity* units can be taken from stock."""
        return self.stock_quantity >= quantity

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.name:
            self.name = self.name.strip()
        if not self.name:
            raise ValidationError({"name": "Name must not be empty."})
        if self.stock_quantity is not None and self.stock_quantity < 0:
            raise ValidationError(
                {"stock_quantity": "Stock quantity cannot be negative."}
            )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product.registered",
                product_id=str(self.id),
                name=self.name,
                stock_quantity=self.stock_quantity,
            )

    def __str__(self) -> str:
        return f"{self.name} ({self.stock_quantity} in stock)"
