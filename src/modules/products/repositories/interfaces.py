"""Product repository interface (the Product Store).

Extends ``IRepository[Product]`` with the row-locking read and the
atomic conditional decrement used by the order service.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional["Product"]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE).

        Must be called inside a transaction.  Returns ``None`` if the
        product does not exist.
        """

    @abstractmethod
    def decrement_stock(self, id: str, quantity: int) -> bool:
        """Atomically take *quantity* units from a product's stock.

        Applies the change only if enough stock remains at write time.
        Returns ``False`` when no row was updated (missing product or
        insufficient stock), ``True`` otherwise.
        """

    @abstractmethod
    def refresh(self, entity: "Product") -> "Product":
        """Reload the columns ``decrement_stock`` writes into *entity*."""
