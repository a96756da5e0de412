"""Order domain exceptions.

Raised by the Service Layer when business rules are violated, always
from inside the atomic unit so the whole operation rolls back.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class OrderNotFound(Exception):
    """The requested order does not exist."""


class ProductNotFound(Exception):
    """A product referenced by an order line item does not exist."""


class InsufficientStock(Exception):
    """Requested quantity exceeds the product's available stock."""


class OrderAlreadyPaid(Exception):
    """Payment attempted on an order that is already paid.

    A state conflict, not a transient failure: retrying fails the same way.
    """
