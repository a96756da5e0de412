"""Order DRF serializers for API input.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py`` and returns ``OrderViewDTO`` read models.
"""

from __future__ import annotations

from rest_framework import serializers


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single item in an order creation request."""

    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    items = CreateOrderItemSerializer(many=True, allow_empty=False)


class OrderListQuerySerializer(serializers.Serializer):
    """Validates the query string of the order list endpoint."""

    paid = serializers.BooleanField(required=False, allow_null=True, default=None)
