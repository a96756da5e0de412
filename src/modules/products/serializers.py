"""Product DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product

# Upper bound of PositiveIntegerField on every supported backend.
MAX_STOCK_QUANTITY = 2147483647


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "stock_quantity",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CreateProductSerializer(serializers.Serializer):
    """Validates the product registration payload."""

    name = serializers.CharField(max_length=255)
    stock_quantity = serializers.IntegerField(
        min_value=0, max_value=MAX_STOCK_QUANTITY, default=0
    )
