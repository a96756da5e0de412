"""Unit tests for the Product model."""

from __future__ import annotations

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from modules.products.models import Product

pytestmark = pytest.mark.unit


class TestProductDefaults:
    def test_stock_defaults_to_zero(self):
        product = Product.objects.create(name="Sourdough Bread")
        assert product.stock_quantity == 0

    def test_id_is_uuid7(self):
        product = Product.objects.create(name="Sourdough Bread")
        assert product.id.version == 7

    def test_timestamps_are_set(self):
        product = Product.objects.create(name="Sourdough Bread")
        assert product.created_at is not None
        assert product.updated_at is not None

    def test_str_shows_name_and_stock(self):
        product = Product(name="Bananas 1kg", stock_quantity=3)
        assert str(product) == "Bananas 1kg (3 in stock)"


class TestHasStock:
    @pytest.mark.parametrize(
        "stock, requested, expected",
        [(10, 4, True), (6, 6, True), (6, 10, False), (0, 1, False)],
    )
    def test_has_stock(self, stock, requested, expected):
        assert Product(name="Milk", stock_quantity=stock).has_stock(requested) is expected


class TestProductValidation:
    def test_blank_name_rejected(self):
        product = Product(name="   ", stock_quantity=1)
        with pytest.raises(ValidationError):
            product.full_clean()

    def test_name_is_stripped(self):
        product = Product(name="  Cheddar 200g  ", stock_quantity=1)
        product.full_clean()
        assert product.name == "Cheddar 200g"

    def test_negative_stock_rejected_by_clean(self):
        product = Product(name="Cheddar 200g", stock_quantity=-1)
        with pytest.raises(ValidationError):
            product.full_clean()

    def test_negative_stock_rejected_by_database(self):
        product = Product.objects.create(name="Cheddar 200g", stock_quantity=1)
        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.filter(id=product.id).update(stock_quantity=-1)


class TestProductOrdering:
    def test_default_ordering_is_by_name(self):
        Product.objects.create(name="Yoghurt")
        Product.objects.create(name="Apples")
        names = list(Product.objects.values_list("name", flat=True))
        assert names == ["Apples", "Yoghurt"]
