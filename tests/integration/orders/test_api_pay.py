"""Integration tests for POST /orders/{id}/pay/."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.models import Order

pytestmark = pytest.mark.integration


@pytest.fixture()
def order(order_service, make_product):
    milk = make_product("Milk", 10)
    return order_service.create_order(
        CreateOrderDTO(items=[CreateOrderItemDTO(product_id=milk.id, quantity=4)])
    )


def _pay_url(order_id) -> str:
    return f"/api/v1/orders/{order_id}/pay/"


class TestPayOrder:
    def test_first_payment_succeeds(self, auth_client, order):
        response = auth_client.post(_pay_url(order.id))

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(order.id)
        assert data["paid"] is True
        assert data["items"][0]["quantity"] == 4
        assert Order.objects.get(id=order.id).paid is True

    def test_second_payment_conflicts(self, auth_client, order):
        auth_client.post(_pay_url(order.id))

        response = auth_client.post(_pay_url(order.id))

        assert response.status_code == 409
        assert response.json() == {"detail": f"Order with ID {order.id} already paid"}
        assert Order.objects.get(id=order.id).paid is True

    def test_unknown_order_returns_404(self, auth_client):
        order_id = uuid4()
        response = auth_client.post(_pay_url(order_id))

        assert response.status_code == 404
        assert response.json() == {"detail": f"Order with ID {order_id} not found"}

    def test_requires_authentication(self, api_client, order):
        response = api_client.post(_pay_url(order.id))
        assert response.status_code == 401
        assert Order.objects.get(id=order.id).paid is False

    def test_get_not_allowed(self, auth_client, order):
        response = auth_client.get(_pay_url(order.id))
        assert response.status_code == 405
