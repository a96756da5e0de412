"""Integration tests for the order read endpoints.

Covers:
- GET /orders/ (all, ``?paid=`` filter, pagination envelope).
- GET /orders/{id}/ (found, not found, malformed id).
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


@pytest.fixture()
def orders(order_service, make_product):
    milk = make_product("Milk", 50)
    created = [
        order_service.create_order(
            CreateOrderDTO(items=[CreateOrderItemDTO(product_id=milk.id, quantity=n)])
        )
        for n in (1, 2, 3)
    ]
    order_service.pay_order(str(created[0].id))
    return created


class TestListOrders:
    def test_lists_all_newest_first(self, auth_client, orders):
        response = auth_client.get(URL)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert [o["id"] for o in data["results"]] == [
            str(o.id) for o in reversed(orders)
        ]

    def test_results_carry_items(self, auth_client, orders):
        data = auth_client.get(URL).json()
        last = data["results"][-1]
        assert last["items"][0]["quantity"] == 1
        assert last["items"][0]["product"]["name"] == "Milk"

    @pytest.mark.parametrize("raw", ["true", "True", "1"])
    def test_filter_paid(self, auth_client, orders, raw):
        data = auth_client.get(URL, {"paid": raw}).json()
        assert [o["id"] for o in data["results"]] == [str(orders[0].id)]
        assert data["results"][0]["paid"] is True

    def test_filter_unpaid(self, auth_client, orders):
        data = auth_client.get(URL, {"paid": "false"}).json()
        assert {o["id"] for o in data["results"]} == {
            str(orders[1].id),
            str(orders[2].id),
        }

    def test_invalid_paid_value_returns_400(self, auth_client, orders):
        response = auth_client.get(URL, {"paid": "maybe"})
        assert response.status_code == 400

    def test_pagination(self, auth_client, orders):
        data = auth_client.get(URL, {"page_size": 2}).json()
        assert data["count"] == 3
        assert len(data["results"]) == 2
        assert data["next"] is not None
        assert data["previous"] is None

    def test_empty(self, auth_client):
        data = auth_client.get(URL).json()
        assert data["count"] == 0
        assert data["results"] == []


class TestRetrieveOrder:
    def test_found(self, auth_client, orders):
        order = orders[1]
        response = auth_client.get(f"{URL}{order.id}/")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(order.id)
        assert data["paid"] is False
        assert data["items"][0]["quantity"] == 2

    def test_not_found(self, auth_client):
        response = auth_client.get(f"{URL}{uuid4()}/")
        assert response.status_code == 404
        assert response.json() == {"detail": "Order not found."}

    def test_malformed_id_is_not_found(self, auth_client):
        response = auth_client.get(f"{URL}not-a-uuid/")
        assert response.status_code == 404
