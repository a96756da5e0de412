"""Authentication on the API: JWT required everywhere except health and docs."""

from __future__ import annotations

import pytest
from django.contrib.auth import get_user_model

pytestmark = pytest.mark.integration

TOKEN_URL = "/api/v1/auth/token/"


@pytest.fixture()
def credentials():
    get_user_model().objects.create_user(username="cashier", password="testpass123")
    return {"username": "cashier", "password": "testpass123"}


def test_health_is_public(api_client):
    assert api_client.get("/health").status_code == 200


def test_schema_is_public(api_client):
    assert api_client.get("/api/schema/").status_code == 200


@pytest.mark.parametrize("url", ["/api/v1/orders/", "/api/v1/products/"])
def test_api_requires_token(api_client, url):
    response = api_client.get(url)
    assert response.status_code == 401


def test_invalid_token_is_rejected(api_client):
    api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-real-token")
    response = api_client.get("/api/v1/orders/")
    assert response.status_code == 401


def test_wrong_password_gets_no_token(api_client, credentials):
    response = api_client.post(
        TOKEN_URL,
        {"username": credentials["username"], "password": "nope"},
        format="json",
    )
    assert response.status_code == 401


def test_token_grants_access(api_client, credentials):
    response = api_client.post(TOKEN_URL, credentials, format="json")
    assert response.status_code == 200
    tokens = response.json()
    assert {"access", "refresh"} <= tokens.keys()

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
    response = api_client.get("/api/v1/orders/")

    assert response.status_code == 200
    assert response.json()["count"] == 0


def test_refresh_issues_new_access_token(api_client, credentials):
    refresh = api_client.post(TOKEN_URL, credentials, format="json").json()["refresh"]

    response = api_client.post(
        f"{TOKEN_URL}refresh/", {"refresh": refresh}, format="json"
    )

    assert response.status_code == 200
    assert "access" in response.json()
