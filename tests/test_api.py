"""Tests for API endpoints"""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from api.index import app
from storefront.auth import SESSION_COOKIE, SESSION_HEADER, create_web_session
from storefront.errors import (
    ERROR_PRODUCT_NOT_FOUND,
    ERROR_STORE_UNAVAILABLE,
    StoreUnavailableError,
)
from storefront.routers.deps import get_cart_store_lazy

GUEST_HEADERS = {SESSION_HEADER: "guest-session-1"}


@pytest.fixture
def client(store):
    """Test client wired to the in-memory cart store"""
    app.dependency_overrides[get_cart_store_lazy] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_headers():
    token = create_web_session("42", username="tester")
    return {**GUEST_HEADERS, "Authorization": f"Bearer {token}"}


def test_health_check(client):
    """Test health check endpoint"""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_get_empty_cart(client):
    response = client.get("/api/cart", headers=GUEST_HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["cart"]["items"] == []
    assert data["cart"]["quantity"] == 0
    assert data["totals"] == {"subtotal": 0.0, "tax": 0.0, "shipping": 4.99, "total": 4.99}


def test_new_guest_gets_session_cookie(client):
    response = client.get("/api/cart")

    assert response.status_code == 200
    assert response.cookies.get(SESSION_COOKIE)


def test_add_and_count(client):
    response = client.post(
        "/api/cart/add",
        json={"product_id": "prod-a", "quantity": 3, "variants": {"size": "M"}},
        headers=GUEST_HEADERS,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["cart"]["quantity"] == 3
    assert data["cart"]["items"][0]["variants"] == {"size": "M"}
    assert data["totals"] == {"subtotal": 60.0, "tax": 12.0, "shipping": 0.0, "total": 72.0}

    count = client.get("/api/cart/count", headers=GUEST_HEADERS)
    assert count.json() == {"count": 3}


def test_add_unknown_product_not_found(client):
    response = client.post(
        "/api/cart/add", json={"product_id": "does-not-exist"}, headers=GUEST_HEADERS
    )

    assert response.status_code == 404
    assert response.json()["detail"] == ERROR_PRODUCT_NOT_FOUND
    assert client.get("/api/cart/count", headers=GUEST_HEADERS).json() == {"count": 0}


def test_add_insufficient_stock(client):
    response = client.post(
        "/api/cart/add",
        json={"product_id": "prod-c", "quantity": 3},
        headers=GUEST_HEADERS,
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Insufficient stock for this product"


def test_add_rejects_zero_quantity(client):
    response = client.post(
        "/api/cart/add",
        json={"product_id": "prod-a", "quantity": 0},
        headers=GUEST_HEADERS,
    )

    assert response.status_code == 422


def test_update_missing_item(client):
    response = client.patch(
        "/api/cart/item",
        json={"product_id": "prod-a", "quantity": 2},
        headers=GUEST_HEADERS,
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Product not found in cart"


def test_update_remove_and_clear(client):
    client.post("/api/cart/add", json={"product_id": "prod-a", "quantity": 1}, headers=GUEST_HEADERS)
    client.post("/api/cart/add", json={"product_id": "prod-b", "quantity": 1}, headers=GUEST_HEADERS)

    updated = client.patch(
        "/api/cart/item",
        json={"product_id": "prod-a", "quantity": 4},
        headers=GUEST_HEADERS,
    )
    assert updated.json()["cart"]["quantity"] == 5

    removed = client.delete("/api/cart/item", params={"product_id": "prod-b"}, headers=GUEST_HEADERS)
    assert removed.json()["cart"]["quantity"] == 4

    last = client.delete("/api/cart/last", headers=GUEST_HEADERS)
    assert last.json()["cart"]["items"] == []

    client.post("/api/cart/add", json={"product_id": "prod-a", "quantity": 1}, headers=GUEST_HEADERS)
    cleared = client.post("/api/cart/clear", headers=GUEST_HEADERS)
    assert cleared.json()["cart"]["quantity"] == 0


def test_merge_after_login(client, user_headers):
    client.post("/api/cart/add", json={"product_id": "prod-a", "quantity": 2}, headers=GUEST_HEADERS)

    response = client.post("/api/cart/merge", headers=user_headers)

    assert response.status_code == 200
    assert response.json()["cart"]["quantity"] == 2

    # The guest cart is gone, the user cart stays with the user
    assert client.get("/api/cart/count", headers=GUEST_HEADERS).json() == {"count": 0}
    assert client.get("/api/cart/count", headers=user_headers).json() == {"count": 2}


def test_merge_requires_login(client):
    response = client.post("/api/cart/merge", headers=GUEST_HEADERS)

    assert response.status_code == 401


def test_invalid_bearer_token(client):
    response = client.get("/api/cart", headers={"Authorization": "Bearer not-a-session"})

    assert response.status_code == 401


def test_store_unavailable_maps_to_503(client, store):
    store.get_cart = AsyncMock(side_effect=StoreUnavailableError(ERROR_STORE_UNAVAILABLE))

    response = client.get("/api/cart", headers=GUEST_HEADERS)

    assert response.status_code == 503
    assert response.json()["detail"] == ERROR_STORE_UNAVAILABLE
