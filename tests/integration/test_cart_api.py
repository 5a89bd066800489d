"""
Integration tests for the cart HTTP endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from cartstore.exceptions import ConfigurationError
from cartstore.main import create_app
from cartstore.repositories.cart import CartRepository
from cartstore.utils.config import load_settings

@pytest.fixture
def client(descriptor):
    """Test client serving a repository on the SQLite cart table."""
    app = create_app(CartRepository(descriptor, "cart_items"))
    with TestClient(app) as client:
        yield client

def test_add_and_get_cart(client):
    assert client.post("/api/carts/u1/items", json={"product_id": "p1", "quantity": 2}).status_code == 201
    assert client.post("/api/carts/u1/items", json={"product_id": "p1", "quantity": 3}).status_code == 201

    response = client.get("/api/carts/u1")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {"user_id": "u1", "items": [{"product_id": "p1", "quantity": 5}]},
    }

def test_empty_cart(client):
    client.post("/api/carts/u1/items", json={"product_id": "p1", "quantity": 2})

    assert client.delete("/api/carts/u1").status_code == 200
    assert client.delete("/api/carts/u1").status_code == 200

    data = client.get("/api/carts/u1").json()["data"]
    assert data == {"user_id": "u1", "items": []}

def test_negative_quantity_is_rejected(client):
    response = client.post("/api/carts/u1/items", json={"product_id": "p1", "quantity": -1})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "validation_error"

def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}

def test_health_unreachable(unreachable_descriptor):
    app = create_app(CartRepository(unreachable_descriptor, "cart_items"))
    with TestClient(app) as client:
        response = client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy"}

def test_storage_failure_is_precondition_failed(descriptor):
    app = create_app(CartRepository(descriptor, "no_such_table"))
    with TestClient(app) as client:
        response = client.get("/api/carts/u1")

    assert response.status_code == 412
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "storage_precondition_failed"
    assert "no_such_table" in body["error"]["message"]

def test_startup_fails_without_reachable_host(closed_port):
    settings = load_settings(
        _env_file=None,
        POSTGRES_DATABASE_NAME="carts",
        PGEDGE_HOSTS_LIST=f"127.0.0.1:{closed_port}",
        POSTGRES_USERNAME="cartuser",
        POSTGRES_PASSWORD="s3cr3t-pw",
        POSTGRES_TABLE_NAME="cart_items",
        CART_PROBE_ATTEMPTS=1,
        CART_PROBE_TIMEOUT=2.0,
    )
    app = create_app(settings=settings)

    with pytest.raises(ConfigurationError):
        with TestClient(app):
            pass
