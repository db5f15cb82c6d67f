"""Shared fixtures for cart engine and storefront tests"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from cart import CartEngine, CartLineItemInput, MemoryCartStorage, ShippingMethod


def make_item(item_id="1", unit_price="10.00", quantity=1, seller_id="seller-1", **kwargs):
    """Build a CartLineItemInput with sensible defaults"""
    return CartLineItemInput(
        id=item_id,
        title=kwargs.pop("title", f"Item {item_id}"),
        unit_price=unit_price,
        quantity=quantity,
        seller_id=seller_id,
        **kwargs,
    )


@pytest.fixture
def storage():
    return MemoryCartStorage()


@pytest.fixture
def engine(storage):
    return CartEngine(storage=storage, key="cart:test")


@pytest.fixture
def ground():
    return ShippingMethod(
        id="ship-ground",
        display_name="Ground",
        provider="USPS",
        base_cost=Decimal("5.00"),
    )


@pytest.fixture
def settings():
    return Settings(
        default_tax_rate=Decimal("0.08"),
        cart_storage_dir=None,
        auto_select_shipping=False,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def cart_id(client):
    response = client.post("/api/cart")
    assert response.status_code == 200
    return response.json()["cart"]["cart_id"]
