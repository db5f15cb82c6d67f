"""Storefront checkout API tests"""

from decimal import Decimal

import pytest

ADDRESS = {
    "name": "Ada Buyer",
    "street": "1 Main St",
    "city": "Albany",
    "state": "NY",
    "postal_code": "12207",
    "country": "US",
    "email": "ada@example.com",
    "phone": "555-0100",
}


@pytest.fixture
def ready_cart(client, cart_id):
    """Two prints from a free-shipping seller, shipped by USPS"""
    client.post(f"/api/cart/{cart_id}/items", json={"product_id": "lst-003", "quantity": 2})
    client.put(f"/api/cart/{cart_id}/shipping", json={"shipping_method_id": "ship-usps-priority"})
    return cart_id


def checkout(client, cart_id, **overrides):
    body = {"cart_id": cart_id, "shipping_address": ADDRESS, **overrides}
    return client.post("/api/checkout", json=body)


class TestCheckout:
    """Successful checkout"""

    def test_order_priced_for_destination(self, client, ready_cart):
        response = checkout(client, ready_cart)
        assert response.status_code == 200

        body = response.json()
        assert body["success"] is True
        order = body["order"]
        assert order["subtotal"] == "70.00"
        assert order["tax_rate"] == "0.04"
        assert order["tax"] == "2.80"
        assert order["shipping_method_id"] == "ship-usps-priority"
        assert order["shipping_cost"] == "0.00"
        assert order["total"] == "72.80"
        assert order["payment_id"].startswith("pi_")
        assert order["items"][0]["total_price"] == "70.00"

    def test_payment_intent_amount_in_cents(self, client, ready_cart):
        body = checkout(client, ready_cart).json()

        intent = client.get(f"/api/checkout/payments/{body['payment_id']}").json()
        assert intent["amount"] == 7280
        assert intent["currency"] == "usd"
        assert intent["status"] == "succeeded"
        assert body["order"]["payment_id"] == body["payment_id"]

    def test_cart_cleared_and_stock_taken(self, client, ready_cart):
        checkout(client, ready_cart)

        cart = client.get(f"/api/cart/{ready_cart}").json()["cart"]
        assert cart["items"] == []
        assert cart["shipping_method"] is None
        assert client.get("/api/products/lst-003").json()["stock_quantity"] == 23
        assert Decimal(cart["tax_rate"]) == Decimal("0.04")

    def test_guest_and_user_orders(self, client, ready_cart):
        guest = checkout(client, ready_cart).json()["order"]
        assert guest["user_id"] is None
        assert guest["guest_info"]["email"] == "ada@example.com"

        client.post(f"/api/cart/{ready_cart}/items", json={"product_id": "lst-008"})
        client.put(f"/api/cart/{ready_cart}/shipping", json={"shipping_method_id": "ship-usps-priority"})
        member = checkout(client, ready_cart, user_id="user-42").json()["order"]
        assert member["user_id"] == "user-42"
        assert member["guest_info"] is None

        mine = client.get("/api/checkout/orders", params={"user_id": "user-42"}).json()
        assert [o["order_id"] for o in mine] == [member["order_id"]]
        assert len(client.get("/api/checkout/orders").json()) == 2

    def test_get_order(self, client, ready_cart):
        order_id = checkout(client, ready_cart).json()["order"]["order_id"]

        assert client.get(f"/api/checkout/orders/{order_id}").json()["order_id"] == order_id
        assert client.get("/api/checkout/orders/ORD-NOPE").status_code == 404


class TestCheckoutFailures:
    """Checkout refuses or fails without touching the cart"""

    def test_declined_card_keeps_cart(self, client, ready_cart):
        before = client.get(f"/api/cart/{ready_cart}").json()["cart"]

        response = checkout(client, ready_cart, payment_method_id="pm_card_chargeDeclined")

        body = response.json()
        assert body["success"] is False
        assert body["error_message"] == "Your card was declined."

        # NY would have lowered the rate; the unpaid cart keeps its own
        after = client.get(f"/api/cart/{ready_cart}").json()["cart"]
        assert after == before
        assert Decimal(after["tax_rate"]) == Decimal("0.08")
        assert client.get("/api/products/lst-003").json()["stock_quantity"] == 25

    def test_declined_payment_is_recorded(self, client, ready_cart):
        body = checkout(client, ready_cart, payment_method_id="pm_card_chargeDeclined").json()

        intent = client.get(f"/api/checkout/payments/{body['payment_id']}").json()
        assert intent["status"] == "requires_payment_method"
        assert intent["error_message"] == "Your card was declined."
        assert client.get("/api/checkout/payments/pi_missing").status_code == 404

    def test_insufficient_stock_keeps_cart(self, app, client, ready_cart):
        before = client.get(f"/api/cart/{ready_cart}").json()["cart"]
        app.state.product_db.update_stock("lst-003", -24)

        response = checkout(client, ready_cart)

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Insufficient stock")
        assert client.get(f"/api/cart/{ready_cart}").json()["cart"] == before

    def test_empty_cart(self, client, cart_id):
        assert checkout(client, cart_id).status_code == 400

    def test_missing_shipping_method(self, client, cart_id):
        client.post(f"/api/cart/{cart_id}/items", json={"product_id": "lst-003"})

        response = checkout(client, cart_id)

        assert response.status_code == 400
        assert response.json()["detail"] == "Please select a shipping method"

    def test_stale_shipping_method(self, app, client, ready_cart):
        app.state.shipping_db.deactivate_method("ship-usps-priority")

        response = checkout(client, ready_cart)

        assert response.status_code == 409
        assert client.get(f"/api/cart/{ready_cart}").json()["cart"]["item_count"] == 2

    def test_incomplete_address(self, client, ready_cart):
        address = {**ADDRESS, "city": ""}
        response = client.post(
            "/api/checkout",
            json={"cart_id": ready_cart, "shipping_address": address},
        )
        assert response.status_code == 422

    def test_unknown_cart(self, client):
        assert checkout(client, "missing").status_code == 404

    def test_stock_sold_out_meanwhile(self, app, client, cart_id):
        client.post(f"/api/cart/{cart_id}/items", json={"product_id": "lst-004"})
        client.put(f"/api/cart/{cart_id}/shipping", json={"shipping_method_id": "ship-ups-ground"})
        app.state.product_db.update_stock("lst-004", -1)

        response = checkout(client, cart_id)

        assert response.status_code == 400
        assert "Insufficient stock" in response.json()["detail"]
