"""Storefront shipping API tests"""

from decimal import Decimal


class TestShippingMethods:
    def test_methods_sorted_by_provider(self, client):
        methods = client.get("/api/shipping/methods").json()
        assert [m["provider"] for m in methods] == ["FedEx", "UPS", "USPS"]

    def test_deactivated_method_hidden(self, app, client):
        app.state.shipping_db.deactivate_method("ship-ups-ground")
        ids = [m["id"] for m in client.get("/api/shipping/methods").json()]
        assert "ship-ups-ground" not in ids


class TestCalculate:
    """Quotes without changing the cart selection"""

    def test_breakdown_by_seller(self, client, cart_id):
        client.post(f"/api/cart/{cart_id}/items", json={"product_id": "lst-001", "quantity": 3})
        client.post(f"/api/cart/{cart_id}/items", json={"product_id": "lst-007"})

        response = client.post(
            "/api/shipping/calculate",
            json={"cart_id": cart_id, "shipping_method_id": "ship-ups-ground"},
        )
        assert response.status_code == 200

        quote = response.json()
        assert quote["provider"] == "UPS"
        assert quote["service"] == "Ground"
        assert quote["estimated_delivery_days"] == 2
        assert quote["cost"] == "17.50"
        assert [(b["seller_id"], b["shipping_cost"]) for b in quote["breakdown"]] == [
            ("seller-001", "12.50"),
            ("seller-004", "5.00"),
        ]

        cart = client.get(f"/api/cart/{cart_id}").json()["cart"]
        assert cart["shipping_method"] is None

    def test_defaults_to_selected_method(self, client, cart_id):
        client.post(f"/api/cart/{cart_id}/items", json={"product_id": "lst-003"})
        client.put(f"/api/cart/{cart_id}/shipping", json={"shipping_method_id": "ship-fedex-overnight"})

        quote = client.post("/api/shipping/calculate", json={"cart_id": cart_id}).json()

        assert quote["shipping_method_id"] == "ship-fedex-overnight"
        assert quote["breakdown"][0]["free_shipping"] is True
        assert Decimal(quote["cost"]) == 0

    def test_empty_cart(self, client, cart_id):
        response = client.post(
            "/api/shipping/calculate",
            json={"cart_id": cart_id, "shipping_method_id": "ship-ups-ground"},
        )
        assert response.status_code == 400

    def test_no_method(self, client, cart_id):
        client.post(f"/api/cart/{cart_id}/items", json={"product_id": "lst-003"})
        response = client.post("/api/shipping/calculate", json={"cart_id": cart_id})
        assert response.status_code == 400

    def test_unknown_cart(self, client):
        response = client.post("/api/shipping/calculate", json={"cart_id": "nope"})
        assert response.status_code == 404


class TestSellerPolicies:
    def test_get_policy(self, client):
        policy = client.get("/api/shipping/policy/seller-002").json()
        assert policy["offers_free_shipping"] is True
        assert policy["shipping_policy"].startswith("Free shipping")

    def test_unknown_seller(self, client):
        assert client.get("/api/shipping/policy/seller-404").status_code == 404

    def test_update_policy_changes_quotes(self, client, cart_id):
        client.post(f"/api/cart/{cart_id}/items", json={"product_id": "lst-008"})
        client.put(f"/api/cart/{cart_id}/shipping", json={"shipping_method_id": "ship-usps-priority"})

        response = client.put(
            "/api/shipping/policy/seller-004",
            json={"standard_shipping_fee": "2.50"},
        )
        assert response.status_code == 200

        quote = client.post("/api/shipping/calculate", json={"cart_id": cart_id}).json()
        assert quote["cost"] == "2.50"

    def test_negative_fee_rejected(self, client):
        response = client.put(
            "/api/shipping/policy/seller-001",
            json={"standard_shipping_fee": "-1"},
        )
        assert response.status_code == 422
