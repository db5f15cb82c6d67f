"""Storefront catalog API tests"""


class TestProducts:
    def test_search_by_seller(self, client):
        body = client.get("/api/products", params={"seller_id": "seller-002"}).json()
        assert body["total"] == 2
        assert {p["id"] for p in body["products"]} == {"lst-003", "lst-004"}

    def test_search_by_text_and_price(self, client):
        body = client.get("/api/products", params={"query": "linocut", "max_price": "40"}).json()
        assert [p["id"] for p in body["products"]] == ["lst-003"]

    def test_pagination(self, client):
        body = client.get("/api/products", params={"limit": 3, "offset": 6}).json()
        assert body["total"] == 8
        assert [p["id"] for p in body["products"]] == ["lst-007", "lst-008"]

    def test_get_product(self, client):
        product = client.get("/api/products/lst-002").json()
        assert product["price"] == "64.50"
        assert product["seller_id"] == "seller-001"

    def test_unknown_product(self, client):
        assert client.get("/api/products/lst-000").status_code == 404

    def test_categories(self, client):
        assert "jewelry" in client.get("/api/products/categories").json()
