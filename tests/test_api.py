"""End-to-end tests through the HTTP API."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from cafe_pos.core.config import Settings
from cafe_pos.main import create_app

from conftest import FakeRemoteBackend

TEST_CONFIG = Settings(GEMINI_API_KEY=None, LOG_JSON=False, LOG_LEVEL="WARNING")


def _client(remote_transport=None, insight_transport=None, config=TEST_CONFIG) -> TestClient:
    bind = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    app = create_app(
        config=config,
        bind=bind,
        remote_transport=remote_transport,
        insight_transport=insight_transport,
    )
    return TestClient(app)


@pytest.fixture
def client():
    with _client() as c:
        yield c


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.json() == {"status": "ok", "cloud": False}


class TestProducts:
    """Inventory editor endpoints."""

    def test_default_catalog(self, client):
        response = client.get("/api/v1/products")

        assert response.status_code == 200
        assert len(response.json()) == 8

    def test_filter_and_categories(self, client):
        assert [p["name"] for p in client.get("/api/v1/products", params={"q": "tira"}).json()] == ["Tiramisu"]
        assert len(client.get("/api/v1/products", params={"category": "Dessert"}).json()) == 2
        assert client.get("/api/v1/products/categories").json() == {
            "categories": ["All", "Drinks", "Bakery", "Dessert"]
        }

    def test_create_update_delete(self, client):
        created = client.post("/api/v1/products", json={"name": "Mocha", "price": 24, "cost": 8, "category": "Drinks"})
        assert created.status_code == 201
        product_id = created.json()["id"]
        assert product_id

        updated = client.put(f"/api/v1/products/{product_id}", json={"name": "Mocha", "price": 26, "cost": 8})
        assert updated.json()["price"] == 26

        assert client.delete(f"/api/v1/products/{product_id}").status_code == 204
        assert all(p["id"] != product_id for p in client.get("/api/v1/products").json())

    def test_invalid_product_rejected(self, client):
        response = client.post("/api/v1/products", json={"name": "", "price": -1})
        assert response.status_code == 422


class TestCashier:
    """Cart and checkout endpoints."""

    def test_latte_example(self, client):
        client.post("/api/v1/cart/items", json={"productId": "1"})
        cart = client.post("/api/v1/cart/items", json={"productId": "1"}).json()
        assert [(l["id"], l["quantity"]) for l in cart["lines"]] == [("1", 2)]
        assert cart["total"] == 44

        result = client.post("/api/v1/cart/checkout", json={"paymentMethod": "cash"}).json()

        txn = result["transaction"]
        assert txn["totalAmount"] == 44.0
        assert txn["totalProfit"] == 32.0
        assert txn["paymentMethod"] == "cash"
        assert result["cart"]["lines"] == []
        assert len(client.get("/api/v1/transactions").json()) == 1

    def test_adjust_removes_line(self, client):
        client.post("/api/v1/cart/items", json={"productId": "1"})
        client.post("/api/v1/cart/items", json={"productId": "1"})

        cart = client.patch("/api/v1/cart/items/1", json={"delta": -5}).json()

        assert cart["lines"] == []
        assert cart["itemCount"] == 0

    def test_empty_checkout_ignored(self, client):
        result = client.post("/api/v1/cart/checkout", json={"paymentMethod": "card"}).json()

        assert result["transaction"] is None
        assert client.get("/api/v1/transactions").json() == []

    def test_unknown_product(self, client):
        response = client.post("/api/v1/cart/items", json={"productId": "nope"})
        assert response.status_code == 404

    def test_unknown_payment_method(self, client):
        client.post("/api/v1/cart/items", json={"productId": "1"})
        response = client.post("/api/v1/cart/checkout", json={"paymentMethod": "cheque"})
        assert response.status_code == 422

    def test_catalog_edit_does_not_change_history(self, client):
        client.post("/api/v1/cart/items", json={"productId": "1"})
        client.post("/api/v1/cart/checkout", json={"paymentMethod": "qr"})

        client.put("/api/v1/products/1", json={"name": "Latte", "price": 99, "cost": 50})

        txn = client.get("/api/v1/transactions").json()[0]
        assert txn["items"][0]["price"] == 22
        assert txn["totalAmount"] == 22


class TestHistoryAndStats:
    def test_export_download(self, client):
        client.post("/api/v1/cart/items", json={"productId": "2"})
        client.post("/api/v1/cart/checkout", json={"paymentMethod": "card"})

        response = client.get("/api/v1/transactions/export")

        assert response.headers["content-disposition"] == 'attachment; filename="sales_history.json"'
        assert json.loads(response.content)[0]["totalAmount"] == 18

    def test_summary_and_trend(self, client):
        client.post("/api/v1/cart/items", json={"productId": "1"})
        client.post("/api/v1/cart/checkout", json={"paymentMethod": "cash"})

        summary = client.get("/api/v1/stats/summary").json()
        trend = client.get("/api/v1/stats/trend").json()

        assert summary["totalRevenue"] == 22
        assert summary["transactionCount"] == 1
        assert len(trend["days"]) == 7
        assert trend["days"][-1]["revenue"] == 22

    def test_insight_without_key_falls_back(self, client):
        response = client.post("/api/v1/stats/insight")

        assert response.status_code == 200
        assert response.json()["fallback"] is True

    def test_insight_with_key(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "Good day."}]}}]})

        config = Settings(GEMINI_API_KEY="key", LOG_JSON=False, LOG_LEVEL="WARNING")
        with _client(insight_transport=httpx.MockTransport(handler), config=config) as c:
            body = c.post("/api/v1/stats/insight").json()

        assert body["insight"] == "Good day."
        assert body["fallback"] is False
        assert body["summary"]["inventoryCount"] == 8


class TestSettings:
    """Settings panel endpoints."""

    def test_defaults(self, client):
        assert client.get("/api/v1/settings").json() == {
            "useCloud": False, "remoteEndpoint": "", "remoteCredential": ""
        }

    def test_cloud_requested_with_bad_credentials_reports_error(self, client):
        body = client.put("/api/v1/settings", json={"useCloud": True, "remoteEndpoint": "", "remoteCredential": ""}).json()

        assert body["status"] == "error"
        assert body["cloudActive"] is False
        assert client.get("/api/v1/settings").json()["useCloud"] is True
        # still fully usable on local storage
        assert len(client.get("/api/v1/products").json()) == 8

    def test_enable_cloud_switches_reads_to_remote(self):
        remote = FakeRemoteBackend()
        remote.tables["products"] = [{"id": "r1", "name": "Mocha", "price": 24, "cost": 8, "category": "Drinks"}]

        with _client(remote_transport=remote.transport) as c:
            body = c.put("/api/v1/settings", json={
                "useCloud": True,
                "remoteEndpoint": "https://shop.example.co",
                "remoteCredential": "anon-key",
            }).json()

            assert body["status"] == "success"
            assert c.get("/health").json()["cloud"] is True
            assert [p["id"] for p in c.get("/api/v1/products").json()] == ["r1"]

            c.post("/api/v1/cart/items", json={"productId": "r1"})
            c.post("/api/v1/cart/checkout", json={"paymentMethod": "cash"})

        assert remote.tables["transactions"][0]["totalAmount"] == 24


class TestRejectedInput:
    def test_blank_product_id_not_added_to_catalog(self, client):
        response = client.post("/api/v1/products", json={"id": "   ", "name": "Ghost", "price": 1})

        assert response.status_code == 400
        assert all(p["name"] != "Ghost" for p in client.get("/api/v1/products").json())
        assert client.post("/api/v1/cart/items", json={"productId": "   "}).status_code == 404

    def test_unencodable_credential_saves_as_error_and_restarts(self, tmp_path):
        bind = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'pos.db'}")
        bad = {"useCloud": True, "remoteEndpoint": "https://x.example.co", "remoteCredential": "clé-ü"}

        with TestClient(create_app(config=TEST_CONFIG, bind=bind)) as c:
            body = c.put("/api/v1/settings", json=bad).json()
            assert body["status"] == "error"
            assert body["cloudActive"] is False

        # the saved record is loaded again on the next start
        with TestClient(create_app(config=TEST_CONFIG, bind=bind)) as c:
            assert c.get("/health").json() == {"status": "ok", "cloud": False}
            assert c.get("/api/v1/settings").json()["remoteCredential"] == "clé-ü"
