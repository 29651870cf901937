"""Tests for the /api/stocks endpoints."""

from decimal import Decimal

import pytest


APPLE = {
    "symbol": "AAPL",
    "company_name": "Apple Inc.",
    "current_price": "194.50",
    "previous_close": "192.75",
    "volume": 35000000,
    "sector": "Technology",
    "industry": "Consumer Electronics",
}


def create(client, **overrides):
    payload = {**APPLE, **overrides}
    response = client.post("/api/stocks", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_stock_derives_change(client):
    body = create(client)

    assert body["id"] > 0
    assert body["symbol"] == "AAPL"
    assert Decimal(body["current_price"]) == Decimal("194.50")
    assert Decimal(body["change"]) == Decimal("1.75")
    assert Decimal(body["change_percent"]) == Decimal("0.91")
    assert body["last_updated"] is not None


def test_create_stock_without_previous_close(client):
    body = create(client, symbol="NEW", previous_close=None)

    assert body["change"] is None
    assert body["change_percent"] is None


def test_duplicate_symbol_is_rejected(client):
    create(client)

    response = client.post("/api/stocks", json=APPLE)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Bad Request"
    assert "already exists" in body["message"]


@pytest.mark.parametrize("field, value", [
    ("current_price", "0"),
    ("current_price", "-1.00"),
    ("current_price", "0.004"),
    ("current_price", "194.505"),
    ("previous_close", "192.751"),
    ("symbol", ""),
    ("volume", -5),
])
def test_invalid_stock_is_rejected(client, field, value):
    response = client.post("/api/stocks", json={**APPLE, field: value})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation Error"
    assert any(field in key for key in body["validation_errors"])


def test_get_stock_by_id_and_symbol(client):
    created = create(client)

    by_id = client.get(f"/api/stocks/{created['id']}")
    by_symbol = client.get("/api/stocks/symbol/AAPL")

    assert by_id.status_code == 200
    assert by_symbol.status_code == 200
    assert by_id.json() == by_symbol.json()


def test_missing_stock_returns_404(client):
    assert client.get("/api/stocks/999").status_code == 404
    response = client.get("/api/stocks/symbol/NOPE")
    assert response.status_code == 404
    assert response.json()["message"] == "Stock not found with symbol NOPE"


def test_list_and_filter_stocks(client):
    create(client)
    create(client, symbol="MSFT", company_name="Microsoft", industry="Software")
    create(client, symbol="JPM", company_name="JPMorgan", sector="Financials", industry="Banking")

    assert [s["symbol"] for s in client.get("/api/stocks").json()] == ["AAPL", "MSFT", "JPM"]
    assert [s["symbol"] for s in client.get("/api/stocks/sector/Technology").json()] == ["AAPL", "MSFT"]
    assert [s["symbol"] for s in client.get("/api/stocks/industry/Banking").json()] == ["JPM"]
    assert client.get("/api/stocks/sector/Energy").json() == []


def test_most_active_and_top_gainers(client):
    create(client, symbol="LOW", volume=10, current_price="10.00", previous_close="10.00")
    create(client, symbol="HIGH", volume=1000, current_price="12.00", previous_close="10.00")
    create(client, symbol="MID", volume=100, current_price="11.00", previous_close="10.00")

    active = [s["symbol"] for s in client.get("/api/stocks/most-active").json()]
    gainers = [s["symbol"] for s in client.get("/api/stocks/top-gainers").json()]

    assert active == ["HIGH", "MID", "LOW"]
    assert gainers == ["HIGH", "MID", "LOW"]


def test_update_stock_price_recomputes_change_and_publishes(client, publisher):
    create(client)

    response = client.put("/api/stocks/symbol/AAPL", json={"current_price": "202.40"})

    assert response.status_code == 200
    body = response.json()
    assert Decimal(body["current_price"]) == Decimal("202.40")
    assert Decimal(body["change"]) == Decimal("9.65")
    publisher.publish.assert_called_once()
    topic, key, payload = publisher.publish.call_args.args
    assert topic == "price-topic"
    assert key == "AAPL"
    assert Decimal(payload["price"]) == Decimal("202.40")


def test_update_stock_metadata_does_not_publish(client, publisher):
    create(client)

    response = client.put("/api/stocks/symbol/AAPL", json={"sector": "Tech", "volume": 5})

    assert response.status_code == 200
    assert response.json()["sector"] == "Tech"
    assert response.json()["volume"] == 5
    publisher.publish.assert_not_called()


def test_update_missing_stock_returns_404(client):
    response = client.put("/api/stocks/symbol/NOPE", json={"sector": "Tech"})
    assert response.status_code == 404


def test_update_rejects_non_positive_price(client):
    create(client)
    response = client.put("/api/stocks/symbol/AAPL", json={"current_price": "-3"})
    assert response.status_code == 400


def test_delete_stock(client):
    create(client)

    assert client.delete("/api/stocks/symbol/AAPL").status_code == 204
    assert client.get("/api/stocks/symbol/AAPL").status_code == 404
    assert client.delete("/api/stocks/symbol/AAPL").status_code == 404


def test_root_and_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    body = client.get("/").json()
    assert body["status"] == "UP"


def test_update_rejects_sub_cent_price(client):
    create(client)
    response = client.put("/api/stocks/symbol/AAPL", json={"current_price": "0.004"})

    assert response.status_code == 400
    assert Decimal(client.get("/api/stocks/symbol/AAPL").json()["current_price"]) == Decimal("194.50")
