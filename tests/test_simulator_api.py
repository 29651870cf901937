"""Tests for the manual simulation trigger."""

from decimal import Decimal

from stockmarket.seed import SAMPLE_STOCKS, seed_stocks


def test_trigger_moves_prices_and_publishes(client, db, publisher):
    seed_stocks(db)
    before = {s["symbol"]: Decimal(s["current_price"]) for s in client.get("/api/stocks").json()}

    response = client.post("/api/simulator/trigger")

    assert response.status_code == 200
    assert response.json() == {"message": "Stock price simulation triggered successfully"}
    after = {s["symbol"]: Decimal(s["current_price"]) for s in client.get("/api/stocks").json()}
    assert after.keys() == before.keys()
    assert all(price >= Decimal("0.01") for price in after.values())
    for symbol, price in after.items():
        assert abs(price - before[symbol]) <= before[symbol] * Decimal("0.05") + Decimal("0.01")

    assert publisher.publish.call_count == len(SAMPLE_STOCKS)
    published = {call.args[1]: Decimal(call.args[2]["price"]) for call in publisher.publish.call_args_list}
    assert published == after


def test_trigger_with_no_stocks(client, publisher):
    response = client.post("/api/simulator/trigger")

    assert response.status_code == 200
    publisher.publish.assert_not_called()


def test_trigger_reports_success_when_publishing_fails(client, db, publisher):
    seed_stocks(db)
    publisher.publish.side_effect = RuntimeError("broker down")

    response = client.post("/api/simulator/trigger")

    assert response.status_code == 200
    assert publisher.publish.call_count == len(SAMPLE_STOCKS)


def test_trigger_when_disabled(client, db, publisher, simulator):
    seed_stocks(db)
    simulator.enabled = False
    before = client.get("/api/stocks/symbol/AAPL").json()

    response = client.post("/api/simulator/trigger")

    assert response.status_code == 200
    assert client.get("/api/stocks/symbol/AAPL").json() == before
    publisher.publish.assert_not_called()


def test_sub_cent_stock_is_rejected_before_reaching_simulator(client, publisher):
    dust = {"symbol": "DUST", "company_name": "Dust Corp", "current_price": "0.004"}
    assert client.post("/api/stocks", json=dust).status_code == 400

    cheap = {**dust, "current_price": "0.01"}
    assert client.post("/api/stocks", json=cheap).status_code == 201

    client.post("/api/simulator/trigger")

    price = Decimal(client.get("/api/stocks/symbol/DUST").json()["current_price"])
    assert price >= Decimal("0.01")
    publisher.publish.assert_called_once()
    assert publisher.publish.call_args.args[1] == "DUST"
