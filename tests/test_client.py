import json
from datetime import datetime, timezone
from urllib.parse import parse_qs, urlsplit

import pytest
import requests
import responses

from buda.auth import build_message, sign
from buda.client import Buda, BudaError, ORDER_TYPE_BUY, ORDER_PRICE_TYPE_LIMIT
from buda.models import CreateOrderRequest, OrderLimit

BASE = "https://api.example.com/api/v2"


@pytest.fixture
def rsps():
    with responses.RequestsMock() as mock:
        yield mock


@pytest.fixture
def client():
    return Buda(BASE, key="placeholder", secret="secret")


def _check_signature(request, uri):
    nonce = request.headers["X-SBTC-NONCE"]
    message = build_message(request.method, uri, request.body, nonce)
    assert request.headers["X-SBTC-SIGNATURE"] == sign(message, "secret")
    assert request.headers["X-SBTC-APIKEY"] == "placeholder"


def test_get_balances_signed(rsps, client):
    rsps.add(
        responses.GET,
        f"{BASE}/balances",
        json={"balances": [{"id": "BTC", "amount": ["1.5", "BTC"], "account_id": 7}]},
    )
    balances = client.get_balances()
    assert [b.id for b in balances] == ["BTC"]
    assert balances[0].amount == ["1.5", "BTC"]
    assert balances[0].account_id == 7
    request = rsps.calls[0].request
    assert request.headers["Content-Type"] == "application/json"
    _check_signature(request, "/api/v2/balances")


def test_get_balances_missing_key_is_empty(rsps, client):
    rsps.add(responses.GET, f"{BASE}/balances", json={})
    assert client.get_balances() == []


def test_get_balance_by_currency(rsps, client):
    rsps.add(responses.GET, f"{BASE}/balances/btc", json={"balance": {"id": "BTC"}})
    balance = client.get_balance_by_currency("btc")
    assert balance.id == "BTC"
    _check_signature(rsps.calls[0].request, "/api/v2/balances/btc")


def test_get_ticker_public(rsps, client):
    rsps.add(
        responses.GET,
        f"{BASE}/markets/btc-clp/ticker",
        json={"ticker": {"last_price": ["100", "CLP"], "price_variation_24h": "0.1"}},
    )
    ticker = client.get_ticker("btc-clp")
    assert ticker.last_price == ["100", "CLP"]
    assert ticker.price_variation_24h == "0.1"
    assert "X-SBTC-SIGNATURE" not in rsps.calls[0].request.headers


def test_get_ticker_empty_pair(client):
    with pytest.raises(BudaError, match="market pair cannot be empty"):
        client.get_ticker("")


def test_get_market_history_query(rsps, client):
    start = datetime(2021, 1, 1, tzinfo=timezone.utc)
    end = datetime(2021, 1, 3, tzinfo=timezone.utc)
    rsps.add(
        responses.GET,
        f"{BASE}/tv/history",
        json={"o": [1, 2], "c": [3, 4], "h": [5, 6], "l": [0, 1], "v": [9, 9], "t": [10, 20]},
    )
    history = client.get_market_history("BTCCLP", start, end)
    assert history.open == [1.0, 2.0]
    assert history.timestamps == [10, 20]
    request = rsps.calls[0].request
    query = parse_qs(urlsplit(request.url).query)
    assert query["symbol"] == ["BTCCLP"]
    assert query["resolution"] == ["1D"]
    assert query["countback"] == ["2"]
    assert query["from"] == [str(int(start.timestamp()))]
    assert query["to"] == [str(int(end.timestamp()))]
    parts = urlsplit(request.url)
    _check_signature(request, f"{parts.path}?{parts.query}")


def test_create_order_posts_body(rsps, client):
    rsps.add(
        responses.POST,
        f"{BASE}/markets/btc-clp/orders",
        json={"order": {"id": 42, "type": "Bid", "state": "received"}},
    )
    order_request = CreateOrderRequest(
        type=ORDER_TYPE_BUY,
        price_type=ORDER_PRICE_TYPE_LIMIT,
        limit=OrderLimit(price=1000, type="gtc"),
        amount=0.5,
    )
    order = client.create_order("btc-clp", order_request)
    assert order.id == 42
    assert order.status == "received"
    request = rsps.calls[0].request
    assert json.loads(request.body) == order_request.to_dict()
    _check_signature(request, "/api/v2/markets/btc-clp/orders")


def test_get_order(rsps, client):
    rsps.add(responses.GET, f"{BASE}/orders/42", json={"order": {"id": 42, "state": "traded"}})
    order = client.get_order("42")
    assert order.id == 42
    assert order.status == "traded"


def test_cancel_order_puts_canceling(rsps, client):
    rsps.add(responses.PUT, f"{BASE}/orders/42", json={"order": {"id": 42, "state": "canceling"}})
    order = client.cancel_order(42)
    assert order.status == "canceling"
    request = rsps.calls[0].request
    assert json.loads(request.body) == {"state": "canceling"}
    _check_signature(request, "/api/v2/orders/42")


def test_get_order_book(rsps, client):
    rsps.add(
        responses.GET,
        f"{BASE}/markets/btc-clp/order_book",
        json={"order_book": {"asks": [["10", "1"]], "bids": [["9", "2"]]}},
    )
    book = client.get_order_book("btc-clp")
    assert book.asks == [["10", "1"]]
    assert book.bids == [["9", "2"]]


def test_get_trades(rsps, client):
    rsps.add(
        responses.GET,
        f"{BASE}/markets/btc-clp/trades",
        json={
            "trades": {
                "last_timestamp": "1600000000000",
                "market_id": "BTC-CLP",
                "entries": [["1600000000000", "0.25", "100.5", "buy", 1]],
            }
        },
    )
    trades = client.get_trades("btc-clp")
    assert trades.market_id == "BTC-CLP"
    assert len(trades.entries) == 1
    entry = trades.entries[0]
    assert entry.amount == 0.25
    assert entry.order_type == "buy"
    assert entry.timestamp == trades.last_timestamp


def test_get_trades_bad_entry(rsps, client):
    rsps.add(
        responses.GET,
        f"{BASE}/markets/btc-clp/trades",
        json={"trades": {"entries": [["x", "y", "z", "buy"]]}},
    )
    with pytest.raises(BudaError):
        client.get_trades("btc-clp")


def test_get_trades_missing(rsps, client):
    rsps.add(responses.GET, f"{BASE}/markets/btc-clp/trades", json={})
    with pytest.raises(BudaError):
        client.get_trades("btc-clp")


def test_invalid_json_raises(rsps, client):
    rsps.add(responses.GET, f"{BASE}/orders/1", body="not json")
    with pytest.raises(BudaError):
        client.get_order("1")


def test_connection_error_raises(rsps, client):
    rsps.add(responses.GET, f"{BASE}/balances", body=requests.ConnectionError("down"))
    with pytest.raises(BudaError):
        client.get_balances()


def test_marshal_body_none(client):
    with pytest.raises(BudaError):
        client.marshal_body(None)


def test_marshal_body_round_trip(client):
    value = {"state": "canceling", "n": [1, 2]}
    assert json.loads(client.marshal_body(value)) == value


def test_marshal_body_uses_to_dict(client):
    order_request = CreateOrderRequest(type=ORDER_TYPE_BUY, amount=1.0)
    assert json.loads(client.marshal_body(order_request)) == order_request.to_dict()