"""HTTP client for the exchange REST API."""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime
from typing import Any, Callable, TypeVar
from urllib.parse import urlsplit

import requests

from .auth import auth_headers
from .models import (
    Balance,
    CreateOrderRequest,
    MarketHistory,
    Order,
    OrderBook,
    Ticker,
    Trades,
)

logger = logging.getLogger(__name__)

PAIR_BTC_CLP = "btc-clp"
PAIR_ETH_CLP = "eth-clp"

ORDER_TYPE_BUY = "Bid"
ORDER_TYPE_SELL = "Ask"
ORDER_PRICE_TYPE_LIMIT = "limit"
ORDER_PRICE_TYPE_MARKET = "market"

STATUS_RECEIVED = "received"
STATUS_PENDING = "pending"
STATUS_TRADED = "traded"
STATUS_CANCELING = "canceling"
STATUS_CANCELED = "canceled"

_MARKET_ORDER_BOOK = "/markets/{}/order_book"
_MARKET_TRADES = "/markets/{}/trades"
_MARKET_TICKER = "/markets/{}/ticker"
_ACCOUNT_BALANCES = "/balances"
_ORDERS_BY_MARKET = "/markets/{}/orders"
_ORDER_BY_ID = "/orders/{}"
_MARKET_HISTORY = "/tv/history?symbol={}&resolution=1D&from={}&to={}&countback=2"

T = TypeVar("T")


class BudaError(Exception):
    """Raised when a request to the API cannot be made or its reply read."""


def _unix(value: datetime | int | float) -> int:
    if isinstance(value, datetime):
        return math.floor(value.timestamp())
    return math.floor(value)


def _request_uri(url: str) -> str:
    parts = urlsplit(url)
    path = parts.path or "/"
    return f"{path}?{parts.query}" if parts.query else path


class Buda:
    """Client for the public and private endpoints of the exchange."""

    def __init__(
        self,
        base_url: str,
        key: str,
        secret: str,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url
        self.key = key
        self.secret = secret
        self.session = session if session is not None else requests.Session()

    def __repr__(self) -> str:
        return f"Buda(base_url={self.base_url!r})"

    def marshal_body(self, value: Any) -> bytes:
        """Return ``value`` encoded as a JSON request body."""
        if value is None:
            raise BudaError("cannot marshal a null value")
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            value = to_dict()
        try:
            return json.dumps(value).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise BudaError(f"cannot marshal body: {exc}") from exc

    def _request(
        self,
        method: str,
        path: str,
        body: bytes | None = None,
        private: bool = False,
    ) -> Any:
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/json"}
        if private:
            headers.update(
                auth_headers(self.key, self.secret, method, _request_uri(url), body)
            )
        try:
            response = self.session.request(method, url, data=body, headers=headers)
        except requests.RequestException as exc:
            raise BudaError(f"request to {url} failed: {exc}") from exc
        try:
            return json.loads(response.content)
        except ValueError as exc:
            raise BudaError(f"invalid JSON in response from {url}") from exc

    @staticmethod
    def _decode(payload: Any, key: str, build: Callable[[Any], T]) -> T | None:
        if not isinstance(payload, dict):
            raise BudaError(f"unexpected response payload: {payload!r}")
        data = payload.get(key)
        if data is None:
            return None
        try:
            return build(data)
        except (TypeError, ValueError, AttributeError) as exc:
            raise BudaError(f"cannot decode {key!r}: {exc}") from exc

    def get_balances(self) -> list[Balance]:
        """Return the balances of every currency in the account."""
        payload = self._request("GET", _ACCOUNT_BALANCES, private=True)
        balances = self._decode(
            payload, "balances", lambda rows: [Balance.from_dict(row) for row in rows]
        )
        return balances or []

    def get_balance_by_currency(self, currency: str) -> Balance | None:
        """Return the balance of one currency."""
        payload = self._request("GET", f"{_ACCOUNT_BALANCES}/{currency}", private=True)
        return self._decode(payload, "balance", Balance.from_dict)

    def get_ticker(self, pair: str) -> Ticker | None:
        """Return the ticker of a market pair such as ``btc-clp``."""
        if not pair:
            raise BudaError("market pair cannot be empty")
        payload = self._request("GET", _MARKET_TICKER.format(pair))
        return self._decode(payload, "ticker", Ticker.from_dict)

    def get_market_history(
        self,
        symbol: str,
        start: datetime | int | float,
        end: datetime | int | float,
    ) -> MarketHistory:
        """Return daily candles of ``symbol`` between ``start`` and ``end``."""
        path = _MARKET_HISTORY.format(symbol, _unix(start), _unix(end))
        payload = self._request("GET", path, private=True)
        if not isinstance(payload, dict):
            raise BudaError(f"unexpected response payload: {payload!r}")
        try:
            return MarketHistory.from_dict(payload)
        except (TypeError, ValueError) as exc:
            raise BudaError(f"cannot decode market history: {exc}") from exc

    def create_order(self, pair: str, request: CreateOrderRequest) -> Order | None:
        """Place an order on market ``pair``."""
        body = self.marshal_body(request)
        logger.debug("create order request: %s", body.decode("utf-8"))
        payload = self._request(
            "POST", _ORDERS_BY_MARKET.format(pair), body, private=True
        )
        return self._decode(payload, "order", Order.from_dict)

    def get_order(self, order_id: str | int) -> Order | None:
        """Return the order with the given id."""
        payload = self._request("GET", _ORDER_BY_ID.format(order_id), private=True)
        return self._decode(payload, "order", Order.from_dict)

    def cancel_order(self, order_id: str | int) -> Order | None:
        """Ask the exchange to cancel an order and return its new state."""
        body = self.marshal_body({"state": STATUS_CANCELING})
        payload = self._request(
            "PUT", _ORDER_BY_ID.format(order_id), body, private=True
        )
        return self._decode(payload, "order", Order.from_dict)

    def get_order_book(self, market_id: str) -> OrderBook | None:
        """Return the order book of a market."""
        payload = self._request(
            "GET", _MARKET_ORDER_BOOK.format(market_id), private=True
        )
        return self._decode(payload, "order_book", OrderBook.from_dict)

    def get_trades(self, pair: str) -> Trades:
        """Return the recent trades of a market pair."""
        payload = self._request("GET", _MARKET_TRADES.format(pair))
        trades = self._decode(payload, "trades", Trades.from_dict)
        if trades is None:
            raise BudaError("response holds no trades")
        return trades