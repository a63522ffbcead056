"""Data types returned by and sent to the exchange API."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Sequence

_FRACTION = re.compile(r"\.(\d+)")


def _strings(value: Any) -> list[str]:
    return [str(item) for item in value] if value else []


def _parse_time(value: Any) -> datetime | None:
    if not value:
        return None
    text = str(value).strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], text, count=1)
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"invalid timestamp: {value!r}") from exc


def _to_float(value: Any, what: str) -> float:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"invalid {what} in trade entry: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid {what} in trade entry: {value!r}") from exc


@dataclass(frozen=True)
class Balance:
    """Balance of one currency in an account."""

    id: str = ""
    amount: list[str] = field(default_factory=list)
    available_amount: list[str] = field(default_factory=list)
    frozen_amount: list[str] = field(default_factory=list)
    pending_withdraw_amount: list[str] = field(default_factory=list)
    account_id: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Balance":
        return cls(
            id=str(data.get("id") or ""),
            amount=_strings(data.get("amount")),
            available_amount=_strings(data.get("available_amount")),
            frozen_amount=_strings(data.get("frozen_amount")),
            pending_withdraw_amount=_strings(data.get("pending_withdraw_amount")),
            account_id=int(data.get("account_id") or 0),
        )


@dataclass(frozen=True)
class Ticker:
    """Current market summary for a pair."""

    last_price: list[str] = field(default_factory=list)
    max_bid: list[str] = field(default_factory=list)
    min_ask: list[str] = field(default_factory=list)
    price_variation_24h: str = ""
    price_variation_7d: str = ""
    volume: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Ticker":
        return cls(
            last_price=_strings(data.get("last_price")),
            max_bid=_strings(data.get("max_bid")),
            min_ask=_strings(data.get("min_ask")),
            price_variation_24h=str(data.get("price_variation_24h") or ""),
            price_variation_7d=str(data.get("price_variation_7d") or ""),
            volume=_strings(data.get("volume")),
        )


@dataclass(frozen=True)
class MarketHistory:
    """Candle series for a market symbol."""

    open: list[float] = field(default_factory=list)
    close: list[float] = field(default_factory=list)
    high: list[float] = field(default_factory=list)
    low: list[float] = field(default_factory=list)
    volumes: list[float] = field(default_factory=list)
    timestamps: list[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MarketHistory":
        def floats(key: str) -> list[float]:
            return [float(v) for v in data.get(key) or []]

        return cls(
            open=floats("o"),
            close=floats("c"),
            high=floats("h"),
            low=floats("l"),
            volumes=floats("v"),
            timestamps=[int(v) for v in data.get("t") or []],
        )


@dataclass(frozen=True)
class Order:
    """An order placed on the exchange."""

    id: int = 0
    type: str = ""
    order_type: str = ""
    status: str = ""
    created_at: datetime | None = None
    market_id: str = ""
    account_id: int = 0
    fee_currency: str = ""
    price_type: str = ""
    limit: list[str] = field(default_factory=list)
    amount: list[str] = field(default_factory=list)
    original_amount: list[str] = field(default_factory=list)
    traded_amount: list[str] = field(default_factory=list)
    total_exchanged: list[str] = field(default_factory=list)
    paid_fee: list[str] = field(default_factory=list)
    stop_price: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Order":
        return cls(
            id=int(data.get("id") or 0),
            type=str(data.get("type") or ""),
            order_type=str(data.get("order_type") or ""),
            status=str(data.get("state") or ""),
            created_at=_parse_time(data.get("created_at")),
            market_id=str(data.get("market_id") or ""),
            account_id=int(data.get("account_id") or 0),
            fee_currency=str(data.get("fee_currency") or ""),
            price_type=str(data.get("price_type") or ""),
            limit=_strings(data.get("limit")),
            amount=_strings(data.get("amount")),
            original_amount=_strings(data.get("original_amount")),
            traded_amount=_strings(data.get("traded_amount")),
            total_exchanged=_strings(data.get("total_exchanged")),
            paid_fee=_strings(data.get("paid_fee")),
            stop_price=_strings(data.get("stop_price")),
        )


@dataclass(frozen=True)
class OrderBook:
    """Open asks and bids of a market, each as ``[price, amount]``."""

    asks: list[list[str]] = field(default_factory=list)
    bids: list[list[str]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OrderBook":
        return cls(
            asks=[_strings(row) for row in data.get("asks") or []],
            bids=[_strings(row) for row in data.get("bids") or []],
        )


@dataclass(frozen=True)
class OrderLimit:
    """Limit price of a new order."""

    price: int
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {"price": self.price, "type": self.type}


@dataclass(frozen=True)
class OrderStop:
    """Stop price of a new order."""

    stop_price: int
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {"price": self.stop_price, "type": self.type}


@dataclass(frozen=True)
class CreateOrderRequest:
    """Body of a request that places an order."""

    type: str = ""
    price_type: str = ""
    limit: OrderLimit | None = None
    stop: OrderStop | None = None
    amount: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body; empty type, price type and amount are left out."""
        body: dict[str, Any] = {}
        if self.type:
            body["type"] = self.type
        if self.price_type:
            body["price_type"] = self.price_type
        body["limit"] = self.limit.to_dict() if self.limit else None
        body["stop"] = self.stop.to_dict() if self.stop else None
        if self.amount:
            body["amount"] = self.amount
        return body


@dataclass(frozen=True)
class Transaction:
    """One executed trade."""

    timestamp: str
    amount: float
    price: float
    order_type: str

    @classmethod
    def from_entry(cls, entry: Sequence[Any], timestamp: str) -> "Transaction":
        """Build from a raw ``[price, amount, ..., order_type]`` entry."""
        if len(entry) < 4:
            raise ValueError(f"trade entry too short: {list(entry)!r}")
        price = _to_float(entry[0], "price")
        amount = _to_float(entry[1], "amount")
        kind = entry[3]
        return cls(
            timestamp=timestamp,
            amount=amount,
            price=price,
            order_type=kind if isinstance(kind, str) else str(kind),
        )


@dataclass(frozen=True)
class Trades:
    """Recent trades of a market."""

    last_timestamp: str = ""
    market_id: str = ""
    entries: list[Transaction] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Trades":
        last_timestamp = str(data.get("last_timestamp") or "")
        return cls(
            last_timestamp=last_timestamp,
            market_id=str(data.get("market_id") or ""),
            entries=[
                Transaction.from_entry(entry, last_timestamp)
                for entry in data.get("entries") or []
            ],
        )