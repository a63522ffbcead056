# buda

A small Python client for the Buda exchange REST API.

It covers the following:

- public market data: tickers and recent trades
- order books and daily price history
- private account endpoints: balances, and placing, fetching and cancelling orders

Private requests are signed with your API key and secret.

## Installation

```
pip install .
```

## Usage

```python
from buda.client import Buda, BudaError, PAIR_BTC_CLP, ORDER_TYPE_BUY, ORDER_PRICE_TYPE_LIMIT
from buda.models import CreateOrderRequest, OrderLimit

client = Buda("https://api.example.com/v2", key="placeholder", secret="secret")

ticker = client.get_ticker(PAIR_BTC_CLP)
print(ticker.last_price, ticker.max_bid, ticker.min_ask)

trades = client.get_trades(PAIR_BTC_CLP)
for entry in trades.entries:
    print(entry.timestamp, entry.price, entry.amount, entry.order_type)

book = client.get_order_book(PAIR_BTC_CLP)
print(book.asks[:3], book.bids[:3])

for balance in client.get_balances():
    print(balance.id, balance.available_amount)

request = CreateOrderRequest(
    type=ORDER_TYPE_BUY,
    price_type=ORDER_PRICE_TYPE_LIMIT,
    limit=OrderLimit(price=30_000_000, type="gtc"),
    amount=0.001,
)
order = client.create_order(PAIR_BTC_CLP, request)
client.cancel_order(order.id)
```

If no `session` is given, `Buda` creates its own `requests.Session`. You may pass your own session instead.

### Price history

`get_market_history` returns daily candles for a symbol over a time range. The start and end may be `datetime` objects or Unix timestamps.

```python
from datetime import datetime, timedelta, timezone

end = datetime.now(timezone.utc)
history = client.get_market_history("BTCCLP", end - timedelta(days=7), end)
print(history.close, history.timestamps)
```

### Return values

Methods that read a single object return `None` when the reply does not contain that object:

- `get_ticker`
- `get_balance_by_currency`
- `get_order`
- `create_order`
- `cancel_order`
- `get_order_book`

`get_balances` returns an empty list in that case. `get_trades` raises `BudaError` when the reply holds no trades.

### Errors

`BudaError` is raised in these cases:

- the request cannot be sent
- the reply is not JSON
- the reply cannot be decoded into the model types
- a body cannot be marshalled
- `get_ticker` is given an empty pair

The HTTP status code itself is not checked. An error reply is decoded like any other.

## Authentication

Private requests carry three headers:

- `X-SBTC-APIKEY`
- `X-SBTC-NONCE`
- `X-SBTC-SIGNATURE`

The signature is a hex HMAC-SHA384 of `"{METHOD} {path} [{base64 body}] {nonce}"`. The base64 body is included only for POST and PUT. The nonce is the current time in nanoseconds.

The helpers in `buda.auth` expose this directly:

- `build_message`
- `sign`
- `auth_headers`

## What it does not do

This is a library only:

- It has no command-line tool.
- It does not retry failed requests.
- It does not store credentials or any other state between runs.

## Running the tests

```
pip install .[test]
pytest
```