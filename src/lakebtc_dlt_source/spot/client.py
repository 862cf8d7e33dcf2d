"""HTTP client for the LakeBTC v1 API."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Union

from . import params as encoders
from .auth import (
    BUY_ORDER,
    CANCEL_ORDER,
    GET_ACCOUNT_INFO,
    GET_ORDERS,
    GET_TRADES,
    SELL_ORDER,
    LakeBTCAuth,
)
from .errors import RequestBuildError
from .models import (
    OrderBook,
    TickerSnapshot,
    TradeRecord,
    decode_order_book,
    decode_ticker,
    decode_trade_history,
)
from .params import Amount
from .settings import DEFAULT_SETTINGS, ExchangeSettings
from .transport import HttpTransport, TransportResponse

TICKER = "ticker"
ORDER_BOOK = "bcorderbook"
ORDER_BOOK_CNY = "bcorderbook_cny"
TRADES = "bctrades"

DEFAULT_CURRENCY = "USD"

LOGGER = logging.getLogger(__name__)


def order_book_currency(currency: str) -> str:
    """Return the currency of the book ``currency`` resolves to; only CNY has its own."""
    return "CNY" if currency == "CNY" else DEFAULT_CURRENCY


def order_book_endpoint(currency: str) -> str:
    return ORDER_BOOK_CNY if order_book_currency(currency) == "CNY" else ORDER_BOOK


@dataclass(slots=True)
class LakeBTCClient:
    """Client for LakeBTC public market data and signed trading calls.

    Private calls return the ``TransportResponse`` untouched: a rejected
    order arrives as an ordinary response and it is up to the caller to
    inspect ``status_code`` and ``body``. No call is ever retried.

    Parameters
    ----------
    auth:
        Optional LakeBTCAuth instance, required for private calls.
    transport:
        Optional HttpTransport. If not provided, a new one is created.
    settings:
        Exchange metadata and the ``verbose`` switch.
    """

    auth: Optional[LakeBTCAuth] = None
    transport: Optional[HttpTransport] = None
    settings: ExchangeSettings = field(default=DEFAULT_SETTINGS)

    def __post_init__(self) -> None:
        if self.transport is None:
            self.transport = HttpTransport()

    def get(self, endpoint: str, *, timeout: Optional[float] = None) -> TransportResponse:
        """Fetch a public endpoint relative to the API base URL."""
        return self.transport.get(self.settings.base_url + endpoint, timeout=timeout)

    def post_signed(self, method: str, params: str = "", *, timeout: Optional[float] = None) -> TransportResponse:
        """Sign ``method`` with ``params`` and POST it to the API base URL.

        Raises
        ------
        RequestBuildError:
            If auth is not configured or the method/params are invalid.
        TransportError:
            If the HTTP call cannot be completed.
        """
        if not self.auth:
            raise RequestBuildError("Private endpoints require LakeBTCAuth")

        envelope = self.auth(method, params)
        url = self.settings.base_url
        if self.settings.verbose:
            LOGGER.info("Sending POST request to %s calling method %s with params %s", url, method, envelope.body)

        response = self.transport.post(url, envelope.body_bytes, envelope.headers, timeout=timeout)

        if self.settings.verbose:
            LOGGER.info("Received raw (HTTP %s): %s", response.status_code, response.text)
        return response

    # Public market data

    def get_ticker(self) -> Dict[str, TickerSnapshot]:
        return decode_ticker(self.get(TICKER).body)

    def get_order_book(self, currency: str = DEFAULT_CURRENCY) -> OrderBook:
        return decode_order_book(self.get(order_book_endpoint(currency)).body)

    def get_trade_history(self) -> List[TradeRecord]:
        return decode_trade_history(self.get(TRADES).body)

    # Private trading calls

    def get_account_info(self) -> TransportResponse:
        return self.post_signed(GET_ACCOUNT_INFO, "")

    def trade(self, side: str, amount: Amount, price: Amount, currency: str) -> TransportResponse:
        """Place a limit order; ``side`` is ``"buy"`` or ``"sell"``."""
        if side == "buy":
            method = BUY_ORDER
        elif side == "sell":
            method = SELL_ORDER
        else:
            raise RequestBuildError(f"side must be 'buy' or 'sell', got {side!r}")
        return self.post_signed(method, encoders.trade_params(price, amount, currency))

    def buy(self, amount: Amount, price: Amount, currency: str) -> TransportResponse:
        return self.trade("buy", amount, price, currency)

    def sell(self, amount: Amount, price: Amount, currency: str) -> TransportResponse:
        return self.trade("sell", amount, price, currency)

    def get_orders(self) -> TransportResponse:
        return self.post_signed(GET_ORDERS, "")

    def cancel_order(self, order_id: int) -> TransportResponse:
        return self.post_signed(CANCEL_ORDER, encoders.cancel_order_params(order_id))

    def get_trades(self, since: Optional[Union[int, datetime]] = None) -> TransportResponse:
        """List own trades, optionally only those after ``since`` (Unix seconds)."""
        return self.post_signed(GET_TRADES, encoders.trades_since_params(since))


__all__ = [
    "DEFAULT_CURRENCY",
    "LakeBTCClient",
    "ORDER_BOOK",
    "ORDER_BOOK_CNY",
    "TICKER",
    "TRADES",
    "order_book_currency",
    "order_book_endpoint",
]
