"""LakeBTC DLT resources - one module per endpoint.

Available Resources
-------------------
- ticker: Snapshot of last/bid/ask/high/low per currency (public)
- order_book: Snapshot of bids and asks for USD or CNY (public)
- trade_history: Recent public trades, merged on tid (public)
- account_info: Snapshot of the account payload (private)
- open_orders: Snapshot of resting orders (private)
- trades: Incremental account trade log (private)
"""

from .ticker import ticker
from .order_book import order_book
from .trade_history import trade_history
from .account_info import account_info
from .open_orders import open_orders
from .trades import trades

PUBLIC_RESOURCE_NAMES = ("ticker", "order_book", "trade_history")
PRIVATE_RESOURCE_NAMES = ("account_info", "open_orders", "trades")
ALL_RESOURCE_NAMES = PUBLIC_RESOURCE_NAMES + PRIVATE_RESOURCE_NAMES

__all__ = [
    "ticker",
    "order_book",
    "trade_history",
    "account_info",
    "open_orders",
    "trades",
    "PUBLIC_RESOURCE_NAMES",
    "PRIVATE_RESOURCE_NAMES",
    "ALL_RESOURCE_NAMES",
]
