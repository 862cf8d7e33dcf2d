"""Order book resource - snapshot of outstanding bids and asks."""

from typing import Any, Iterable, Mapping, Optional

import dlt

from ..client import DEFAULT_CURRENCY, LakeBTCClient, order_book_currency
from ..helpers import log_resource_stats


@dlt.resource(name="order_book", write_disposition="replace")
def order_book(
    currency: str = DEFAULT_CURRENCY,
    client: Optional[LakeBTCClient] = None,
) -> Iterable[Mapping[str, Any]]:
    """Load the order book, one row per price level (snapshot/replace).

    Parameters
    ----------
    currency:
        ``"CNY"`` selects the CNY book, any other value the default USD book.
        Rows are labelled with the currency of the book actually fetched.
    client:
        Optional pre-configured LakeBTCClient for testing.
    """
    client = client or LakeBTCClient()
    book = client.get_order_book(currency)
    book_currency = order_book_currency(currency)

    count = 0
    for side, levels in (("bid", book.bids), ("ask", book.asks)):
        for position, (price, amount) in enumerate(levels):
            yield {
                "currency": book_currency,
                "side": side,
                "position": position,
                "price": price,
                "amount": amount,
            }
            count += 1

    log_resource_stats("order_book", count, None)


__all__ = ["order_book"]
