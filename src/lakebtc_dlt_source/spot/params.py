"""Encoders for the opaque ``params`` string of each authenticated method.

The output of these functions is signed verbatim, so any change to the text
they produce is a wire format change.
"""

import math
from datetime import UTC, datetime
from decimal import Decimal
from numbers import Real
from typing import Optional, Union

from .errors import RequestBuildError

PRICE_DECIMALS = 8

Amount = Union[Real, Decimal]
Timestamp = Union[int, datetime]


def _fixed(name: str, value: Amount) -> str:
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise RequestBuildError(f"{name} must be a number, got {value!r}")
    if isinstance(value, Decimal):
        number = value
        finite = number.is_finite()
    else:
        number = float(value)
        finite = math.isfinite(number)
    if not finite or number < 0:
        raise RequestBuildError(f"{name} must be a finite non-negative number, got {value!r}")
    return f"{number:.{PRICE_DECIMALS}f}"


def trade_params(price: Amount, amount: Amount, currency: str) -> str:
    """Return ``price,amount,currency`` with price and amount fixed to 8 decimals.

    >>> trade_params(100.5, 0.001, "USD")
    '100.50000000,0.00100000,USD'
    """
    if not currency or not isinstance(currency, str) or "," in currency:
        raise RequestBuildError(f"Invalid currency: {currency!r}")
    return ",".join((_fixed("price", price), _fixed("amount", amount), currency))


def cancel_order_params(order_id: int) -> str:
    if isinstance(order_id, bool) or not isinstance(order_id, int):
        raise RequestBuildError(f"order_id must be an integer, got {order_id!r}")
    if order_id < 0:
        raise RequestBuildError(f"order_id must not be negative, got {order_id}")
    return str(order_id)


def trades_since_params(timestamp: Optional[Timestamp] = None) -> str:
    """Return the Unix seconds of ``timestamp`` or an empty string when unset.

    Zero is treated as unset. Naive datetimes are taken to be UTC.
    """
    if timestamp is None:
        return ""
    if isinstance(timestamp, datetime):
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        seconds = int(timestamp.timestamp())
    elif isinstance(timestamp, int) and not isinstance(timestamp, bool):
        seconds = timestamp
    else:
        raise RequestBuildError(f"timestamp must be an int or datetime, got {timestamp!r}")
    if seconds == 0:
        return ""
    if seconds < 0:
        raise RequestBuildError(f"timestamp must not be negative, got {seconds}")
    return str(seconds)


__all__ = ["PRICE_DECIMALS", "trade_params", "cancel_order_params", "trades_since_params"]
