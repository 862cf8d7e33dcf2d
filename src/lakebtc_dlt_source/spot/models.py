"""Read-only records decoded from LakeBTC public endpoints."""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import ResponseDecodeError

PriceLevel = Tuple[float, float]


@dataclass(frozen=True)
class TickerSnapshot:
    last: float
    bid: float
    ask: float
    high: float
    low: float


@dataclass(frozen=True)
class OrderBook:
    bids: Tuple[PriceLevel, ...]
    asks: Tuple[PriceLevel, ...]


@dataclass(frozen=True)
class TradeRecord:
    tid: int
    date: int
    price: float
    amount: float


def load_json(body: bytes) -> Any:
    try:
        return json.loads(body)
    except ValueError as exc:
        raise ResponseDecodeError(f"Response is not valid JSON: {exc}") from exc


def _number(value: Any, field_name: str) -> float:
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ResponseDecodeError(f"Field {field_name!r} is not numeric: {value!r}") from exc


def decode_ticker(body: bytes) -> Dict[str, TickerSnapshot]:
    """Decode the ``ticker`` payload into one snapshot per currency code.

    Missing or null prices decode as ``0.0``.
    """
    payload = load_json(body)
    if not isinstance(payload, Mapping):
        raise ResponseDecodeError("Ticker payload must be an object keyed by currency")

    tickers: Dict[str, TickerSnapshot] = {}
    for currency, values in payload.items():
        if not isinstance(values, Mapping):
            raise ResponseDecodeError(f"Ticker entry for {currency!r} must be an object")
        tickers[currency] = TickerSnapshot(
            **{name: _number(values.get(name), name) for name in ("last", "bid", "ask", "high", "low")}
        )
    return tickers


def _levels(raw: Optional[Any], side: str) -> Tuple[PriceLevel, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ResponseDecodeError(f"Order book {side} must be a list")
    levels = []
    for level in raw:
        if not isinstance(level, (list, tuple)) or len(level) < 2:
            raise ResponseDecodeError(f"Malformed {side} level: {level!r}")
        levels.append((_number(level[0], "price"), _number(level[1], "amount")))
    return tuple(levels)


def decode_order_book(body: bytes) -> OrderBook:
    payload = load_json(body)
    if not isinstance(payload, Mapping):
        raise ResponseDecodeError("Order book payload must be an object")
    return OrderBook(bids=_levels(payload.get("bids"), "bids"), asks=_levels(payload.get("asks"), "asks"))


def decode_trade_history(body: bytes) -> List[TradeRecord]:
    payload = load_json(body)
    if not isinstance(payload, list):
        raise ResponseDecodeError("Trade history payload must be a list")

    trades = []
    for item in payload:
        if not isinstance(item, Mapping):
            raise ResponseDecodeError(f"Malformed trade: {item!r}")
        try:
            tid = int(item["tid"])
            date = int(item["date"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ResponseDecodeError(f"Trade is missing tid/date: {item!r}") from exc
        trades.append(
            TradeRecord(
                tid=tid,
                date=date,
                price=_number(item.get("price"), "price"),
                amount=_number(item.get("amount"), "amount"),
            )
        )
    return trades


__all__ = [
    "OrderBook",
    "PriceLevel",
    "TickerSnapshot",
    "TradeRecord",
    "decode_order_book",
    "decode_ticker",
    "decode_trade_history",
    "load_json",
]
