"""Trades resource - incremental sync of the account's own trades (private)."""

from typing import Any, Iterator, Mapping, Optional

import dlt

from ..auth import LakeBTCAuth
from ..client import LakeBTCClient
from ..helpers import (
    coerce_timestamp_s,
    content_key,
    initial_since,
    log_resource_stats,
    rows_from_payload,
    with_raw_data,
)
from ..models import load_json

TRADE_TIMESTAMP_FIELDS = ("at", "date")


@dlt.resource(name="trades", primary_key="trade_key", write_disposition="merge")
def trades(
    auth: Optional[LakeBTCAuth],
    start_timestamp: Optional[str] = None,
    client: Optional[LakeBTCClient] = None,
) -> Iterator[Mapping[str, Any]]:
    """Load the account trade log with an incremental ``since`` cursor.

    The cursor is the largest trade time seen, in Unix seconds, stored as
    ``last_timestamp`` in resource state and sent as the ``getTrades``
    parameter on the next run. Trades carry no id, so rows are merged on a
    hash of their content and a trade replayed at the cursor boundary is
    stored once.

    Parameters
    ----------
    auth:
        Required LakeBTCAuth instance for authentication.
    start_timestamp:
        Optional start timestamp (ISO 8601 or Unix seconds) to seed the first
        load. Ignored if state already exists.
    client:
        Optional pre-configured LakeBTCClient for testing.
    """
    if not auth:
        raise ValueError("trades resource requires authentication")

    state = dlt.current.resource_state()
    client = client or LakeBTCClient(auth=auth)

    since = initial_since(start_timestamp, state)
    response = client.get_trades(since)

    max_timestamp_seen = since
    count = 0
    for row in rows_from_payload(load_json(response.body)):
        timestamp = None
        for name in TRADE_TIMESTAMP_FIELDS:
            timestamp = coerce_timestamp_s(row.get(name))
            if timestamp is not None:
                break
        if timestamp is not None and (not max_timestamp_seen or timestamp > max_timestamp_seen):
            max_timestamp_seen = timestamp
        yield with_raw_data(
            row,
            trade_key=content_key(row),
            http_status=response.status_code,
            _cursor_timestamp=timestamp,
        )
        count += 1

    if max_timestamp_seen:
        state["last_timestamp"] = str(max_timestamp_seen)
    log_resource_stats("trades", count, state.get("last_timestamp"))


__all__ = ["trades", "TRADE_TIMESTAMP_FIELDS"]
