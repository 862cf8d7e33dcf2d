"""Ticker resource - snapshot of last/bid/ask/high/low per currency."""

from dataclasses import asdict
from typing import Any, Iterable, Mapping, Optional

import dlt

from ..client import LakeBTCClient
from ..helpers import log_resource_stats


@dlt.resource(name="ticker", primary_key="currency", write_disposition="replace")
def ticker(client: Optional[LakeBTCClient] = None) -> Iterable[Mapping[str, Any]]:
    """Load the current ticker for every quoted currency (snapshot/replace).

    Public endpoint, no authentication.

    Parameters
    ----------
    client:
        Optional pre-configured LakeBTCClient for testing.
    """
    client = client or LakeBTCClient()
    snapshots = client.get_ticker()

    count = 0
    for currency, snapshot in snapshots.items():
        record = asdict(snapshot)
        record["currency"] = currency
        yield record
        count += 1

    log_resource_stats("ticker", count, None)


__all__ = ["ticker"]
