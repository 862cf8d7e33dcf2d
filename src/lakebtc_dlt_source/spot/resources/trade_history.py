"""Trade history resource - recent public trades."""

from dataclasses import asdict
from typing import Any, Iterable, Mapping, Optional

import dlt

from ..client import LakeBTCClient
from ..helpers import log_resource_stats


@dlt.resource(name="trade_history", primary_key="tid", write_disposition="merge")
def trade_history(client: Optional[LakeBTCClient] = None) -> Iterable[Mapping[str, Any]]:
    """Load recent public trades, deduplicated on ``tid``.

    Parameters
    ----------
    client:
        Optional pre-configured LakeBTCClient for testing.
    """
    client = client or LakeBTCClient()
    trades = client.get_trade_history()

    for trade in trades:
        yield asdict(trade)

    log_resource_stats("trade_history", len(trades), None)


__all__ = ["trade_history"]
