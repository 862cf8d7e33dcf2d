"""Open orders resource - snapshot of resting orders (private)."""

from typing import Any, Iterable, Mapping, Optional

import dlt

from ..auth import LakeBTCAuth
from ..client import LakeBTCClient
from ..helpers import log_resource_stats, rows_from_payload, with_raw_data
from ..models import load_json


@dlt.resource(name="open_orders", write_disposition="replace")
def open_orders(
    auth: Optional[LakeBTCAuth],
    client: Optional[LakeBTCClient] = None,
) -> Iterable[Mapping[str, Any]]:
    """Load currently open orders (snapshot/replace).

    Raises
    ------
    ValueError:
        If auth is not provided (required for private endpoint).
    """
    if not auth:
        raise ValueError("open_orders resource requires authentication")

    client = client or LakeBTCClient(auth=auth)
    response = client.get_orders()

    count = 0
    for row in rows_from_payload(load_json(response.body)):
        yield with_raw_data(row, http_status=response.status_code)
        count += 1

    log_resource_stats("open_orders", count, None)


__all__ = ["open_orders"]
