"""Account info resource - snapshot of balances and profile (private)."""

from typing import Any, Iterable, Mapping, Optional

import dlt

from ..auth import LakeBTCAuth
from ..client import LakeBTCClient
from ..helpers import log_resource_stats, rows_from_payload, with_raw_data
from ..models import load_json


@dlt.resource(name="account_info", write_disposition="replace")
def account_info(
    auth: Optional[LakeBTCAuth],
    client: Optional[LakeBTCClient] = None,
) -> Iterable[Mapping[str, Any]]:
    """Load the account info payload (snapshot/replace).

    Parameters
    ----------
    auth:
        Required LakeBTCAuth instance for authentication.
    client:
        Optional pre-configured LakeBTCClient for testing.

    Raises
    ------
    ValueError:
        If auth is not provided (required for private endpoint).
    """
    if not auth:
        raise ValueError("account_info resource requires authentication")

    client = client or LakeBTCClient(auth=auth)
    response = client.get_account_info()

    count = 0
    for row in rows_from_payload(load_json(response.body)):
        yield with_raw_data(row, http_status=response.status_code)
        count += 1

    log_resource_stats("account_info", count, None)


__all__ = ["account_info"]
