from typing import Iterable, Optional, Sequence

import dlt

from .auth import Credentials, LakeBTCAuth
from .client import DEFAULT_CURRENCY, LakeBTCClient
from . import resources


@dlt.source(name="lakebtc")
def lakebtc_source(
    access_key: Optional[str] = dlt.secrets.value,
    secret_key: Optional[str] = dlt.secrets.value,
    start_timestamp: Optional[str] = None,
    resources_to_load: Optional[Sequence[str]] = None,
    currency: str = DEFAULT_CURRENCY,
    auth: Optional[LakeBTCAuth] = None,
) -> Iterable:
    """Assemble LakeBTC REST resources for DLT.

    By default, dlt will look for credentials in environment variables or secrets.toml:
    - LAKEBTC__ACCESS_KEY or lakebtc.access_key
    - LAKEBTC__SECRET_KEY or lakebtc.secret_key

    Parameters
    ----------
    access_key:
        LakeBTC access key (the account e-mail). Required for private resources.
    secret_key:
        LakeBTC API secret. Required for private resources.
    start_timestamp:
        Optional Unix seconds (or ISO8601 string) to seed the first incremental
        load of the trades resource.
    resources_to_load:
        Explicit subset of resource names to include. If omitted, public
        resources are always included and private ones only when credentials
        are available.
    currency:
        Order book currency; "CNY" selects the CNY book.
    auth:
        Optional pre-configured LakeBTCAuth instance. If provided, access_key
        and secret_key are ignored.
    """

    if auth is None and access_key and secret_key:
        auth = LakeBTCAuth.from_keys(access_key, secret_key)

    if resources_to_load:
        selected = set(resources_to_load)
    elif auth:
        selected = set(resources.ALL_RESOURCE_NAMES)
    else:
        selected = set(resources.PUBLIC_RESOURCE_NAMES)

    client = LakeBTCClient(auth=auth)

    if "ticker" in selected:
        yield resources.ticker(client=client)

    if "order_book" in selected:
        yield resources.order_book(currency=currency, client=client)

    if "trade_history" in selected:
        yield resources.trade_history(client=client)

    if "account_info" in selected:
        yield resources.account_info(auth=auth, client=client)

    if "open_orders" in selected:
        yield resources.open_orders(auth=auth, client=client)

    if "trades" in selected:
        yield resources.trades(auth=auth, start_timestamp=start_timestamp, client=client)


__all__ = ["lakebtc_source", "Credentials", "LakeBTCAuth", "LakeBTCClient"]
