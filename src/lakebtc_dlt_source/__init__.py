"""LakeBTC DLT Source - connector and client for the LakeBTC v1 API.

This package provides a dlt source and a plain client for LakeBTC:
- Public market data: ticker, order book (USD/CNY), trade history
- Private calls signed with HMAC-SHA256: account info, orders, trades

Example:
    >>> from lakebtc_dlt_source import lakebtc_source
    >>> import dlt
    >>>
    >>> pipeline = dlt.pipeline(
    ...     pipeline_name="lakebtc",
    ...     destination="duckdb",
    ...     dataset_name="lakebtc_data"
    ... )
    >>>
    >>> info = pipeline.run(lakebtc_source())

Trading without dlt:
    >>> from lakebtc_dlt_source import LakeBTCAuth, LakeBTCClient
    >>> client = LakeBTCClient(auth=LakeBTCAuth.from_keys("me@example.com", "secret"))
    >>> response = client.buy(amount=0.01, price=420.0, currency="USD")
"""

# Re-export the spot source and client for convenience
from lakebtc_dlt_source.spot import Credentials, LakeBTCAuth, LakeBTCClient, lakebtc_source

__version__ = "0.1.0"
__all__ = ["lakebtc_source", "Credentials", "LakeBTCAuth", "LakeBTCClient"]
