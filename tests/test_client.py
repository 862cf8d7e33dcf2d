import base64
import json
import logging
from decimal import Decimal
from pathlib import Path

import pytest
from requests import exceptions as requests_exceptions

from lakebtc_dlt_source.spot.auth import Credentials, LakeBTCAuth, sign
from lakebtc_dlt_source.spot.client import LakeBTCClient, order_book_currency, order_book_endpoint
from lakebtc_dlt_source.spot.errors import RequestBuildError, ResponseDecodeError, TransportError
from lakebtc_dlt_source.spot.models import TickerSnapshot
from lakebtc_dlt_source.spot.settings import BASE_URL, ExchangeSettings
from lakebtc_dlt_source.spot.transport import HttpTransport

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def fixture_bytes(name: str) -> bytes:
    return (FIXTURES_DIR / name).read_bytes()


class StubResponse:
    def __init__(self, status_code, content=b""):
        self.status_code = status_code
        self.content = content


class StubSession:
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []

    def _next(self, verb, url, **kwargs):
        self.calls.append({"verb": verb, "url": url, **kwargs})
        if not self._responses:
            raise AssertionError("No responses left")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, timeout=None, **kwargs):
        return self._next("GET", url, timeout=timeout, **kwargs)

    def post(self, url, timeout=None, data=None, headers=None):
        return self._next("POST", url, timeout=timeout, data=data, headers=headers)


def make_client(responses, *, auth=None, settings=None):
    session = StubSession(responses)
    client = LakeBTCClient(
        auth=auth,
        transport=HttpTransport(session=session, timeout=5.0),
        settings=settings or ExchangeSettings(),
    )
    return client, session


def make_auth(nonce=1_700_000_000):
    return LakeBTCAuth(Credentials.from_strings("me@example.com", "s3cret"), nonce_source=lambda: nonce)


def test_transmitted_body_is_the_signed_string():
    client, session = make_client([StubResponse(200, b"{}")] * 4, auth=make_auth())

    client.get_account_info()
    client.buy(amount=0.001, price=100.5, currency="USD")
    client.cancel_order(42)
    client.get_trades(1_700_000_000)

    for call in session.calls:
        assert call["verb"] == "POST"
        assert call["url"] == BASE_URL
        body = call["data"].decode("utf-8")
        token = base64.b64decode(call["headers"]["Authorization"].removeprefix("Basic ")).decode("utf-8")
        assert token == f"me@example.com:{sign(b's3cret', body)}"
        assert call["headers"]["Json-Rpc-Tonce"] == "1700000000"
        assert call["headers"]["Content-Type"] == "application/x-www-form-urlencoded"


def test_trading_operations_encode_params():
    client, session = make_client([StubResponse(200, b"{}")] * 6, auth=make_auth())

    client.buy(amount=0.001, price=100.5, currency="USD")
    client.sell(amount=0.001, price=100.5, currency="USD")
    client.cancel_order(42)
    client.get_trades()
    client.get_trades(1_700_000_000)
    client.get_orders()

    bodies = [call["data"].decode("utf-8") for call in session.calls]
    assert "method=buyOrder&params=100.50000000%2C0.00100000%2CUSD&" in bodies[0]
    assert "method=sellOrder&params=100.50000000%2C0.00100000%2CUSD&" in bodies[1]
    assert "method=cancelOrder&params=42&" in bodies[2]
    assert "method=getTrades&params=&" in bodies[3]
    assert "method=getTrades&params=1700000000&" in bodies[4]
    assert "method=getOrders&params=&" in bodies[5]


def test_trade_rejects_unknown_side_without_sending():
    client, session = make_client([], auth=make_auth())

    with pytest.raises(RequestBuildError):
        client.trade("hold", 1.0, 1.0, "USD")
    assert session.calls == []


def test_private_requests_require_auth():
    client, session = make_client([])

    with pytest.raises(RequestBuildError):
        client.get_account_info()
    assert session.calls == []


def test_rejected_request_is_returned_not_raised():
    client, _ = make_client([StubResponse(401, fixture_bytes("error.json"))], auth=make_auth())

    response = client.get_orders()

    assert response.status_code == 401
    assert not response.ok
    assert response.json() == {"error": "Invalid tonce"}


def test_api_error_with_http_200_is_returned_unchanged():
    client, _ = make_client([StubResponse(200, fixture_bytes("error.json"))], auth=make_auth())

    response = client.cancel_order(7)

    assert response.ok
    assert response.body == fixture_bytes("error.json")


def test_transport_failure_is_raised_once_without_retry():
    failure = requests_exceptions.ConnectionError("connection refused")
    client, session = make_client([failure, StubResponse(200, b"{}")], auth=make_auth())

    with pytest.raises(TransportError) as exc:
        client.get_account_info()

    assert exc.value.url == BASE_URL
    assert isinstance(exc.value.__cause__, requests_exceptions.ConnectionError)
    assert len(session.calls) == 1


def test_timeout_is_forwarded_per_call():
    client, session = make_client([StubResponse(200, b"{}")] * 2, auth=make_auth())

    client.post_signed("getOrders", timeout=1.5)
    client.get_orders()

    assert session.calls[0]["timeout"] == 1.5
    assert session.calls[1]["timeout"] == 5.0


def test_get_ticker_decodes_snapshots():
    client, session = make_client([StubResponse(200, fixture_bytes("ticker.json"))])

    tickers = client.get_ticker()

    assert session.calls[0]["url"] == BASE_URL + "ticker"
    assert "headers" not in session.calls[0]
    assert tickers["USD"] == TickerSnapshot(last=376.48, bid=376.02, ask=376.48, high=381.27, low=370.52)
    assert tickers["CNY"].last == pytest.approx(2328.69)
    assert tickers["CNY"].low == 0.0


@pytest.mark.parametrize(
    "currency, endpoint",
    [("CNY", "bcorderbook_cny"), ("USD", "bcorderbook"), ("cny", "bcorderbook"), ("", "bcorderbook")],
)
def test_order_book_currency_routing(currency, endpoint):
    assert order_book_endpoint(currency) == endpoint
    assert order_book_currency(currency) == ("CNY" if endpoint == "bcorderbook_cny" else "USD")

    client, session = make_client([StubResponse(200, fixture_bytes("order_book.json"))])
    book = client.get_order_book(currency)

    assert session.calls[0]["url"] == BASE_URL + endpoint
    assert book.asks[0] == (376.48, 0.5)
    assert len(book.bids) == 2


def test_get_trade_history_decodes_records():
    client, _ = make_client([StubResponse(200, fixture_bytes("trade_history.json"))])

    trades = client.get_trade_history()

    assert [trade.tid for trade in trades] == [9001, 9002, 9003]
    assert trades[2].price == pytest.approx(376.55)


def test_public_decode_failure_raises():
    client, _ = make_client([StubResponse(502, b"<html>Bad Gateway</html>")])

    with pytest.raises(ResponseDecodeError):
        client.get_ticker()


def test_verbose_logs_request_and_raw_response(caplog):
    settings = ExchangeSettings(verbose=True)
    client, _ = make_client([StubResponse(200, json.dumps({"ok": True}).encode())], auth=make_auth(), settings=settings)
    caplog.set_level(logging.INFO, logger="lakebtc_dlt_source.spot.client")

    client.get_account_info()

    assert "calling method getAccountInfo" in caplog.text
    assert '{"ok": true}' in caplog.text


def test_exchange_settings_fees():
    settings = ExchangeSettings()
    assert settings.name == "LakeBTC"
    assert settings.enabled is True
    assert settings.get_fee(maker=True) == 0.15
    assert settings.get_fee(maker=False) == 0.2


def test_buy_accepts_decimal_amounts():
    client, session = make_client([StubResponse(200, b"{}")], auth=make_auth())

    client.buy(amount=Decimal("0.01"), price=Decimal("420"), currency="USD")

    assert "params=420.00000000%2C0.01000000%2CUSD&" in session.calls[0]["data"].decode("utf-8")
