import base64
import hashlib
import hmac
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping
from urllib.parse import urlencode

from .errors import RequestBuildError

GET_ACCOUNT_INFO = "getAccountInfo"
BUY_ORDER = "buyOrder"
SELL_ORDER = "sellOrder"
GET_ORDERS = "getOrders"
CANCEL_ORDER = "cancelOrder"
GET_TRADES = "getTrades"

AUTHENTICATED_METHODS = (GET_ACCOUNT_INFO, BUY_ORDER, SELL_ORDER, GET_ORDERS, CANCEL_ORDER, GET_TRADES)

REQUEST_METHOD = "POST"
CONTENT_TYPE = "application/x-www-form-urlencoded"

NonceSource = Callable[[], int]


def wall_clock_nonce() -> int:
    """Return the current wall-clock time in whole seconds since the epoch.

    Two calls within the same second return the same value. LakeBTC expects
    second-resolution tonces, so this is kept as-is; pass a different
    ``nonce_source`` to ``LakeBTCAuth`` to change it.
    """
    return int(time.time())


@dataclass(frozen=True)
class Credentials:
    """Access key and shared secret used to sign private requests."""

    access_key: str
    secret: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if not self.access_key:
            raise ValueError("access_key must be provided")
        if not self.secret:
            raise ValueError("secret must be provided")

    @classmethod
    def from_strings(cls, access_key: str, secret: str) -> "Credentials":
        # LakeBTC hands out the secret as plain text and signs with its raw bytes.
        return cls(access_key, (secret or "").encode("utf-8"))


def canonical_query(params: Mapping[str, object]) -> str:
    """Form-encode ``params`` with keys in lexicographic order.

    The exchange rebuilds this exact string to verify the signature, so the
    ordering never depends on how ``params`` was assembled.
    """
    items = []
    for key in sorted(params):
        value = params[key]
        if value is None:
            raise RequestBuildError(f"Parameter {key!r} has no value")
        items.append((key, str(value)))
    return urlencode(items)


def sign(secret: bytes, message: str) -> str:
    """Return the hex encoded HMAC-SHA256 of ``message`` keyed with ``secret``."""
    return hmac.new(secret, message.encode("utf-8"), hashlib.sha256).hexdigest()


@dataclass(frozen=True)
class SignedEnvelope:
    """A signed request body together with the headers that authenticate it."""

    nonce: int
    method: str
    body: str
    mac: str
    authorization: str

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8")

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Json-Rpc-Tonce": str(self.nonce),
            "Authorization": f"Basic {self.authorization}",
            "Content-Type": CONTENT_TYPE,
        }


class LakeBTCAuth:
    """Sign LakeBTC JSON-RPC style requests.

    Every call draws a fresh nonce, merges it with the access key, the fixed
    request metadata, the method name and the opaque parameter string, then
    signs the canonical form-encoded string with HMAC-SHA256. The resulting
    envelope carries that exact string as the body to send.

    Instances hold no mutable state and can be shared between threads.
    """

    def __init__(self, credentials: Credentials, nonce_source: NonceSource = wall_clock_nonce) -> None:
        self.credentials = credentials
        self._nonce_source = nonce_source

    @classmethod
    def from_keys(cls, access_key: str, secret_key: str, nonce_source: NonceSource = wall_clock_nonce) -> "LakeBTCAuth":
        return cls(Credentials.from_strings(access_key, secret_key), nonce_source=nonce_source)

    @property
    def access_key(self) -> str:
        return self.credentials.access_key

    def __call__(self, method: str, params: str = "") -> SignedEnvelope:
        """Return the signed envelope for ``method`` with parameter string ``params``."""
        if method not in AUTHENTICATED_METHODS:
            raise RequestBuildError(f"Unknown authenticated method: {method!r}")
        if not isinstance(params, str):
            raise RequestBuildError(f"params must be a string, got {type(params).__name__}")

        nonce = self._nonce_source()
        body = canonical_query(
            {
                "tnonce": nonce,
                "accesskey": self.credentials.access_key,
                "requestmethod": REQUEST_METHOD,
                "id": nonce,
                "method": method,
                "params": params,
            }
        )
        mac = sign(self.credentials.secret, body)
        token = f"{self.credentials.access_key}:{mac}".encode("utf-8")
        authorization = base64.b64encode(token).decode("ascii")

        return SignedEnvelope(nonce=nonce, method=method, body=body, mac=mac, authorization=authorization)


__all__ = [
    "AUTHENTICATED_METHODS",
    "BUY_ORDER",
    "CANCEL_ORDER",
    "GET_ACCOUNT_INFO",
    "GET_ORDERS",
    "GET_TRADES",
    "SELL_ORDER",
    "Credentials",
    "LakeBTCAuth",
    "NonceSource",
    "SignedEnvelope",
    "canonical_query",
    "sign",
    "wall_clock_nonce",
]
