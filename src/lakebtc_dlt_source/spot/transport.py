"""Blocking HTTP transport returning status code and raw body."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from dlt.sources.helpers import requests
from requests import exceptions as requests_exceptions

from .errors import TransportError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Status code and undecoded body of one HTTP exchange.

    A 2xx status says nothing about whether LakeBTC accepted the call; the
    body may still carry an API error.
    """

    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.body)


@dataclass(slots=True)
class HttpTransport:
    """Perform exactly one HTTP call per request, without retries.

    Parameters
    ----------
    session:
        Optional requests.Session. If not provided, a dlt session that does
        not raise on HTTP error statuses is created.
    timeout:
        Default timeout in seconds, overridable per call (default: 30.0).
    """

    session: Optional[requests.Session] = None
    timeout: float = 30.0

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session(raise_for_status=False)

    def get(self, url: str, *, timeout: Optional[float] = None) -> TransportResponse:
        return self._send("GET", url, timeout=timeout)

    def post(
        self,
        url: str,
        data: bytes,
        headers: Mapping[str, str],
        *,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        return self._send("POST", url, data=data, headers=dict(headers), timeout=timeout)

    def _send(self, verb: str, url: str, *, timeout: Optional[float], **kwargs: Any) -> TransportResponse:
        effective_timeout = self.timeout if timeout is None else timeout
        try:
            if verb == "GET":
                response = self.session.get(url, timeout=effective_timeout, **kwargs)
            else:
                response = self.session.post(url, timeout=effective_timeout, **kwargs)
        except requests_exceptions.RequestException as exc:
            raise TransportError(f"{verb} {url} failed: {exc}", url=url) from exc

        LOGGER.debug("%s %s -> HTTP %s", verb, url, response.status_code)
        return TransportResponse(status_code=response.status_code, body=response.content or b"")


__all__ = ["HttpTransport", "TransportResponse"]
