"""Exception types raised by the LakeBTC client."""


class LakeBTCError(Exception):
    """Base class for all LakeBTC client errors."""


class RequestBuildError(LakeBTCError, ValueError):
    """Inputs are malformed and no request could be built."""


class TransportError(LakeBTCError):
    """The HTTP call could not be completed."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url = url


class ResponseDecodeError(LakeBTCError):
    """A public endpoint returned a body that cannot be decoded."""


__all__ = ["LakeBTCError", "RequestBuildError", "TransportError", "ResponseDecodeError"]
