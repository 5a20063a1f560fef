"""Typed failures raised by the pokedex read operations.

Every error carries the HTTP status the server layer should answer with, so
the API surface never has to guess how a failure maps onto a response.
"""

from typing import Optional


class PokedexError(Exception):
    """Base class for all pokedex failures."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class FetchError(PokedexError):
    """Upstream transport or status failure for a single request."""

    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        url: str,
        status: Optional[int] = None,
        transport: bool = False,
    ):
        super().__init__(message)
        self.url = url
        self.status = status
        self.transport = transport

    @property
    def is_not_found(self) -> bool:
        return self.status == 404


class BadRequest(PokedexError):
    status_code = 400


class NotFound(PokedexError):
    status_code = 404


class UpstreamError(PokedexError):
    status_code = 502


class IndexUnavailable(PokedexError):
    """Name index cache is cold and the refresh attempt failed."""

    status_code = 503


class InternalError(PokedexError):
    status_code = 500
