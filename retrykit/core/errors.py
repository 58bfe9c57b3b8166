"""Error variants for retrykit.

Failures observed at the HTTP boundary are translated into a small closed set
of exception types so classification can match on types instead of poking at
arbitrary attributes:

- NetworkError: server unreachable (ECONNREFUSED, ENOTFOUND, ECONNRESET)
- RequestTimeoutError: request exceeded its timeout (ETIMEDOUT)
- HttpStatusError: server answered with a non-2xx status
- GenericError: anything else
"""

import asyncio
import socket
from typing import Any, Optional

# Low-level connection codes that are always retried.
CONNECTION_ERROR_CODES = frozenset({"ECONNREFUSED", "ENOTFOUND", "ETIMEDOUT", "ECONNRESET"})


class ApiError(Exception):
    """Base class for failures of a remote call."""

    code: Optional[str] = None
    status: Optional[int] = None

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class NetworkError(ApiError):
    """The server could not be reached."""


class RequestTimeoutError(ApiError):
    """The request did not complete within its timeout."""

    code = "ETIMEDOUT"


class HttpStatusError(ApiError):
    """The server answered with an error status.

    Attributes:
        status: HTTP status code
        data: Decoded response body (dict for JSON bodies, str otherwise, or None)
    """

    def __init__(self, status: int, message: Optional[str] = None, data: Any = None):
        super().__init__(message or f"Request failed with status code {status}")
        self.status = status
        self.data = data


class GenericError(ApiError):
    """Failure that fits none of the other variants."""


def error_message(error: BaseException) -> str:
    """Get the message text of an error ('' if it has none)."""
    if isinstance(error, ApiError):
        return error.message or ""
    return str(error)


def error_code(error: BaseException) -> Optional[str]:
    """Get the low-level connection code of an error, if any.

    Built-in socket exceptions map onto the same codes as NetworkError.
    """
    if isinstance(error, ApiError):
        return error.code
    if isinstance(error, ConnectionRefusedError):
        return "ECONNREFUSED"
    if isinstance(error, ConnectionResetError):
        return "ECONNRESET"
    if isinstance(error, socket.gaierror):
        return "ENOTFOUND"
    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return "ETIMEDOUT"
    return None


def error_status(error: BaseException) -> Optional[int]:
    """Get the HTTP status code carried by an error, if any."""
    if isinstance(error, ApiError):
        return error.status
    return None


def _decode_body(response: Any) -> Any:
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        return getattr(response, "text", None) or None


def http_status_error(status: int, data: Any = None) -> HttpStatusError:
    """Build an HttpStatusError for status.

    The message is always the status text; server-provided text stays in
    data so it never feeds the retry decision.
    """
    return HttpStatusError(status, data=data)


def _is_dns_failure(exc: BaseException) -> bool:
    cause = exc
    while cause is not None:
        if isinstance(cause, socket.gaierror):
            return True
        cause = cause.__cause__ or cause.__context__
    text = str(exc).lower()
    return any(
        marker in text
        for marker in ("name or service not known", "nodename nor servname", "getaddrinfo")
    )


def from_transport_error(exc: Exception) -> ApiError:
    """Translate an httpx or requests exception into an ApiError variant.

    ApiError instances are returned unchanged. The caller is expected to
    ``raise from_transport_error(exc) from exc`` so the original stays chained.
    """
    import httpx
    import requests

    if isinstance(exc, ApiError):
        return exc

    message = str(exc) or type(exc).__name__

    # Timeouts first: httpx.ConnectTimeout is also a TransportError
    if isinstance(exc, (httpx.TimeoutException, requests.exceptions.Timeout)):
        return RequestTimeoutError(message)

    if isinstance(exc, httpx.HTTPStatusError):
        return http_status_error(exc.response.status_code, _decode_body(exc.response))
    if isinstance(exc, requests.exceptions.HTTPError) and exc.response is not None:
        return http_status_error(exc.response.status_code, _decode_body(exc.response))

    if isinstance(exc, (httpx.ConnectError, requests.exceptions.ConnectionError)):
        code = "ENOTFOUND" if _is_dns_failure(exc) else "ECONNREFUSED"
        return NetworkError(message, code=code)

    if isinstance(exc, (httpx.ReadError, httpx.WriteError, httpx.RemoteProtocolError)):
        return NetworkError(message, code="ECONNRESET")

    if isinstance(exc, httpx.TransportError):
        return NetworkError(message)

    return GenericError(message)
