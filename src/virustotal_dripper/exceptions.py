# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the VirusTotal dripper client.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from VirusTotalError, making it easy to catch
all client-related exceptions with a single except clause.

The set of failure kinds is closed:

* SizeExceededError - payload too large for the active mode
* ModeError - operation requires extended mode
* TransportError - network failure during the exchange (ClientClosedError
  when the client was closed before the request was sent)
* ResponseError subclasses - the service answered, but not successfully:
  NotFoundOrInvalidError, ForbiddenError, NotFoundError, HttpError
"""

from typing import Any

FORBIDDEN_HINT = (
    "Forbidden: this endpoint requires an extended quota (private API) key, "
    "or the API key is invalid."
)
NOT_FOUND_HINT = "Not found: the requested API endpoint does not exist."


class VirusTotalError(Exception):
    """Base exception for all client errors.

    Example:
        try:
            report = await client.get_file_report(sha256)
        except VirusTotalError as e:
            logger.error(f"VirusTotal lookup failed: {e}")
    """

    pass


class ConfigurationError(VirusTotalError):
    """Raised when client configuration is invalid.

    Common causes include:
    - Non-positive quota capacity or window
    - Negative assumed latency
    - Unknown option types
    """

    pass


class SizeExceededError(VirusTotalError):
    """Raised when an upload payload exceeds the size threshold for the active mode.

    Attributes:
        size: Size of the rejected payload in bytes.
        limit: The threshold that was exceeded, in bytes.
    """

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"Payload of {size} bytes exceeds the maximum upload size of {limit} bytes"
        )
        self.size = size
        self.limit = limit


class ModeError(VirusTotalError):
    """Raised when an operation requires extended mode but the client is not configured for it.

    Attributes:
        operation: Name of the operation that was refused.
    """

    def __init__(self, operation: str):
        super().__init__(
            f"{operation} requires extended mode (private API); "
            "construct the client with extended_mode=True"
        )
        self.operation = operation


class TransportError(VirusTotalError):
    """Raised when the network exchange itself fails.

    The underlying httpx exception is chained as ``__cause__``. The client does
    not retry; retry policy belongs to the caller.

    Attributes:
        path: The endpoint path or URL being requested.
    """

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class ClientClosedError(TransportError):
    """Raised for requests that never reached the network because the client was closed.

    Requests still waiting in the admission queue when ``aclose()`` runs fail
    with this error, as does any request submitted afterwards.
    """

    def __init__(self, path: str):
        super().__init__(f"Client closed before {path} was sent", path)


class ResponseError(VirusTotalError):
    """Base class for errors classified from a completed HTTP response.

    Attributes:
        status_code: HTTP status code of the response.
        path: The endpoint path or URL that was requested.
        body: Raw response body text.
        payload: ``{"code": status_code}`` merged with the fields of the
            response body when it parses as a JSON object.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        path: str,
        body: str = "",
        payload: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.path = path
        self.body = body
        self.payload: dict[str, Any] = payload if payload is not None else {
            "code": status_code
        }


class NotFoundOrInvalidError(ResponseError):
    """The service answered 200 but reported ``response_code == 0``.

    The resource is usually not in the dataset yet (for example, a hash that
    has never been scanned). Callers typically treat this as "not found" and
    may submit the resource for scanning.
    """

    pass


class ForbiddenError(ResponseError):
    """HTTP 403. Usually an extended-quota endpoint used without entitlement."""

    pass


class NotFoundError(ResponseError):
    """HTTP 404. The endpoint path does not exist."""

    pass


class HttpError(ResponseError):
    """Any other unsuccessful status (for example 204 when the quota is exhausted)."""

    pass


__all__ = [
    "FORBIDDEN_HINT",
    "NOT_FOUND_HINT",
    "ConfigurationError",
    "ForbiddenError",
    "HttpError",
    "ModeError",
    "NotFoundError",
    "NotFoundOrInvalidError",
    "ResponseError",
    "SizeExceededError",
    "TransportError",
    "VirusTotalError",
]
