# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Response classification.

The service answers HTTP 200 even for lookups that failed semantically and
signals that with ``"response_code": 0`` in the body. Classification keeps
that case distinct from both success and transport-level failure.
"""

import json
from typing import Any

from ..exceptions import (
    FORBIDDEN_HINT,
    NOT_FOUND_HINT,
    ForbiddenError,
    HttpError,
    NotFoundError,
    NotFoundOrInvalidError,
    ResponseError,
)
from ..types.response import ApiResponse

_UNPARSED = object()


def _parse_body(body: str) -> Any:
    try:
        return json.loads(body)
    except ValueError:
        return _UNPARSED


def _error_payload(status_code: int, parsed: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {"code": status_code}
    if isinstance(parsed, dict):
        payload.update(parsed)
    return payload


def _is_zero_response_code(parsed: Any) -> bool:
    if not isinstance(parsed, dict) or "response_code" not in parsed:
        return False
    code = parsed["response_code"]
    return not isinstance(code, bool) and code == 0


def classify_response(
    status_code: int, path: str, body: str
) -> ApiResponse | ResponseError:
    """
    Classify one completed exchange.

    Returns the error instead of raising it, so the mapping can be inspected
    exhaustively; RequestExecutor raises it.

    Args:
        status_code: HTTP status of the response
        path: Endpoint path or URL that was requested
        body: Full response body text

    Returns:
        ApiResponse for a success, otherwise one of NotFoundOrInvalidError,
        ForbiddenError, NotFoundError or HttpError
    """
    parsed = _parse_body(body)

    if status_code == 200:
        if parsed is _UNPARSED:
            return HttpError(
                f"Response from {path} is not valid JSON",
                status_code,
                path,
                body,
                {"code": status_code},
            )
        if _is_zero_response_code(parsed):
            message = parsed.get("verbose_msg") or "Resource not found or invalid"
            return NotFoundOrInvalidError(
                f"{message} ({path})",
                status_code,
                path,
                body,
                _error_payload(status_code, parsed),
            )
        return ApiResponse(status_code=status_code, path=path, payload=parsed)

    payload = _error_payload(status_code, parsed)
    if status_code == 403:
        return ForbiddenError(FORBIDDEN_HINT, status_code, path, body, payload)
    if status_code == 404:
        return NotFoundError(NOT_FOUND_HINT, status_code, path, body, payload)
    return HttpError(
        f"HTTP {status_code} from {path}", status_code, path, body, payload
    )


__all__ = ["classify_response"]
