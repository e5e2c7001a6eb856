# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Successful API response type."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ApiResponse:
    """
    The Success variant of a classified exchange.

    Every other outcome is a ResponseError subclass, see ``exceptions``.

    Attributes:
        status_code: Always 200 for a classified success
        path: The endpoint path or URL that was requested
        payload: Parsed JSON body
    """

    status_code: int
    path: str
    payload: Any

    @property
    def response_code(self) -> Any:
        """The service's ``response_code`` field, if the payload is an object."""
        if isinstance(self.payload, dict):
            return self.payload.get("response_code")
        return None


__all__ = ["ApiResponse"]
