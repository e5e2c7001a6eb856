# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request descriptor types.

A RequestDescriptor is everything the executor needs for one exchange. The
API key is never part of ``params``; the executor attaches it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

ParamValue = Union[str, bool, int, float]


class HttpMethod(Enum):
    """HTTP methods used by the API."""

    GET = "GET"
    POST = "POST"

    @classmethod
    def parse(cls, method: "str | HttpMethod") -> "HttpMethod":
        """Accept an HttpMethod or a case-insensitive method name."""
        if isinstance(method, cls):
            return method
        try:
            return cls(str(method).upper())
        except ValueError as e:
            raise ValueError(f"Unsupported HTTP method: {method}") from e


@dataclass(frozen=True)
class UploadFile:
    """A file part for multipart scan uploads."""

    filename: str
    content: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class RequestDescriptor:
    """
    One API call, before the API key is attached.

    Attributes:
        method: GET carries params in the query string, POST in the body
        path: Endpoint path relative to the base URL, or an absolute URL
            (one-time upload URLs are absolute)
        params: Parameter name to value mapping
        upload: Optional file part; makes a POST multipart instead of form-encoded
    """

    method: HttpMethod
    path: str
    params: dict[str, ParamValue] = field(default_factory=dict)
    upload: UploadFile | None = None

    def __post_init__(self) -> None:
        if self.upload is not None and self.method is not HttpMethod.POST:
            raise ValueError("File uploads require the POST method")
        if "apikey" in self.params:
            raise ValueError("The API key is attached automatically; do not pass 'apikey'")


__all__ = ["HttpMethod", "ParamValue", "RequestDescriptor", "UploadFile"]
