# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""VirusTotal dripper - a rate-limited client for the VirusTotal v2 API.

The service enforces a strict request quota and gives no warning before
rejecting a request, so the client meters itself: every call is queued in a
windowed admission queue that releases at most ``quota_capacity`` requests
per ``quota_window_ms``, in submission order, with optional expedited jobs.

Key Features:
    - Leaky-bucket admission queue with latency padding
    - Classified responses (a 200 with ``response_code`` 0 is its own error)
    - Size-based upload routing, including one-time upload URLs in extended mode
    - Prometheus counters for submissions, releases and outcomes

Quick Start:
    >>> from virustotal_dripper import VirusTotalClient, NotFoundOrInvalidError
    >>>
    >>> async with VirusTotalClient("my-api-key") as vt:
    ...     try:
    ...         report = await vt.get_file_report(sha256)
    ...     except NotFoundOrInvalidError:
    ...         await vt.scan_path("sample.bin")

Version: 1.0.0
"""

__version__ = "1.0.0"

from .client import VirusTotalClient
from .config import ClientConfig
from .constants import API, ApiEndpoints
from .exceptions import (
    ClientClosedError,
    ConfigurationError,
    ForbiddenError,
    HttpError,
    ModeError,
    NotFoundError,
    NotFoundOrInvalidError,
    ResponseError,
    SizeExceededError,
    TransportError,
    VirusTotalError,
)
from .protocols import FileReaderProtocol, PathFileReader
from .routing import UploadPlan, UploadRoute, UploadRouter, plan_upload
from .scheduler import AdmissionQueue, Dispatcher
from .transport import RequestExecutor, classify_response
from .types import (
    ApiResponse,
    HttpMethod,
    JobPriority,
    QueueSnapshot,
    RequestDescriptor,
    UploadFile,
)

__all__ = [
    "API",
    # Scheduling
    "AdmissionQueue",
    "ApiEndpoints",
    # Types
    "ApiResponse",
    "ClientClosedError",
    # Config
    "ClientConfig",
    # Exceptions
    "ConfigurationError",
    "Dispatcher",
    # Protocols
    "FileReaderProtocol",
    "ForbiddenError",
    "HttpError",
    "HttpMethod",
    "JobPriority",
    "ModeError",
    "NotFoundError",
    "NotFoundOrInvalidError",
    "PathFileReader",
    "QueueSnapshot",
    "RequestDescriptor",
    # Transport
    "RequestExecutor",
    "ResponseError",
    "SizeExceededError",
    "TransportError",
    "UploadFile",
    # Routing
    "UploadPlan",
    "UploadRoute",
    "UploadRouter",
    "VirusTotalClient",
    "VirusTotalError",
    "classify_response",
    "plan_upload",
]
