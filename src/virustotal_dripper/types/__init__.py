# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Core types for the VirusTotal dripper.

This module re-exports the descriptor, queue and response types.
"""

from .queue import JobPriority, QueuedJob, QueueSnapshot
from .request import HttpMethod, ParamValue, RequestDescriptor, UploadFile
from .response import ApiResponse

__all__ = [
    "ApiResponse",
    "HttpMethod",
    "JobPriority",
    "ParamValue",
    "QueueSnapshot",
    "QueuedJob",
    "RequestDescriptor",
    "UploadFile",
]
