# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
HTTP execution and response classification.

This module provides:
- RequestExecutor: performs one exchange over httpx and raises classified errors
- classify_response: pure status/body to outcome mapping
"""

from .classifier import classify_response
from .executor import FORM_CONTENT_TYPE, RequestExecutor, encode_param

__all__ = ["FORM_CONTENT_TYPE", "RequestExecutor", "classify_response", "encode_param"]
