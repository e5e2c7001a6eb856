# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the `vt_dripper_` prefix.

Label Best Practices:
    - `priority` - Job priority (enum: normal, expedited)
    - `outcome` - Classified result (enum: success, not_found_or_invalid,
      forbidden, not_found, http_error, transport_error)

    NEVER use resource hashes, URLs or API keys as labels.
"""

METRIC_PREFIX = "vt_dripper"
"""Prefix for all Prometheus metrics in this library."""

JOBS_SUBMITTED_TOTAL = f"{METRIC_PREFIX}_jobs_submitted_total"
"""Total jobs submitted to the admission queue."""

JOBS_RELEASED_TOTAL = f"{METRIC_PREFIX}_jobs_released_total"
"""Total jobs released by the admission queue."""

REPLENISHMENTS_TOTAL = f"{METRIC_PREFIX}_replenishments_total"
"""Total quota window replenishments."""

RESPONSES_TOTAL = f"{METRIC_PREFIX}_responses_total"
"""Total completed exchanges, labelled by classified outcome."""

OUTCOME_SUCCESS = "success"
OUTCOME_NOT_FOUND_OR_INVALID = "not_found_or_invalid"
OUTCOME_FORBIDDEN = "forbidden"
OUTCOME_NOT_FOUND = "not_found"
OUTCOME_HTTP_ERROR = "http_error"
OUTCOME_TRANSPORT_ERROR = "transport_error"

OUTCOMES = (
    OUTCOME_SUCCESS,
    OUTCOME_NOT_FOUND_OR_INVALID,
    OUTCOME_FORBIDDEN,
    OUTCOME_NOT_FOUND,
    OUTCOME_HTTP_ERROR,
    OUTCOME_TRANSPORT_ERROR,
)

__all__ = [
    "JOBS_RELEASED_TOTAL",
    "JOBS_SUBMITTED_TOTAL",
    "METRIC_PREFIX",
    "OUTCOMES",
    "OUTCOME_FORBIDDEN",
    "OUTCOME_HTTP_ERROR",
    "OUTCOME_NOT_FOUND",
    "OUTCOME_NOT_FOUND_OR_INVALID",
    "OUTCOME_SUCCESS",
    "OUTCOME_TRANSPORT_ERROR",
    "REPLENISHMENTS_TOTAL",
    "RESPONSES_TOTAL",
]
