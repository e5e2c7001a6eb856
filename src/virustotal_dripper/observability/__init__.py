# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability for the VirusTotal dripper.

This module provides:
    MetricsCollector: Dict counters mirrored into prometheus_client Counters
    Metric name constants with the `vt_dripper_` prefix
"""

from .collector import METRIC_DEFINITIONS, MetricDefinition, MetricsCollector, outcome_for
from .constants import (
    JOBS_RELEASED_TOTAL,
    JOBS_SUBMITTED_TOTAL,
    METRIC_PREFIX,
    OUTCOMES,
    REPLENISHMENTS_TOTAL,
    RESPONSES_TOTAL,
)

__all__ = [
    "JOBS_RELEASED_TOTAL",
    "JOBS_SUBMITTED_TOTAL",
    "METRIC_DEFINITIONS",
    "METRIC_PREFIX",
    "OUTCOMES",
    "REPLENISHMENTS_TOTAL",
    "RESPONSES_TOTAL",
    "MetricDefinition",
    "MetricsCollector",
    "outcome_for",
]
