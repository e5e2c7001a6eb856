# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metrics collector supporting both dict-based and Prometheus counters.

Usage:
    >>> from prometheus_client import CollectorRegistry
    >>> collector = MetricsCollector(registry=CollectorRegistry())
    >>> collector.inc_counter(JOBS_SUBMITTED_TOTAL, labels={"priority": "normal"})
    >>> collector.get_counter(JOBS_SUBMITTED_TOTAL, labels={"priority": "normal"})
    1.0

Thread Safety:
    All operations take an RLock; counters may be read from any thread.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

from prometheus_client import REGISTRY, CollectorRegistry, Counter

from ..exceptions import (
    ForbiddenError,
    HttpError,
    NotFoundError,
    NotFoundOrInvalidError,
    TransportError,
)
from .constants import (
    JOBS_RELEASED_TOTAL,
    JOBS_SUBMITTED_TOTAL,
    OUTCOME_FORBIDDEN,
    OUTCOME_HTTP_ERROR,
    OUTCOME_NOT_FOUND,
    OUTCOME_NOT_FOUND_OR_INVALID,
    OUTCOME_SUCCESS,
    OUTCOME_TRANSPORT_ERROR,
    REPLENISHMENTS_TOTAL,
    RESPONSES_TOTAL,
)

logger = logging.getLogger(__name__)

LabelKey = tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class MetricDefinition:
    """Schema for a counter: name, help text and label names."""

    name: str
    description: str
    label_names: tuple[str, ...] = ()


METRIC_DEFINITIONS: dict[str, MetricDefinition] = {
    JOBS_SUBMITTED_TOTAL: MetricDefinition(
        JOBS_SUBMITTED_TOTAL, "Total jobs submitted", ("priority",)
    ),
    JOBS_RELEASED_TOTAL: MetricDefinition(
        JOBS_RELEASED_TOTAL, "Total jobs released for execution"
    ),
    REPLENISHMENTS_TOTAL: MetricDefinition(
        REPLENISHMENTS_TOTAL, "Total quota window replenishments"
    ),
    RESPONSES_TOTAL: MetricDefinition(
        RESPONSES_TOTAL, "Total completed exchanges by outcome", ("outcome",)
    ),
}

_OUTCOME_BY_ERROR: tuple[tuple[type[BaseException], str], ...] = (
    (NotFoundOrInvalidError, OUTCOME_NOT_FOUND_OR_INVALID),
    (ForbiddenError, OUTCOME_FORBIDDEN),
    (NotFoundError, OUTCOME_NOT_FOUND),
    (HttpError, OUTCOME_HTTP_ERROR),
    (TransportError, OUTCOME_TRANSPORT_ERROR),
)


def outcome_for(error: BaseException | None) -> str | None:
    """Map a classified error to its outcome label.

    ``None`` means success. Errors outside the taxonomy map to ``None``.
    """
    if error is None:
        return OUTCOME_SUCCESS
    for error_type, outcome in _OUTCOME_BY_ERROR:
        if isinstance(error, error_type):
            return outcome
    return None


def _label_key(labels: dict[str, str] | None) -> LabelKey:
    return tuple(sorted((labels or {}).items()))


class MetricsCollector:
    """
    Counter store with Prometheus mirroring.

    Dict counters are always kept so ``get_metrics()`` works for JSON export.
    Each defined counter is also registered on ``registry``; pass a fresh
    ``CollectorRegistry`` per client to avoid duplicate registration when
    several clients live in one process.
    """

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        enabled: bool = True,
    ) -> None:
        self.enabled = enabled
        self._lock = threading.RLock()
        self._counters: dict[str, dict[LabelKey, float]] = defaultdict(
            lambda: defaultdict(float)
        )
        self._prometheus: dict[str, Counter] = {}

        if enabled:
            self._register(registry if registry is not None else REGISTRY)

    def _register(self, registry: CollectorRegistry) -> None:
        for name, definition in METRIC_DEFINITIONS.items():
            # prometheus_client appends _total to counters itself
            base_name = name.removesuffix("_total")
            try:
                self._prometheus[name] = Counter(
                    base_name,
                    definition.description,
                    definition.label_names,
                    registry=registry,
                )
            except ValueError:
                logger.warning(
                    f"Metric {name} already registered; Prometheus export disabled for it"
                )

    def inc_counter(
        self, name: str, value: float = 1.0, labels: dict[str, str] | None = None
    ) -> None:
        """Increment a counter by ``value``."""
        if not self.enabled:
            return
        with self._lock:
            self._counters[name][_label_key(labels)] += value
            counter = self._prometheus.get(name)
            if counter is not None:
                if labels:
                    counter.labels(**labels).inc(value)
                else:
                    counter.inc(value)

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> float:
        """Current value of a counter for the given labels (0.0 if never incremented)."""
        with self._lock:
            series = self._counters.get(name)
            if series is None:
                return 0.0
            return series.get(_label_key(labels), 0.0)

    def record_outcome(self, error: BaseException | None) -> None:
        """Count one completed exchange under its classified outcome."""
        outcome = outcome_for(error)
        if outcome is not None:
            self.inc_counter(RESPONSES_TOTAL, labels={"outcome": outcome})

    def get_metrics(self) -> dict[str, Any]:
        """Dict export: metric name to {label string: value}."""
        with self._lock:
            return {
                name: {
                    ",".join(f"{k}={v}" for k, v in key): value
                    for key, value in series.items()
                }
                for name, series in self._counters.items()
            }

    def reset(self) -> None:
        """Clear dict counters. Prometheus counters are monotonic and are not reset."""
        with self._lock:
            self._counters.clear()


__all__ = ["METRIC_DEFINITIONS", "MetricDefinition", "MetricsCollector", "outcome_for"]
