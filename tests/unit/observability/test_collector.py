"""
Unit tests for MetricsCollector.
"""

import pytest
from prometheus_client import CollectorRegistry

from virustotal_dripper.exceptions import (
    ForbiddenError,
    HttpError,
    NotFoundError,
    NotFoundOrInvalidError,
    SizeExceededError,
    TransportError,
)
from virustotal_dripper.observability import (
    JOBS_RELEASED_TOTAL,
    JOBS_SUBMITTED_TOTAL,
    RESPONSES_TOTAL,
    MetricsCollector,
    outcome_for,
)


@pytest.fixture
def registry():
    return CollectorRegistry()


class TestOutcomeFor:
    @pytest.mark.parametrize(
        "error, outcome",
        [
            (None, "success"),
            (NotFoundOrInvalidError("nf", 200, "/p"), "not_found_or_invalid"),
            (ForbiddenError("f", 403, "/p"), "forbidden"),
            (NotFoundError("n", 404, "/p"), "not_found"),
            (HttpError("h", 500, "/p"), "http_error"),
            (TransportError("t", "/p"), "transport_error"),
        ],
    )
    def test_mapping(self, error, outcome):
        assert outcome_for(error) == outcome

    def test_unknown_error(self):
        assert outcome_for(SizeExceededError(2, 1)) is None
        assert outcome_for(RuntimeError("x")) is None


class TestMetricsCollector:
    def test_counters(self, registry):
        collector = MetricsCollector(registry=registry)

        collector.inc_counter(JOBS_RELEASED_TOTAL)
        collector.inc_counter(JOBS_RELEASED_TOTAL)
        collector.inc_counter(JOBS_SUBMITTED_TOTAL, labels={"priority": "normal"})

        assert collector.get_counter(JOBS_RELEASED_TOTAL) == 2
        assert collector.get_counter(JOBS_SUBMITTED_TOTAL, {"priority": "normal"}) == 1
        assert collector.get_counter(JOBS_SUBMITTED_TOTAL, {"priority": "expedited"}) == 0

    def test_prometheus_mirror(self, registry):
        collector = MetricsCollector(registry=registry)

        collector.inc_counter(JOBS_RELEASED_TOTAL, value=3)
        collector.record_outcome(HttpError("h", 500, "/p"))

        assert registry.get_sample_value("vt_dripper_jobs_released_total") == 3
        assert (
            registry.get_sample_value(
                "vt_dripper_responses_total", {"outcome": "http_error"}
            )
            == 1
        )

    def test_disabled_collector_counts_nothing(self, registry):
        collector = MetricsCollector(registry=registry, enabled=False)

        collector.inc_counter(JOBS_RELEASED_TOTAL)

        assert collector.get_counter(JOBS_RELEASED_TOTAL) == 0
        assert registry.get_sample_value("vt_dripper_jobs_released_total") is None

    def test_duplicate_registration_keeps_dict_counters(self, registry):
        MetricsCollector(registry=registry)
        second = MetricsCollector(registry=registry)

        second.inc_counter(JOBS_RELEASED_TOTAL)
        assert second.get_counter(JOBS_RELEASED_TOTAL) == 1

    def test_get_metrics_and_reset(self, registry):
        collector = MetricsCollector(registry=registry)
        collector.record_outcome(None)

        assert collector.get_metrics() == {RESPONSES_TOTAL: {"outcome=success": 1.0}}

        collector.reset()
        assert collector.get_metrics() == {}
