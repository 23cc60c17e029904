"""Unit tests for logging and tracing helpers."""

import logging

from pravega_systest.core import telemetry
from pravega_systest.core.telemetry import get_logger, trace_span


class TestTelemetry:
    """Test logger access and span decoration."""

    def test_get_logger_initializes_once(self):
        logger = get_logger("pravega_systest.test")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "pravega_systest.test"
        assert telemetry._initialized is True
        assert telemetry.systest_tracer is not None

    def test_trace_span_preserves_result_and_name(self):
        class Provisioner:
            @trace_span
            def provision(self, count):
                return count * 2

        assert Provisioner().provision(3) == 6
        assert Provisioner.provision.__name__ == "provision"

    def test_trace_span_propagates_exceptions(self):
        @trace_span
        def fail():
            raise ValueError("boom")

        try:
            fail()
        except ValueError as e:
            assert str(e) == "boom"
        else:
            raise AssertionError("expected ValueError")
