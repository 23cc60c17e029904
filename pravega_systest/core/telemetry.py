import functools
import logging
import threading
from typing import Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from pravega_systest.core.config import settings

# Global flag to ensure initialization only happens once
_initialized = False
_init_lock = threading.Lock()
systest_tracer: Optional[trace.Tracer] = None


def _initialize_telemetry() -> None:
    """Initialize logging and tracing once and only once."""
    global _initialized, systest_tracer

    with _init_lock:
        if _initialized:
            return

        logging.basicConfig(
            level=settings.log_level.upper(),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        resource = Resource(attributes={SERVICE_NAME: settings.otel_service_name})
        provider = TracerProvider(resource=resource)
        if settings.otel_exporter_endpoint:
            exporter = OTLPSpanExporter(endpoint=settings.otel_exporter_endpoint)
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        systest_tracer = trace.get_tracer(settings.otel_service_name)

        _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance. Ensures telemetry is initialized.
    Use this instead of logging.getLogger() directly.
    """
    if not _initialized:
        _initialize_telemetry()
    return logging.getLogger(name)


def trace_span(func):
    """Decorator that creates a span named after the (qualified) function."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if not _initialized:
            _initialize_telemetry()

        span_name = func.__name__
        if args and hasattr(args[0], "__class__"):
            # If it's a method, include class name
            span_name = f"{args[0].__class__.__name__}.{func.__name__}"

        with systest_tracer.start_as_current_span(span_name):
            return func(*args, **kwargs)

    return wrapper
