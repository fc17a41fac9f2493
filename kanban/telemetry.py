"""OpenTelemetry instrumentation for the kanban service and board client.

Traces, metrics and logs are exported over OTLP/HTTP. Setting
``OTEL_SDK_DISABLED`` turns all of it off; tracers and meters handed out by
this module then fall back to the API's no-op implementations.
"""

import logging
import os

from opentelemetry import _logs, metrics, trace
from opentelemetry.exporter.otlp.proto.http._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.flask import FlaskInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.requests import RequestsInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource, get_aggregated_resources
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


_otel_log_handler: LoggingHandler | None = None
_initialized: bool = False


def telemetry_enabled() -> bool:
    """Whether the OpenTelemetry SDK should be set up at all."""
    return not os.getenv("OTEL_SDK_DISABLED")


def setup_telemetry(server: bool = True) -> None:
    """Initialize OpenTelemetry with traces, metrics, and logs.

    Called once at startup, before the Flask app or the board client
    is created. Repeated calls are ignored.

    Args:
        server: Also instrument SQLAlchemy. The board client only needs
            the ``requests`` instrumentation.
    """
    global _otel_log_handler, _initialized

    if _initialized:
        return

    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318")
    resource = _build_resource()

    # Traces
    trace_provider = TracerProvider(resource=resource)
    trace_provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=f"{otlp_endpoint}/v1/traces"))
    )
    trace.set_tracer_provider(trace_provider)

    # Metrics
    metric_reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=f"{otlp_endpoint}/v1/metrics"),
        export_interval_millis=60000,
    )
    metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=[metric_reader]))

    # Logs
    logger_provider = LoggerProvider(resource=resource)
    logger_provider.add_log_record_processor(
        BatchLogRecordProcessor(OTLPLogExporter(endpoint=f"{otlp_endpoint}/v1/logs"))
    )
    _logs.set_logger_provider(logger_provider)
    _otel_log_handler = LoggingHandler(level=logging.DEBUG, logger_provider=logger_provider)

    if server:
        SQLAlchemyInstrumentor().instrument()
    RequestsInstrumentor().instrument()

    # Adds trace_id and span_id to log records
    LoggingInstrumentor().instrument(set_logging_format=True)

    _initialized = True


def _build_resource() -> Resource:
    # get_aggregated_resources also merges OTEL_RESOURCE_ATTRIBUTES
    return get_aggregated_resources(
        detectors=[],
        initial_resource=Resource.create(
            {
                "service.name": os.getenv("OTEL_SERVICE_NAME", "kanban-board"),
                "service.version": os.getenv("OTEL_SERVICE_VERSION", "1.0.0"),
            }
        ),
    )


def attach_log_handler() -> None:
    """Route Python logging through the OTel log pipeline, once."""
    if _otel_log_handler is None:
        return
    root_logger = logging.getLogger()
    if _otel_log_handler not in root_logger.handlers:
        root_logger.addHandler(_otel_log_handler)


def instrument_flask_app(app) -> None:
    """Instrument a Flask app for tracing.

    Must run per app instance, after the global setup, so that apps built
    in forked workers are traced too. The health probe is not traced.
    """
    FlaskInstrumentor().instrument_app(app, excluded_urls="/health")


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer for creating custom spans (typically ``get_tracer(__name__)``)."""
    return trace.get_tracer(name)


def get_meter(name: str) -> metrics.Meter:
    """Get a meter for creating custom metrics (typically ``get_meter(__name__)``)."""
    return metrics.get_meter(name)
