"""OpenTelemetry and logging configuration."""

import logging
import os
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from pythonjsonlogger import jsonlogger

logger = logging.getLogger(__name__)

DEFAULT_OTLP_ENDPOINT = "http://localhost:4318"


def get_service_resource() -> Resource:
    """Create OpenTelemetry resource with service identification.

    Returns:
        Resource with service name and environment attributes
    """
    service_name = os.getenv("OTEL_SERVICE_NAME", "menu-catalog-svc")
    environment = os.getenv("ENVIRONMENT", "development")

    return Resource.create(
        {
            "service.name": service_name,
            "deployment.environment": environment,
        }
    )


def setup_tracing(resource: Resource) -> None:
    """Configure OpenTelemetry tracing with an OTLP/HTTP exporter.

    Args:
        resource: Service resource for trace identification
    """
    # Catalog spans (catalog.create/update/delete) go to the collector's traces path
    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", DEFAULT_OTLP_ENDPOINT)
    exporter = OTLPSpanExporter(endpoint=f"{otlp_endpoint}/v1/traces")

    # Batch export keeps span shipping off the request path
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(exporter))

    # Global provider, picked up by traced() and the FastAPI instrumentation
    trace.set_tracer_provider(provider)

    logger.info(f"OpenTelemetry tracing configured with endpoint: {otlp_endpoint}")


def setup_metrics(resource: Resource) -> None:
    """Configure OpenTelemetry metrics with an OTLP/HTTP exporter.

    Args:
        resource: Service resource for metric identification
    """
    # Mutation, rejection and catalog-size instruments share one exporter
    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", DEFAULT_OTLP_ENDPOINT)
    exporter = OTLPMetricExporter(endpoint=f"{otlp_endpoint}/v1/metrics")

    # Push once a minute
    reader = PeriodicExportingMetricReader(exporter, export_interval_millis=60000)
    provider = MeterProvider(resource=resource, metric_readers=[reader])

    # Must be set before the instruments in metrics.py record anything
    metrics.set_meter_provider(provider)

    logger.info(f"OpenTelemetry metrics configured with endpoint: {otlp_endpoint}")


def setup_observability(app: Any = None, enable_exporters: bool = True) -> None:
    """Initialize OpenTelemetry tracing and metrics, and instrument the API.

    Args:
        app: Optional FastAPI application to instrument
        enable_exporters: Whether to enable OTLP exporters (forced off when
            ENVIRONMENT is "test")
    """
    # The test environment never talks to a collector
    if os.getenv("ENVIRONMENT", "development") == "test":
        enable_exporters = False

    # Identify spans and metrics as coming from the catalog service
    resource = get_service_resource()

    if enable_exporters:
        setup_tracing(resource)
        setup_metrics(resource)
    else:
        # Providers without exporters: spans and metrics are recorded in-process only
        trace.set_tracer_provider(TracerProvider(resource=resource))
        metrics.set_meter_provider(MeterProvider(resource=resource))

    # One server span per request around the catalog spans
    if app is not None:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI application instrumented")

    logger.info("OpenTelemetry observability fully configured")


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            LOG_LEVEL in the environment takes precedence
    """
    # Unknown level names fall back to INFO
    level_str = os.getenv("LOG_LEVEL", log_level).upper()
    level = getattr(logging, level_str, logging.INFO)

    # One JSON object per record; logger extras become keys too
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        timestamp=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Replace uvicorn's or a previous call's handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Single stdout handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logger.info(f"Structured JSON logging configured at {level_str} level")
