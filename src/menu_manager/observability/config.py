"""Logging and OpenTelemetry configuration for the menu services."""

import logging
import os
from collections.abc import Callable
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

from menu_manager.observability.metrics import register_stored_items_gauge

logger = logging.getLogger(__name__)

# Comma-separated paths FastAPIInstrumentor skips
UNTRACED_URLS = "api/health,health"

METRIC_EXPORT_INTERVAL_MS = 60000


def otlp_endpoint(signal: str) -> str:
    """Build the OTLP/HTTP URL for one signal ("traces" or "metrics")."""
    base = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318").rstrip("/")
    return f"{base}/v1/{signal}"


def get_service_resource() -> Resource:
    """Create the resource identifying this menu service.

    Returns:
        Resource with service name and environment attributes
    """
    return Resource.create(
        {
            "service.name": os.getenv("OTEL_SERVICE_NAME", "menu-api"),
            "deployment.environment": os.getenv("ENVIRONMENT", "development"),
        }
    )


def create_providers(
    resource: Resource, enable_exporters: bool
) -> tuple[TracerProvider, MeterProvider]:
    """Build tracer and meter providers, exporting over OTLP when enabled.

    Args:
        resource: Service resource attached to every span and metric
        enable_exporters: Whether spans and metrics leave the process

    Returns:
        (tracer_provider, meter_provider)
    """
    tracer_provider = TracerProvider(resource=resource)
    if not enable_exporters:
        return tracer_provider, MeterProvider(resource=resource)

    tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint("traces"))))
    reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=otlp_endpoint("metrics")),
        export_interval_millis=METRIC_EXPORT_INTERVAL_MS,
    )
    logger.info(f"OpenTelemetry exporting to {otlp_endpoint('traces')} and {otlp_endpoint('metrics')}")
    return tracer_provider, MeterProvider(resource=resource, metric_readers=[reader])


def setup_observability(
    app: Any = None,
    item_count: Callable[[], int] | None = None,
    enable_exporters: bool = True,
) -> None:
    """Install tracing and metrics, then hook the menu API into them.

    Args:
        app: Optional FastAPI application to instrument (health routes excluded)
        item_count: Optional store size callback reported as menu_items_stored
        enable_exporters: Whether to enable OTLP exporters (forced off when ENVIRONMENT=test)
    """
    if os.getenv("ENVIRONMENT", "development") == "test":
        enable_exporters = False

    tracer_provider, meter_provider = create_providers(get_service_resource(), enable_exporters)
    trace.set_tracer_provider(tracer_provider)
    metrics.set_meter_provider(meter_provider)

    # Registered after the provider so the gauge binds to a real meter
    if item_count is not None:
        register_stored_items_gauge(item_count)

    if app is not None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=UNTRACED_URLS)
        logger.info("FastAPI application instrumented")

    logger.info(f"OpenTelemetry configured (exporters {'on' if enable_exporters else 'off'})")


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level_str = os.getenv("LOG_LEVEL", log_level).upper()
    level = getattr(logging, level_str, logging.INFO)

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        timestamp=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logger.info(f"Structured JSON logging configured at {level_str} level")
