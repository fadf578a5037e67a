"""Logging and OpenTelemetry instrumentation utilities."""

from menu_manager.observability.config import configure_logging, setup_observability
from menu_manager.observability.decorators import traced

__all__ = ["setup_observability", "configure_logging", "traced"]
