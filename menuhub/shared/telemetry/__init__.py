"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from menuhub.shared.telemetry.logging import setup_logging
from menuhub.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from menuhub.shared.telemetry.tracing import (
    TracedOperation,
    add_span_attributes,
    add_span_event,
    traced,
)

__all__ = [
    "setup_logging",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
    "add_span_event",
    "TracedOperation",
]
