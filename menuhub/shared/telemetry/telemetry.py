"""OpenTelemetry setup for the menu service.

One tracer provider per process. Spans cover inbound menu requests
(FastAPI), every outbound call to the directory, tenant projects, storage
and translation providers (httpx), and Redis commands; log records carry
the trace context.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

if TYPE_CHECKING:
    from menuhub.core.config import Settings

logger = logging.getLogger(__name__)

# Liveness probes would otherwise dominate the trace volume.
EXCLUDED_URLS = "/api/v1/health"


def build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Span exporter for a configured exporter name; None means record without exporting.

    ``otlp`` without an endpoint falls back to the console exporter.
    """
    if exporter_type == "none":
        return None
    if exporter_type == "otlp":
        if otlp_endpoint:
            logger.info("Exporting spans over OTLP to %s", otlp_endpoint)
            return OTLPSpanExporter(
                endpoint=otlp_endpoint,
                insecure=otlp_endpoint.startswith("http://"),
            )
        logger.warning("TELEMETRY_OTLP_ENDPOINT is not set; exporting spans to console")
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus library instrumentation.

    setup_telemetry() must run before the shared httpx client is created
    and before the app starts serving, so that instrument_all() can still
    wrap the FastAPI app.
    """

    def __init__(
        self,
        service_name: str,
        service_version: str,
        enabled: bool = True,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None
        self.instrumented: list[str] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> TelemetryConfig:
        return cls(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=settings.telemetry_enabled,
            environment=settings.telemetry_environment,
        )

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Create and register the global tracer provider.

        Sampling follows the caller's decision when a request arrives with a
        trace context, otherwise samples ``sample_rate`` of new traces.

        Returns:
            The provider, or None when telemetry is disabled or setup failed.
        """
        if not self.enabled:
            logger.info("Telemetry disabled")
            return None
        resource = Resource(
            attributes={
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: self.service_version,
                "deployment.environment": self.environment,
            }
        )
        try:
            provider = TracerProvider(
                resource=resource,
                sampler=ParentBased(TraceIdRatioBased(sample_rate)),
            )
            exporter = build_exporter(exporter_type, otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception:
            logger.exception("Failed to initialize telemetry; tracing stays off")
            return None
        self.tracer_provider = provider
        logger.info(
            "Tracing %s %s (%s) with exporter %s at sample rate %s",
            self.service_name,
            self.service_version,
            self.environment,
            exporter_type,
            sample_rate,
        )
        return provider

    def _instrument(self, name: str, apply: Callable[[TracerProvider], None]) -> bool:
        """Run one instrumentation; a failing library never blocks startup."""
        if not self.enabled or self.tracer_provider is None:
            return False
        try:
            apply(self.tracer_provider)
        except Exception:
            logger.exception("Failed to instrument %s", name)
            return False
        self.instrumented.append(name)
        return True

    def instrument_fastapi(self, app: FastAPI) -> bool:
        return self._instrument(
            "fastapi",
            lambda provider: FastAPIInstrumentor.instrument_app(
                app, tracer_provider=provider, excluded_urls=EXCLUDED_URLS
            ),
        )

    def instrument_httpx(self) -> bool:
        return self._instrument(
            "httpx",
            lambda provider: HTTPXClientInstrumentor().instrument(tracer_provider=provider),
        )

    def instrument_redis(self) -> bool:
        return self._instrument(
            "redis",
            lambda provider: RedisInstrumentor().instrument(tracer_provider=provider),
        )

    def instrument_logging(self) -> bool:
        """Add trace_id/span_id to log records (leaves the log format alone)."""
        return self._instrument(
            "logging",
            lambda provider: LoggingInstrumentor().instrument(
                tracer_provider=provider, set_logging_format=False
            ),
        )

    def instrument_all(self, app: FastAPI) -> list[str]:
        """Instrument httpx, Redis, logging and the app; return what succeeded."""
        self.instrument_httpx()
        self.instrument_redis()
        self.instrument_logging()
        self.instrument_fastapi(app)
        if self.instrumented:
            logger.info("Instrumented: %s", ", ".join(self.instrumented))
        return list(self.instrumented)

    def shutdown(self) -> None:
        """Flush pending spans."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Error during telemetry shutdown")


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the process telemetry instance set at startup, if any."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
