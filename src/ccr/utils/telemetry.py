"""OpenTelemetry tracing for the proxy.

Modules call :func:`get_tracer` at import time. Until
:func:`configure_telemetry` installs an SDK tracer provider, the API hands
back no-op tracers, so the ``otel`` extra (``pip install ccr-proxy[otel]``)
is only needed when spans are actually exported.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace

if TYPE_CHECKING:
    from ccr.config.models import TelemetrySettings

# Span attributes set on ``proxy.dispatch``
ATTR_PROVIDER = "ccr.provider"
ATTR_MODEL = "ccr.model"
ATTR_STREAM = "ccr.stream"
ATTR_UPSTREAM_URL = "ccr.upstream.url"
ATTR_STATUS_CODE = "ccr.upstream.status_code"
ATTR_MESSAGE_COUNT = "ccr.messages.count"

_INSTRUMENTATION_NAME = "ccr"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(settings: TelemetrySettings) -> None:
    """Install a tracer provider exporting to the targets named in *settings*.

    Raises:
        ImportError: If ``opentelemetry-sdk``, or the OTLP exporter when
            ``otlp_endpoint`` is set, is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required to export traces. "
            "Install it with: pip install ccr-proxy[otel]"
        )
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": settings.service_name}))

    if settings.console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    if settings.otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            msg = (
                "opentelemetry-exporter-otlp is required for OTLP export. "
                "Install it with: pip install ccr-proxy[otel]"
            )
            raise ImportError(msg) from exc
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint))
        )

    trace.set_tracer_provider(provider)
