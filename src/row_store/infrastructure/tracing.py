"""OpenTelemetry tracing for statement execution.

Each executed statement runs inside one span named ``row_store.<statement>``
(``row_store.insert``, ``row_store.select``). Spans are only exported when
an OTLP endpoint or console export is configured; otherwise they are
recorded and dropped.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

SPAN_PREFIX = "row_store"

_tracer: trace.Tracer | None = None
_provider: TracerProvider | None = None


def setup_tracing(
    service_name: str = "row_store",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """
    Install a tracer provider for the process.

    Args:
        service_name: Name of the service for tracing
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")
        console_export: Whether to also print spans (for debugging)

    Returns:
        Configured tracer instance
    """
    global _tracer, _provider
    from row_store import __version__

    provider = TracerProvider(
        resource=Resource.create({"service.name": service_name, "service.version": __version__})
    )
    if otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
        )
    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _provider = provider
    _tracer = trace.get_tracer(service_name, __version__)
    return _tracer


def shutdown_tracing() -> None:
    """Flush pending spans and shut the provider down. Safe to call twice."""
    global _tracer, _provider
    if _provider is not None:
        _provider.shutdown()
    _provider = None
    _tracer = None


def get_tracer() -> trace.Tracer:
    """Get the tracer, falling back to the global (possibly no-op) provider."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(SPAN_PREFIX)
    return _tracer


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """
    Run a block inside a span named ``row_store.<name>``.

    Attributes whose value is None are dropped, since OpenTelemetry
    rejects them.

    Args:
        name: Operation name, e.g. "insert"
        attributes: Optional span attributes

    Yields:
        The created span
    """
    attributes = {k: v for k, v in (attributes or {}).items() if v is not None}
    with get_tracer().start_as_current_span(f"{SPAN_PREFIX}.{name}", attributes=attributes) as span:
        yield span
