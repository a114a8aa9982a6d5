"""OpenTelemetry tracing for query runs.

Until ``setup_tracing`` installs a provider, the API hands out no-op spans,
so queries can always be wrapped in spans whether or not tracing is wired.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Status, StatusCode

from query_engine import __version__

_TRACER_NAME = "query_engine"

_tracer: trace.Tracer | None = None


def setup_tracing(
    service_name: str = _TRACER_NAME,
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """Install a tracer provider and return the engine's tracer.

    Args:
        service_name: Reported as ``service.name`` on every span.
        otlp_endpoint: gRPC collector address. Spans are only exported
            when this is set or ``console_export`` is on.
        console_export: Print finished spans to stdout.
    """
    global _tracer

    provider = TracerProvider(
        resource=Resource.create({"service.name": service_name, "service.version": __version__})
    )
    exporters = []
    if otlp_endpoint:
        exporters.append(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
    if console_export:
        exporters.append(ConsoleSpanExporter())
    for exporter in exporters:
        provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(service_name)
    return _tracer


def get_tracer() -> trace.Tracer:
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(_TRACER_NAME)
    return _tracer


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """Run the block inside a span carrying the given attributes."""
    with get_tracer().start_as_current_span(name, attributes=attributes or {}) as span:
        yield span


@contextmanager
def query_span(query: str, title: str) -> Generator[trace.Span, None, None]:
    """Span around one named query.

    A failing query marks the span as errored before the exception leaves
    the block.
    """
    with trace_span(f"query.{query}", {"query.name": query, "query.title": title}) as span:
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise


def record_rows(span: trace.Span, rows: int) -> None:
    span.set_attribute("query.rows", rows)
