"""Infrastructure layer - cross-cutting concerns."""

from query_engine.infrastructure.config import (
    Config,
    ObservabilityConfig,
    PriceBandSettings,
    QuerySettings,
    get_config,
)
from query_engine.infrastructure.logging import get_logger, query_context, setup_logging
from query_engine.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from query_engine.infrastructure.tracing import (
    get_tracer,
    query_span,
    record_rows,
    setup_tracing,
    trace_span,
)

__all__ = [
    "Config",
    "ObservabilityConfig",
    "PriceBandSettings",
    "QuerySettings",
    "get_config",
    "setup_logging",
    "get_logger",
    "query_context",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
    "query_span",
    "record_rows",
]
