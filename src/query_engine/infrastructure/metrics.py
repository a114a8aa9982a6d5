"""Prometheus metrics for the query engine."""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    start_http_server,
)


class MetricsRegistry:
    """Counters and histograms describing query runs.

    Pass a private ``CollectorRegistry`` to keep instances independent;
    metric names may only be registered once per registry.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._registry = registry or REGISTRY

        self.queries_total = Counter(
            "query_engine_queries_total",
            "Total number of queries executed",
            ["query", "status"],  # status: success, error
            registry=self._registry,
        )

        self.query_latency_seconds = Histogram(
            "query_engine_query_latency_seconds",
            "Query evaluation latency in seconds",
            ["query"],
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self._registry,
        )

        self.query_rows_returned = Histogram(
            "query_engine_query_rows_returned",
            "Number of result rows produced per query",
            ["query"],
            buckets=(0, 1, 5, 10, 25, 50, 100, 250, 1000),
            registry=self._registry,
        )

        self.info = Info(
            "query_engine",
            "Query engine information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def record_query(self, query: str, status: str, elapsed_seconds: float, rows: int = 0) -> None:
        """Count a run and its latency. Row counts are only kept for successful runs."""
        self.queries_total.labels(query=query, status=status).inc()
        self.query_latency_seconds.labels(query=query).observe(elapsed_seconds)
        if status == "success":
            self.query_rows_returned.labels(query=query).observe(rows)


_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """Create the process-wide metrics and serve them over HTTP on ``port``."""
    from query_engine import __version__

    global _metrics
    _metrics = MetricsRegistry(registry)
    _metrics.info.info({"version": __version__})
    start_http_server(port, registry=_metrics.registry)
    return _metrics


def get_metrics() -> MetricsRegistry:
    """Process-wide metrics, created on the global registry on first use."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
