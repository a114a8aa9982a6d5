"""Dependency injection container for the query engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

import structlog
from opentelemetry import trace
from prometheus_client import CollectorRegistry

from query_engine.infrastructure.config import Config, get_config
from query_engine.infrastructure.logging import get_logger, setup_logging
from query_engine.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from query_engine.infrastructure.tracing import setup_tracing

if TYPE_CHECKING:
    from query_engine.application.pipeline import QueryPipeline
    from query_engine.ports.outbound import DataSource


@dataclass
class Container:
    """Wires configuration, logging, tracing and metrics for query sessions."""

    config: Config
    logger: structlog.BoundLogger
    tracer: trace.Tracer
    metrics: MetricsRegistry

    _instance: ClassVar[Container | None] = None

    @classmethod
    def create(
        cls,
        config: Config | None = None,
        registry: CollectorRegistry | None = None,
        serve_metrics: bool = False,
    ) -> Container:
        """Create and initialize the container with all dependencies.

        Args:
            config: Configuration to use. Defaults to the global config.
            registry: Prometheus registry. Defaults to the global registry.
            serve_metrics: Start the Prometheus HTTP exporter on the
                configured port.
        """
        if cls._instance is not None:
            return cls._instance

        config = config or get_config()
        observability = config.observability

        setup_logging(level=observability.log_level, log_format=observability.log_format)
        tracer = setup_tracing(
            service_name=observability.otel_service_name,
            otlp_endpoint=observability.otel_endpoint,
        )
        if serve_metrics:
            metrics = setup_metrics(port=observability.metrics_port, registry=registry)
        elif registry is not None:
            metrics = MetricsRegistry(registry)
        else:
            metrics = get_metrics()

        logger = get_logger(__name__)
        cls._instance = cls(config=config, logger=logger, tracer=tracer, metrics=metrics)

        logger.info(
            "query_engine_container_initialized",
            log_format=observability.log_format,
            otel_endpoint=observability.otel_endpoint,
        )
        return cls._instance

    @classmethod
    def get(cls) -> Container:
        """Get the singleton container instance."""
        if cls._instance is None:
            return cls.create()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the container (useful for testing)."""
        cls._instance = None

    def pipeline(self, source: DataSource) -> QueryPipeline:
        """Build a query pipeline over a data source using the configured settings."""
        from query_engine.application.pipeline import QueryPipeline

        return QueryPipeline(source, settings=self.config.queries, metrics=self.metrics)


def get_container() -> Container:
    """Get the dependency injection container."""
    return Container.get()
