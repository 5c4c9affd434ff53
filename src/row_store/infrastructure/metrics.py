"""Prometheus metrics for the row store."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all row store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Statement metrics
        self.inserts_total = Counter(
            "row_store_inserts_total",
            "Total number of insert statements",
            ["status"],  # success, table_full, field_too_long, invalid_row_index
            registry=self._registry,
        )

        self.selects_total = Counter(
            "row_store_selects_total",
            "Total number of select scans started",
            registry=self._registry,
        )

        self.rows_scanned_total = Counter(
            "row_store_rows_scanned_total",
            "Total rows decoded by select scans",
            registry=self._registry,
        )

        self.statement_latency_seconds = Histogram(
            "row_store_statement_latency_seconds",
            "Statement latency in seconds",
            ["statement_type"],  # insert, select
            buckets=(0.00001, 0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1),
            registry=self._registry,
        )

        # Table metrics
        self.rows = Gauge(
            "row_store_rows",
            "Number of rows in the table",
            registry=self._registry,
        )

        self.pages_allocated = Gauge(
            "row_store_pages_allocated",
            "Number of allocated pages",
            registry=self._registry,
        )

        # Server info
        self.info = Info(
            "row_store",
            "Row store information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """The collector registry the metrics are registered with."""
        return self._registry

    def observe_statement(self, statement_type: str, status: str, elapsed: float) -> None:
        """Record latency for a statement, and the outcome of an insert."""
        self.statement_latency_seconds.labels(statement_type=statement_type).observe(elapsed)
        if statement_type == "insert":
            self.inserts_total.labels(status=status).inc()

    def observe_table(self, num_rows: int, allocated_pages: int) -> None:
        """Publish the current fill of a table."""
        self.rows.set(num_rows)
        self.pages_allocated.set(allocated_pages)


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    # Set server info
    from row_store import __version__
    _metrics.info.info({
        "version": __version__,
    })

    # Start HTTP server for Prometheus scraping
    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
