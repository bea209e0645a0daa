"""Prometheus metrics for indexing throughput, failures and latency."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


REGISTRY = CollectorRegistry(auto_describe=True)

FILES_INDEXED = Counter(
    "findex_files_indexed_total",
    "Files processed by the indexing engine",
    ["status"],
    registry=REGISTRY,
)

INDEX_ERRORS = Counter(
    "findex_index_errors_total",
    "Indexing failures by error kind",
    ["kind"],
    registry=REGISTRY,
)

ASSOCIATIONS_RECORDED = Counter(
    "findex_associations_recorded_total",
    "Token/file associations written to the inverted index",
    registry=REGISTRY,
)

INDEX_LATENCY = Histogram(
    "findex_index_latency_seconds",
    "Indexing latency in seconds",
    ["operation"],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 30.0),
    registry=REGISTRY,
)

QUERY_COUNT = Counter(
    "findex_queries_total",
    "Token lookups",
    ["hit"],
    registry=REGISTRY,
)


@contextmanager
def track_latency(histogram: Histogram, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus exposition output for the findex registry."""
    return generate_latest(REGISTRY)
