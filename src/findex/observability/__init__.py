"""Observability helpers: structured logging, tracing and metrics."""

from findex.observability.context import get_trace_context, set_trace_context, trace_context
from findex.observability.logging import JsonFormatter, configure_logging
from findex.observability.metrics import (
    ASSOCIATIONS_RECORDED,
    FILES_INDEXED,
    INDEX_ERRORS,
    INDEX_LATENCY,
    QUERY_COUNT,
    get_metrics,
    track_latency,
)
from findex.observability.tracing import create_span, get_tracer, init_console_tracing, init_tracing, reset_tracing


__all__ = [
    "ASSOCIATIONS_RECORDED",
    "FILES_INDEXED",
    "INDEX_ERRORS",
    "INDEX_LATENCY",
    "QUERY_COUNT",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_trace_context",
    "get_tracer",
    "init_console_tracing",
    "init_tracing",
    "reset_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
