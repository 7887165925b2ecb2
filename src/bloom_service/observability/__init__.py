"""Observability module for Bloom filter operations.

Provides Prometheus metrics for both filter backends.
"""

from .metrics import (
    BLOOM_OPERATIONS_TOTAL,
    BLOOM_OPERATION_ERRORS_TOTAL,
    BLOOM_OPERATION_LATENCY_SECONDS,
    get_metrics_registry,
    record_bloom_error,
    record_bloom_operation,
    track_bloom_latency,
)

__all__ = [
    "BLOOM_OPERATIONS_TOTAL",
    "BLOOM_OPERATION_ERRORS_TOTAL",
    "BLOOM_OPERATION_LATENCY_SECONDS",
    "get_metrics_registry",
    "record_bloom_error",
    "record_bloom_operation",
    "track_bloom_latency",
]
