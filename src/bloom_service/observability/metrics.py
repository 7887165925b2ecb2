"""Prometheus metric definitions for Bloom filter operations.

All metrics carry a ``backend`` label (memory|redis) and an ``operation``
label (set|exist) so both storage backends can be compared side by side.
"""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import Generator

from prometheus_client import (
    Counter,
    Histogram,
    CollectorRegistry,
    REGISTRY,
)

# Default registry (can be overridden for testing)
_registry: CollectorRegistry = REGISTRY


def get_metrics_registry() -> CollectorRegistry:
    """Get the current metrics registry.

    Returns:
        The CollectorRegistry used for all metrics
    """
    return _registry


# =============================================================================
# Counter Metrics
# =============================================================================

BLOOM_OPERATIONS_TOTAL = Counter(
    "bloom_operations_total",
    "Total number of completed Bloom filter operations",
    labelnames=["backend", "operation", "result"],
    registry=_registry,
)
"""Counter for completed filter operations.

Labels:
    backend: memory|redis
    operation: set|exist
    result: ok|hit|miss
"""

BLOOM_OPERATION_ERRORS_TOTAL = Counter(
    "bloom_operation_errors_total",
    "Total number of failed Bloom filter operations",
    labelnames=["backend", "operation", "error"],
    registry=_registry,
)
"""Counter for failed filter operations.

Labels:
    backend: memory|redis
    operation: set|exist
    error: Exception class name
"""


# =============================================================================
# Histogram Metrics
# =============================================================================

BLOOM_OPERATION_LATENCY_SECONDS = Histogram(
    "bloom_operation_latency_seconds",
    "Bloom filter operation latency in seconds",
    labelnames=["backend", "operation"],
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
    registry=_registry,
)
"""Histogram for filter operation latency, including the Redis round trip.

Labels:
    backend: memory|redis
    operation: set|exist
"""


# =============================================================================
# Helper Functions
# =============================================================================


def record_bloom_operation(backend: str, operation: str, result: str) -> None:
    """Record a completed filter operation.

    Args:
        backend: Storage backend (memory|redis)
        operation: Operation name (set|exist)
        result: Outcome (ok|hit|miss)
    """
    BLOOM_OPERATIONS_TOTAL.labels(
        backend=backend,
        operation=operation,
        result=result,
    ).inc()


def record_bloom_error(backend: str, operation: str, error: BaseException) -> None:
    """Record a failed filter operation.

    Args:
        backend: Storage backend (memory|redis)
        operation: Operation name (set|exist)
        error: The exception that ended the operation
    """
    BLOOM_OPERATION_ERRORS_TOTAL.labels(
        backend=backend,
        operation=operation,
        error=type(error).__name__,
    ).inc()


@contextmanager
def track_bloom_latency(backend: str, operation: str) -> Generator[None, None, None]:
    """Context manager that observes the latency of a filter operation.

    Args:
        backend: Storage backend (memory|redis)
        operation: Operation name (set|exist)

    Yields:
        None
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        BLOOM_OPERATION_LATENCY_SECONDS.labels(
            backend=backend,
            operation=operation,
        ).observe(time.perf_counter() - start)
