"""Unit tests for Prometheus Bloom filter metrics."""

import pytest

from bloom_service.filters.memory import InMemoryBloomFilter
from bloom_service.filters.redis import RedisBloomFilter
from bloom_service.observability.metrics import (
    BLOOM_OPERATIONS_TOTAL,
    BLOOM_OPERATION_ERRORS_TOTAL,
    BLOOM_OPERATION_LATENCY_SECONDS,
    get_metrics_registry,
    record_bloom_error,
    record_bloom_operation,
    track_bloom_latency,
)
from bloom_service.params import FilterParams


def _sample(name: str, labels: dict[str, str]) -> float:
    value = get_metrics_registry().get_sample_value(name, labels)
    return value or 0.0


class TestMetricDefinitions:
    """Tests for metric definitions."""

    def test_operations_total_labels(self) -> None:
        assert "backend" in BLOOM_OPERATIONS_TOTAL._labelnames
        assert "operation" in BLOOM_OPERATIONS_TOTAL._labelnames
        assert "result" in BLOOM_OPERATIONS_TOTAL._labelnames

    def test_errors_total_labels(self) -> None:
        assert "error" in BLOOM_OPERATION_ERRORS_TOTAL._labelnames

    def test_latency_labels(self) -> None:
        assert "backend" in BLOOM_OPERATION_LATENCY_SECONDS._labelnames
        assert "operation" in BLOOM_OPERATION_LATENCY_SECONDS._labelnames


class TestHelpers:
    """Tests for metric helper functions."""

    def test_record_bloom_operation(self) -> None:
        labels = {"backend": "memory", "operation": "exist", "result": "hit"}
        before = _sample("bloom_operations_total", labels)
        record_bloom_operation("memory", "exist", "hit")
        assert _sample("bloom_operations_total", labels) == before + 1

    def test_record_bloom_error_uses_class_name(self) -> None:
        labels = {"backend": "redis", "operation": "set", "error": "KeyError"}
        before = _sample("bloom_operation_errors_total", labels)
        record_bloom_error("redis", "set", KeyError("x"))
        assert _sample("bloom_operation_errors_total", labels) == before + 1

    def test_track_bloom_latency_observes_on_error(self) -> None:
        labels = {"backend": "memory", "operation": "set"}
        before = _sample("bloom_operation_latency_seconds_count", labels)
        with pytest.raises(RuntimeError):
            with track_bloom_latency("memory", "set"):
                raise RuntimeError("boom")
        assert _sample("bloom_operation_latency_seconds_count", labels) == before + 1


class TestFilterInstrumentation:
    """Filters record their operations."""

    @pytest.mark.asyncio
    async def test_memory_filter_records_hits_and_misses(self) -> None:
        bloom = InMemoryBloomFilter(params=FilterParams(bits=256, hash_rounds=3))
        hit = {"backend": "memory", "operation": "exist", "result": "hit"}
        miss = {"backend": "memory", "operation": "exist", "result": "miss"}
        hits_before = _sample("bloom_operations_total", hit)
        misses_before = _sample("bloom_operations_total", miss)

        await bloom.set("A", "alpha")
        await bloom.exist("A", "alpha")
        await bloom.exist("B", "alpha")

        assert _sample("bloom_operations_total", hit) == hits_before + 1
        assert _sample("bloom_operations_total", miss) == misses_before + 1

    @pytest.mark.asyncio
    async def test_redis_filter_records_errors(self, mock_script_client) -> None:
        bloom = RedisBloomFilter(bits=64, hash_rounds=3, client=mock_script_client)
        mock_script_client.eval.return_value = 5
        labels = {
            "backend": "redis",
            "operation": "set",
            "error": "UnexpectedScriptResultError",
        }
        before = _sample("bloom_operation_errors_total", labels)
        with pytest.raises(Exception):
            await bloom.set("A", "alpha")
        assert _sample("bloom_operation_errors_total", labels) == before + 1
