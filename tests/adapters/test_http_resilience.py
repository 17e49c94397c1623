from __future__ import annotations

import asyncio

import pytest
from hishel import AsyncSqliteStorage

from authprofiles.adapters.http_resilience import ResilientClient, build_cache_storage, build_retry
from authprofiles.config import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy


def test_no_cache_config_means_no_storage() -> None:
    assert build_cache_storage(None) is None


def test_memory_cache_uses_sqlite_storage() -> None:
    assert isinstance(build_cache_storage(CacheConfig(backend="memory")), AsyncSqliteStorage)


def test_sqlite_cache_requires_a_path() -> None:
    with pytest.raises(ValueError, match="sqlite_path"):
        build_cache_storage(CacheConfig(backend="sqlite"))


def test_retry_policy_only_replays_reads() -> None:
    retry = build_retry(RetryPolicy(total=5))

    assert retry.total == 5
    assert "GET" in retry.allowed_methods
    assert "POST" not in retry.allowed_methods


def test_client_can_be_used_as_context_manager() -> None:
    config = ResilienceConfig(
        name="test",
        base_url="https://example.invalid",
        ratelimit=RateLimit(max_calls=1, per_seconds=1.0),
        default_headers={"User-Agent": "test"},
    )

    async def run() -> bool:
        async with ResilientClient(config) as client:
            return client._client.is_closed  # noqa: SLF001  # type: ignore[reportPrivateUsage]

    assert asyncio.run(run()) is False
