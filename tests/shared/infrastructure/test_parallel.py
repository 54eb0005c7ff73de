"""
Tests for ParallelBatchExecutor.
"""

import asyncio

import pytest

from verify_sonar.shared.infrastructure.resilience import ParallelBatchExecutor


@pytest.mark.asyncio
async def test_results_follow_item_order():
    """Results line up with items even when later items finish first."""
    executor = ParallelBatchExecutor(concurrency_limit=5)

    async def task(item):
        await asyncio.sleep((5 - item) * 0.01)
        return item * 10

    assert await executor.execute_batch([1, 2, 3, 4], task) == [10, 20, 30, 40]


@pytest.mark.asyncio
async def test_failures_are_isolated():
    executor = ParallelBatchExecutor()

    async def task(item):
        if item == 2:
            raise ValueError("bad item")
        return item

    assert await executor.execute_batch([1, 2, 3], task) == [1, None, 3]


@pytest.mark.asyncio
async def test_concurrency_limit():
    executor = ParallelBatchExecutor(concurrency_limit=2)
    running = 0
    peak = 0

    async def task(item):
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        await asyncio.sleep(0.01)
        running -= 1
        return item

    await executor.execute_batch(list(range(6)), task)

    assert peak == 2


@pytest.mark.asyncio
async def test_empty_batch():
    assert await ParallelBatchExecutor().execute_batch([], lambda item: item) == []
