"""
Parallel Batch Executor.

Runs one async task per item and joins on all of them:
1. Concurrency control: semaphore-based throughput limiting.
2. Isolation: a failing item does not cancel the others.

Results are returned in item order, one slot per item, whatever the
completion order was.
"""

import asyncio
import time
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

from verify_sonar.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class ParallelBatchExecutor:
    """
    Executes a batch of async tasks concurrently and waits for all of them.
    """

    def __init__(self, concurrency_limit: int = 16):
        self.semaphore = asyncio.Semaphore(concurrency_limit)

    async def execute_batch(
        self, items: list[T], task_fn: Callable[[T], Coroutine[Any, Any, R]], batch_name: str = "batch"
    ) -> list[R | None]:
        """
        Run task_fn over every item concurrently; failed items yield None.
        """
        start_time = time.time()
        logger.debug("parallel_batch_started", batch=batch_name, count=len(items))

        async def _safe_execute(item: T) -> R | None:
            async with self.semaphore:
                try:
                    return await task_fn(item)
                except Exception as e:
                    logger.debug("parallel_task_failed", batch=batch_name, item=item, error=str(e))
                    return None

        results = await asyncio.gather(*(_safe_execute(item) for item in items))

        duration = int((time.time() - start_time) * 1000)
        logger.debug("parallel_batch_completed", batch=batch_name, count=len(items), duration_ms=duration)

        return list(results)
