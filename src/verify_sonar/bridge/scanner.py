"""
IDE bridge discovery - port scan.

Checks every candidate port concurrently and reports the live ones.
"""

from typing import Iterable, Protocol

from verify_sonar.shared.infrastructure.logging import get_logger
from verify_sonar.shared.infrastructure.resilience import ParallelBatchExecutor

logger = get_logger(__name__)


class StatusCheck(Protocol):
    async def check_status_async(self, port: int) -> bool: ...


async def scan_for_bridges_async(client: StatusCheck, ports: Iterable[int]) -> list[int]:
    """
    Check all ports at once and return the live ones in ascending order.

    Waits for every check to settle. An empty list means nothing answered.
    """
    candidates = sorted(set(ports))
    if not candidates:
        return []

    executor = ParallelBatchExecutor(concurrency_limit=len(candidates))
    results = await executor.execute_batch(candidates, client.check_status_async, batch_name="bridge_scan")

    # One result slot per candidate, so completion order does not matter
    live = [port for port, alive in zip(candidates, results) if alive]

    logger.info("bridge_scan_completed", checked=len(candidates), live=live)
    return live
