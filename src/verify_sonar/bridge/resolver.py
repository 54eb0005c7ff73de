"""
IDE bridge discovery - workspace resolution.

Several IDE windows may each run a bridge. The right one is the first bridge
(in port order) that accepts an analysis request for a file of ours; there is
no endpoint to ask a bridge which folders it has open.
"""

from typing import Iterable, Protocol, Sequence

from verify_sonar.shared.domain.exceptions import (
    NoEndpointsError,
    NoMatchingWorkspaceError,
    RateLimitedError,
    VerifySonarError,
    WrongWorkspaceError,
)
from verify_sonar.shared.infrastructure.logging import get_logger

from .models import DiscoveryOutcome, Finding
from .scanner import StatusCheck, scan_for_bridges_async

logger = get_logger(__name__)


class AnalysisBackend(StatusCheck, Protocol):
    async def analyze_files_async(self, port: int, file_paths: Sequence[str]) -> list[Finding]: ...


def classify_bridge_error(error: Exception) -> DiscoveryOutcome:
    """Map a failed analysis call to its discovery outcome."""
    if isinstance(error, RateLimitedError):
        return DiscoveryOutcome.RATE_LIMITED
    if isinstance(error, WrongWorkspaceError):
        return DiscoveryOutcome.WRONG_WORKSPACE
    return DiscoveryOutcome.ERROR


async def try_bridge_async(client: AnalysisBackend, port: int, test_file: str) -> DiscoveryOutcome:
    """
    Analyze one file on one bridge and classify the answer.

    Raises:
        RateLimitedError: the bridge is throttling; discovery must stop
    """
    try:
        await client.analyze_files_async(port, [test_file])
    except VerifySonarError as e:
        outcome = classify_bridge_error(e)
        if outcome is DiscoveryOutcome.RATE_LIMITED:
            raise
        if outcome is DiscoveryOutcome.WRONG_WORKSPACE:
            logger.info("workspace_mismatch", port=port)
        else:
            # Lenient: a misbehaving bridge is skipped like a wrong workspace
            logger.warning("bridge_attempt_failed", port=port, error=str(e))
        return outcome

    return DiscoveryOutcome.MATCH


async def resolve_workspace_async(client: AnalysisBackend, live_ports: Sequence[int], test_file: str) -> int:
    """
    Pick the bridge whose workspace contains ``test_file``.

    Bridges are tried one at a time in ascending port order; the first match
    wins and later bridges are not contacted.

    Raises:
        NoEndpointsError: live_ports is empty
        RateLimitedError: a bridge answered 429
        NoMatchingWorkspaceError: every bridge refused the file
    """
    if not live_ports:
        raise NoEndpointsError()

    for port in sorted(live_ports):
        outcome = await try_bridge_async(client, port, test_file)
        if outcome is DiscoveryOutcome.MATCH:
            logger.info("bridge_resolved", port=port)
            return port

    raise NoMatchingWorkspaceError(len(live_ports))


async def find_correct_bridge_async(client: AnalysisBackend, test_file: str, ports: Iterable[int]) -> int:
    """Scan ``ports`` for live bridges, then resolve the one serving ``test_file``."""
    live_ports = await scan_for_bridges_async(client, ports)
    return await resolve_workspace_async(client, live_ports, test_file)
