"""
Tests for the concurrent IDE bridge port scan.
"""

import asyncio

import pytest

from verify_sonar.bridge.scanner import scan_for_bridges_async


class FakeStatusCheck:
    """Status check whose answers and latencies are set per port."""

    def __init__(self, live: set[int], delays: dict[int, float] | None = None):
        self.live = live
        self.delays = delays or {}
        self.completed: list[int] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def check_status_async(self, port: int) -> bool:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(self.delays.get(port, 0))
        self.in_flight -= 1
        self.completed.append(port)
        return port in self.live


class TestScanForBridges:
    """Test scan_for_bridges_async."""

    @pytest.mark.asyncio
    async def test_returns_live_ports_sorted(self):
        checker = FakeStatusCheck(live={64125, 64121, 64130})

        live = await scan_for_bridges_async(checker, range(64120, 64131))

        assert live == [64121, 64125, 64130]

    @pytest.mark.asyncio
    async def test_order_independent_of_completion(self):
        """Checks finishing in reverse order still give ascending output."""
        ports = range(64120, 64131)
        delays = {port: (64131 - port) * 0.01 for port in ports}
        checker = FakeStatusCheck(live={64120, 64124, 64129}, delays=delays)

        live = await scan_for_bridges_async(checker, ports)

        assert checker.completed == sorted(ports, reverse=True)
        assert live == [64120, 64124, 64129]

    @pytest.mark.asyncio
    async def test_checks_run_concurrently(self):
        checker = FakeStatusCheck(live=set(), delays={port: 0.05 for port in range(64120, 64131)})

        await scan_for_bridges_async(checker, range(64120, 64131))

        assert checker.max_in_flight == 11

    @pytest.mark.asyncio
    async def test_waits_for_all_checks(self):
        checker = FakeStatusCheck(live={64120, 64130}, delays={64120: 0.0, 64130: 0.05})

        live = await scan_for_bridges_async(checker, range(64120, 64131))

        assert len(checker.completed) == 11
        assert live == [64120, 64130]

    @pytest.mark.asyncio
    async def test_no_live_ports(self):
        assert await scan_for_bridges_async(FakeStatusCheck(live=set()), range(64120, 64131)) == []

    @pytest.mark.asyncio
    async def test_result_is_subset_of_range(self):
        checker = FakeStatusCheck(live={1, 64122, 70000})

        live = await scan_for_bridges_async(checker, range(64120, 64124))

        assert live == [64122]

    @pytest.mark.asyncio
    async def test_failing_check_counts_as_not_live(self):
        class BrokenStatusCheck(FakeStatusCheck):
            async def check_status_async(self, port: int) -> bool:
                if port == 64121:
                    raise RuntimeError("unexpected")
                return await super().check_status_async(port)

        live = await scan_for_bridges_async(BrokenStatusCheck(live={64120, 64121}), range(64120, 64123))

        assert live == [64120]

    @pytest.mark.asyncio
    async def test_empty_range(self):
        assert await scan_for_bridges_async(FakeStatusCheck(live={64120}), []) == []
