"""
Resilience helpers for verify-sonar.

Provides the concurrent fan-out used by endpoint discovery.
"""

from .parallel import ParallelBatchExecutor

__all__ = [
    "ParallelBatchExecutor",
]
