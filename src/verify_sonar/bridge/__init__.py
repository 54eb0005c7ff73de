"""
SonarQube for IDE bridge: discovery and analysis dispatch.
"""

from .client import IdeBridgeClient
from .models import DiscoveryOutcome, Finding, Severity, TextRange, parse_findings
from .resolver import find_correct_bridge_async, resolve_workspace_async
from .scanner import scan_for_bridges_async

__all__ = [
    "IdeBridgeClient",
    "DiscoveryOutcome",
    "Finding",
    "Severity",
    "TextRange",
    "parse_findings",
    "find_correct_bridge_async",
    "resolve_workspace_async",
    "scan_for_bridges_async",
]
