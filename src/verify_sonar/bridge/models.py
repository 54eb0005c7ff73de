"""
IDE bridge domain models.

Wire format (camelCase) of POST /sonarlint/api/analysis/files:

    {"findings": [{"ruleKey": "...", "message": "...", "severity": "MAJOR",
                   "filePath": "/abs/path", "textRange": {"startLine": 3, "endLine": 3}}]}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from verify_sonar.shared.domain.base_model import BaseDomainModel


class Severity(str, Enum):
    """Finding severity, declared from most to least severe."""

    BLOCKER = "BLOCKER"
    CRITICAL = "CRITICAL"
    MAJOR = "MAJOR"
    MINOR = "MINOR"
    INFO = "INFO"

    @property
    def rank(self) -> int:
        """0 for BLOCKER up to 4 for INFO."""
        return _SEVERITY_RANK[self]

    @property
    def is_failing(self) -> bool:
        """BLOCKER, CRITICAL and MAJOR fail the run."""
        return self.rank <= _SEVERITY_RANK[Severity.MAJOR]


_SEVERITY_RANK = {severity: index for index, severity in enumerate(Severity)}


class DiscoveryOutcome(str, Enum):
    """Classification of one endpoint's answer during workspace resolution."""

    MATCH = "match"
    WRONG_WORKSPACE = "wrong_workspace"
    RATE_LIMITED = "rate_limited"
    ERROR = "error"


def _require_type(name: str, value: Any, expected: type) -> Any:
    # bool is an int subclass; a line number of True is still a contract violation
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ValueError(f"Field {name} must be {expected.__name__}, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class TextRange(BaseDomainModel):
    """1-based line range, with optional column offsets."""

    start_line: int
    end_line: int
    start_line_offset: int | None = None
    end_line_offset: int | None = None

    @classmethod
    def _convert_field(cls, name: str, value: Any) -> Any:
        return _require_type(name, value, int)


@dataclass(frozen=True)
class Finding(BaseDomainModel):
    """One issue reported by the analysis."""

    rule_key: str
    message: str
    severity: Severity
    file_path: str
    text_range: TextRange | None = None

    @property
    def line(self) -> int:
        """Start line, or 1 when the finding has no range."""
        return self.text_range.start_line if self.text_range else 1

    @classmethod
    def _convert_field(cls, name: str, value: Any) -> Any:
        if name == "severity":
            return Severity(value)
        if name == "text_range":
            return TextRange.from_json(value)
        return _require_type(name, value, str)


def parse_findings(payload: Any) -> list[Finding]:
    """
    Parse the analysis response body into findings, keeping wire order.

    Raises:
        ValueError: If the payload does not match the findings contract
    """
    if not isinstance(payload, dict) or "findings" not in payload:
        raise ValueError("Response has no 'findings' field")

    findings = payload["findings"]
    if not isinstance(findings, list):
        raise ValueError("'findings' must be a list")

    return [Finding.from_json(item) for item in findings]
