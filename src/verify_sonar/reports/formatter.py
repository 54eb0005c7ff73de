"""
Terminal report for IDE bridge findings.

Output format, one entry per finding, most severe first:

    [x] src/app.ts:12 (typescript:S1234)
        Message text

followed by a one-line summary such as
``Scanned 4 file(s) - 2 error(s), 1 warning(s), 1 info``.
"""

import os
from collections import Counter
from pathlib import Path
from typing import Iterable, Sequence

from verify_sonar.bridge.models import Finding, Severity

SEVERITY_ICONS = {
    Severity.BLOCKER: "[x]",
    Severity.CRITICAL: "[x]",
    Severity.MAJOR: "[!]",
    Severity.MINOR: "[-]",
    Severity.INFO: "[-]",
}

EXIT_OK = 0
EXIT_FAILURE = 1


def severity_icon(severity: Severity) -> str:
    return SEVERITY_ICONS.get(severity, "[-]")


def sort_findings(findings: Iterable[Finding]) -> list[Finding]:
    """Most severe first, then by file path. Stable for equal keys."""
    return sorted(findings, key=lambda f: (f.severity.rank, f.file_path))


def format_finding(finding: Finding, cwd: str | Path) -> str:
    relative_path = os.path.relpath(finding.file_path, cwd)
    return (
        f"{severity_icon(finding.severity)} {relative_path}:{finding.line} ({finding.rule_key})\n"
        f"    {finding.message}"
    )


def format_findings(findings: Iterable[Finding], cwd: str | Path) -> list[str]:
    """Render every finding in report order."""
    return [format_finding(finding, cwd) for finding in sort_findings(findings)]


def format_summary(findings: Sequence[Finding], file_count: int) -> str:
    """
    Summarize findings by bucket: errors (BLOCKER, CRITICAL), warnings
    (MAJOR) and info (MINOR, INFO). Empty buckets are left out.
    """
    counts = Counter(f.severity for f in findings)

    error_count = counts[Severity.BLOCKER] + counts[Severity.CRITICAL]
    warning_count = counts[Severity.MAJOR]
    info_count = counts[Severity.MINOR] + counts[Severity.INFO]

    parts = []
    if error_count:
        parts.append(f"{error_count} error(s)")
    if warning_count:
        parts.append(f"{warning_count} warning(s)")
    if info_count:
        parts.append(f"{info_count} info")

    if not parts:
        return f"Scanned {file_count} file(s) - no issues found"
    return f"Scanned {file_count} file(s) - {', '.join(parts)}"


def has_failing_issues(findings: Iterable[Finding]) -> bool:
    return any(f.severity.is_failing for f in findings)


def exit_code_for(findings: Iterable[Finding]) -> int:
    """1 if any BLOCKER, CRITICAL or MAJOR finding is present, else 0."""
    return EXIT_FAILURE if has_failing_issues(findings) else EXIT_OK
