from .formatter import (
    EXIT_FAILURE,
    EXIT_OK,
    exit_code_for,
    format_finding,
    format_findings,
    format_summary,
    has_failing_issues,
    severity_icon,
    sort_findings,
)

__all__ = [
    "EXIT_FAILURE",
    "EXIT_OK",
    "exit_code_for",
    "format_finding",
    "format_findings",
    "format_summary",
    "has_failing_issues",
    "severity_icon",
    "sort_findings",
]
