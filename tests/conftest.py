"""Shared test fixtures for the verify-sonar test suite."""

import httpx
import pytest

from verify_sonar.bridge.models import Finding, Severity, TextRange


@pytest.fixture
def make_finding():
    """Factory for Finding instances with sensible defaults."""

    def _make(
        severity: Severity = Severity.MAJOR,
        file_path: str = "/project/src/app.ts",
        rule_key: str = "typescript:S1481",
        message: str = "Remove this unused variable.",
        start_line: int | None = None,
    ) -> Finding:
        text_range = TextRange(start_line=start_line, end_line=start_line) if start_line else None
        return Finding(
            rule_key=rule_key,
            message=message,
            severity=severity,
            file_path=file_path,
            text_range=text_range,
        )

    return _make


@pytest.fixture
def finding_json():
    """Wire-format finding as returned by the IDE bridge."""
    return {
        "ruleKey": "python:S1192",
        "message": "Define a constant instead of duplicating this literal.",
        "severity": "CRITICAL",
        "filePath": "/project/src/module.py",
        "textRange": {"startLine": 12, "endLine": 12, "startLineOffset": 4, "endLineOffset": 20},
    }


@pytest.fixture
def bridge_transport():
    """
    Build an httpx.MockTransport simulating IDE bridges on several ports.

    ``bridges`` maps port -> handler(request) returning an httpx.Response.
    Ports without a handler refuse the connection. Every request is recorded
    in ``transport.requests``.
    """

    def _build(bridges: dict) -> httpx.MockTransport:
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            port_handler = bridges.get(request.url.port)
            if port_handler is None:
                raise httpx.ConnectError("Connection refused", request=request)
            return port_handler(request)

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return _build


@pytest.fixture
def project_dir(tmp_path):
    """Small project tree with scannable, unsupported and skipped files."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.ts").write_text("const x = 1;\n")
    (tmp_path / "src" / "util.py").write_text("x = 1\n")
    (tmp_path / "src" / "README.md").write_text("# readme\n")
    (tmp_path / "node_modules" / "lib").mkdir(parents=True)
    (tmp_path / "node_modules" / "lib" / "index.js").write_text("module.exports = {};\n")
    (tmp_path / ".hidden").mkdir()
    (tmp_path / ".hidden" / "secret.js").write_text("var a;\n")
    return tmp_path
