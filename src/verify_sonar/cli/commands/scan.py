"""
Scan Command - analyze files with SonarQube for IDE

Collects files (arguments or outstanding git changes), finds the IDE bridge
whose workspace holds them, runs the analysis and prints the findings.
"""

import asyncio
from pathlib import Path
from typing import List, Optional, Sequence

import httpx
import typer
from rich.console import Console

from verify_sonar import __version__
from verify_sonar.bridge.client import IdeBridgeClient
from verify_sonar.bridge.resolver import find_correct_bridge_async
from verify_sonar.collection.collector import FileCollector
from verify_sonar.reports.formatter import EXIT_FAILURE, EXIT_OK, exit_code_for, format_findings, format_summary
from verify_sonar.shared.domain.exceptions import VerifySonarError
from verify_sonar.shared.infrastructure.config import Settings, load_settings
from verify_sonar.shared.infrastructure.logging import configure_logging, get_logger

console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)
logger = get_logger(__name__)


def _say(out: Console, text: str = "") -> None:
    # Finding icons look like rich markup ("[x]"), so print verbatim
    out.print(text, markup=False)


def _version_callback(value: bool) -> None:
    if value:
        _say(console, f"verify-sonar {__version__}")
        raise typer.Exit()


async def collect_files_async(collector: FileCollector, paths: Sequence[str], out: Console) -> List[str] | None:
    """Files to scan, or None when there is nothing to do (message already printed)."""
    if not paths:
        _say(out, "Scanning outstanding git changes...")
        files = await collector.git_changed_files_async()
        if not files:
            _say(out, "No changed files to scan.")
            return None
        return files

    files = collector.collect_from_args(paths)
    if not files:
        _say(out, "No scannable files found.")
        return None
    return files


async def run_scan_async(
    paths: Sequence[str],
    settings: Settings,
    cwd: Path,
    out: Console,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """
    Run one scan end to end and return the process exit code.

    Raises:
        VerifySonarError: collection, discovery or dispatch failed; nothing
            about findings has been printed in that case
    """
    files = await collect_files_async(FileCollector(cwd), paths, out)
    if files is None:
        return EXIT_OK

    _say(out, f"Found {len(files)} file(s) to scan")
    _say(out, "Connecting to SonarQube for IDE...")

    async with IdeBridgeClient(
        host=settings.host,
        status_timeout=settings.status_timeout,
        request_timeout=settings.request_timeout,
        transport=transport,
    ) as client:
        port = await find_correct_bridge_async(client, files[0], settings.port_range)
        _say(out, f"Connected on port {port}")
        _say(out, "Analyzing...\n")

        findings = await client.analyze_files_async(port, files)

    logger.info("scan_completed", port=port, file_count=len(files), finding_count=len(findings))

    rendered = format_findings(findings, cwd)
    for entry in rendered:
        _say(out, entry)
    if rendered:
        _say(out)
    _say(out, format_summary(findings, len(files)))

    return exit_code_for(findings)


def run(
    paths: Optional[List[str]] = typer.Argument(
        None, help="Files or directories to scan (default: outstanding git changes)"
    ),
    port_start: Optional[int] = typer.Option(None, "--port-start", help="First IDE bridge port to try"),
    port_end: Optional[int] = typer.Option(None, "--port-end", help="Last IDE bridge port to try"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log discovery details to stderr"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Scan files with SonarQube for IDE and report the findings."""
    try:
        settings = load_settings(port_start=port_start, port_end=port_end)
        configure_logging(level="DEBUG" if verbose else None, settings=settings)
        exit_code = asyncio.run(run_scan_async(paths or [], settings, Path.cwd(), console))
    except VerifySonarError as e:
        err_console.print(str(e), markup=False, style="red")
        raise typer.Exit(EXIT_FAILURE)

    raise typer.Exit(exit_code)
