"""
SonarQube for IDE bridge HTTP client.

API: http://localhost:<port>/sonarlint/api/...
- GET  /status          -> 200 when a bridge listens on the port
- POST /analysis/files  -> {"findings": [...]} for files in the IDE workspace
"""

from typing import Sequence

import httpx

from verify_sonar.shared.domain.exceptions import (
    DispatchFailureError,
    MalformedResponseError,
    RateLimitedError,
    WrongWorkspaceError,
)
from verify_sonar.shared.infrastructure.logging import get_logger

from .models import Finding, parse_findings

logger = get_logger(__name__)

STATUS_PATH = "/sonarlint/api/status"
ANALYSIS_PATH = "/sonarlint/api/analysis/files"

# Body text the bridge returns when none of the files belong to its workspace
WRONG_WORKSPACE_MESSAGE = "No files were found to be indexed by SonarQube for IDE"

HTTP_TOO_MANY_REQUESTS = 429


class IdeBridgeClient:
    """
    Async client for the IDE bridge on localhost.

    One instance serves a whole invocation; use it as an async context
    manager so the underlying connection pool is closed.
    """

    def __init__(
        self,
        host: str = "localhost",
        status_timeout: float = 0.5,
        request_timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._host = host
        self._status_timeout = status_timeout
        self._request_timeout = request_timeout
        # The bridge only answers requests that look like they come from a local page
        self._client = httpx.AsyncClient(
            headers={
                "Content-Type": "application/json",
                "Host": host,
                "Origin": f"http://{host}",
                "Connection": "close",
            },
            transport=transport,
        )

    async def __aenter__(self) -> "IdeBridgeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _url(self, port: int, path: str) -> str:
        return f"http://{self._host}:{port}{path}"

    async def check_status_async(self, port: int) -> bool:
        """Return True if a bridge answers the status endpoint on this port."""
        try:
            response = await self._client.get(self._url(port, STATUS_PATH), timeout=self._status_timeout)
        except httpx.HTTPError as e:
            logger.debug("bridge_status_failed", port=port, error=type(e).__name__)
            return False

        if response.status_code != 200:
            logger.debug("bridge_status_rejected", port=port, status_code=response.status_code)
            return False
        return True

    async def analyze_files_async(self, port: int, file_paths: Sequence[str]) -> list[Finding]:
        """
        Analyze absolute file paths with the bridge on ``port``.

        Raises:
            RateLimitedError: HTTP 429
            WrongWorkspaceError: files are outside the bridge's workspace
            DispatchFailureError: transport failure or any other non-200 status
            MalformedResponseError: 200 with a body that is not a findings list
        """
        body = {"fileAbsolutePaths": list(file_paths)}
        logger.debug("bridge_analysis_requested", port=port, file_count=len(body["fileAbsolutePaths"]))

        try:
            response = await self._client.post(
                self._url(port, ANALYSIS_PATH), json=body, timeout=self._request_timeout
            )
        except httpx.TimeoutException as e:
            raise DispatchFailureError(port, reason="request timeout") from e
        except httpx.HTTPError as e:
            raise DispatchFailureError(port, reason=str(e) or type(e).__name__) from e

        if response.status_code == HTTP_TOO_MANY_REQUESTS:
            raise RateLimitedError(port)

        if response.status_code != 200:
            if WRONG_WORKSPACE_MESSAGE in response.text:
                raise WrongWorkspaceError(port)
            logger.debug("bridge_analysis_failed", port=port, status_code=response.status_code)
            raise DispatchFailureError(port, status_code=response.status_code)

        try:
            findings = parse_findings(response.json())
        except ValueError as e:  # includes JSONDecodeError
            raise MalformedResponseError(port, str(e)) from e

        logger.debug("bridge_analysis_completed", port=port, finding_count=len(findings))
        return findings
