"""
Domain exceptions for verify-sonar.

All application errors inherit from VerifySonarError. The CLI prints the
message of any VerifySonarError that reaches it and exits with status 1.
"""


class VerifySonarError(Exception):
    """Base class for all verify-sonar exceptions."""

    def __init__(self, message: str, context: dict = None):
        super().__init__(message)
        self.context = context or {}


class ConfigurationError(VerifySonarError):
    """Raised when configuration is invalid."""

    pass


class CollectionError(VerifySonarError):
    """Raised when a path argument cannot be turned into files to scan."""

    pass


# ---------------------------------------------------------------------------
# IDE bridge call failures
# ---------------------------------------------------------------------------


class BridgeError(VerifySonarError):
    """Raised when a call to an IDE bridge endpoint does not succeed."""

    pass


class RateLimitedError(BridgeError):
    """The bridge answered HTTP 429. Service-wide; the user has to wait."""

    def __init__(self, port: int):
        super().__init__(
            "SonarQube for IDE is rate limiting requests. Please wait and try again.",
            {"port": port},
        )


class WrongWorkspaceError(BridgeError):
    """The file is not part of any workspace indexed by this bridge."""

    def __init__(self, port: int):
        super().__init__(
            f"Files are not indexed by the IDE instance on port {port}.",
            {"port": port},
        )


class DispatchFailureError(BridgeError):
    """Unexpected status code or transport failure during analysis."""

    def __init__(self, port: int, status_code: int | None = None, reason: str | None = None):
        if status_code is not None:
            message = f"Analysis failed: {status_code}"
        else:
            message = f"Analysis failed: {reason or 'connection error'}"
        super().__init__(message, {"port": port, "status_code": status_code})
        self.status_code = status_code


class MalformedResponseError(BridgeError):
    """A 200 response whose body violates the findings contract."""

    def __init__(self, port: int, reason: str):
        super().__init__(
            f"SonarQube for IDE returned an invalid analysis response: {reason}",
            {"port": port},
        )


# ---------------------------------------------------------------------------
# Discovery failures
# ---------------------------------------------------------------------------


class DiscoveryError(VerifySonarError):
    """Raised when no IDE bridge can serve the requested files."""

    pass


class NoEndpointsError(DiscoveryError):
    """No port in the candidate range answered the status checker."""

    def __init__(self):
        super().__init__(
            "No SonarQube for IDE instances found.\n"
            "Please ensure:\n"
            "  - VS Code (or compatible IDE) is running\n"
            "  - SonarQube for IDE extension is installed and active"
        )


class NoMatchingWorkspaceError(DiscoveryError):
    """Live bridges exist but none has the files in its workspace."""

    def __init__(self, tried: int):
        super().__init__(
            f"Found {tried} IDE instance(s) but files are not in any workspace.\n"
            "Please open the correct project in your IDE.",
            {"tried": tried},
        )
        self.tried = tried
