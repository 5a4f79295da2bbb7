# =============================================================================
# seed_api/exceptions.py - Exception Taxonomy
# =============================================================================
# Every failure the API reports is surfaced to the client with the same
# JSON shape: {"error": true, "message": "..."}.
#
# - ConfigNotFoundError / ConfigParseError: fatal at startup
# - RouteNotFoundError: no route matched the request path (404)
# - MethodNotAllowedError: path matched, method did not (405)
# - PlatformFatalError: low-level failure, reported with a fixed message
#
# The handlers that turn these into responses live in seed_api/handlers.py.
# =============================================================================

from typing import Any


class SeedApiException(Exception):
    """
    Base exception for the seed API.

    All custom exceptions inherit from this class and can render themselves
    as the API's standard error body.
    """

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"error": True, "message": self.message}


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigNotFoundError(SeedApiException):
    """Raised when the INI configuration file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Could not find configuration file: {path}")


class ConfigParseError(SeedApiException):
    """Raised when the configuration is unreadable, malformed or incomplete."""


# =============================================================================
# Request Exceptions
# =============================================================================

class RouteNotFoundError(SeedApiException):
    """Raised when no route matches the requested resource."""

    def __init__(self, uri: str):
        super().__init__(f"Route not found for resource: {uri}", status_code=404)


class MethodNotAllowedError(SeedApiException):
    """Raised when the path exists but does not accept the request method."""

    def __init__(self, methods: list[str]):
        super().__init__(f"Method must be one of: {', '.join(methods)}", status_code=405)
        self.methods = methods


class PlatformFatalError(SeedApiException):
    """Raised for low-level failures whose detail must not reach the client."""
