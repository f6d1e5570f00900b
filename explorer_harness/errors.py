"""Module errors: structured error taxonomy for the explorer harness."""
#
from enum import Enum
from typing import Dict, Any, Optional

import httpx
# PURPOSE:
# Gives every failure the harness can surface a searchable code, a message
# and a details dictionary, so test output can be grepped by error kind.
#
# ERROR CODE FORMAT:
# - LAUNCH_XXX: Explorer process could not be started
# - CLIENT_XXX: Transport-level failures talking to the explorer
# - SERIAL_XXX: Response body could not be decoded
# - BOOT_XXX: Bootstrap / readiness errors
# - PROC_XXX: Process handle misuse
# - CONFIG_XXX: Configuration errors
#
# USAGE:
#   from explorer_harness.errors import ExplorerClientError, ErrorCode
#
#   raise ExplorerClientError(
#       ErrorCode.CLIENT_CONNECTION_FAILED,
#       "Explorer refused the connection",
#       details={"uri": "http://127.0.0.1:4000/explorer/graphql"}
#   )
#
# Launch errors deliberately do not inherit from ExplorerError: a caller
# catching query failures must never swallow an unlaunchable fixture.
#
class ErrorCode(Enum):
    # Launch Errors
    LAUNCH_BINARY_NOT_FOUND = "LAUNCH_001"
    LAUNCH_SPAWN_FAILED = "LAUNCH_002"

    # Client Errors
    CLIENT_CONNECTION_FAILED = "CLIENT_001"
    CLIENT_TIMEOUT = "CLIENT_002"
    CLIENT_PROTOCOL_ERROR = "CLIENT_003"
    CLIENT_REQUEST_FAILED = "CLIENT_004"

    # Serialization Errors
    SERIAL_JSON_PARSE_ERROR = "SERIAL_001"
    SERIAL_SHAPE_MISMATCH = "SERIAL_002"

    # Bootstrap Errors
    BOOT_NOT_READY = "BOOT_001"

    # Process Errors
    PROC_HANDLE_CLOSED = "PROC_001"

    # Config Errors
    CONFIG_INVALID = "CONFIG_001"


class HarnessError(Exception):
    """
    Base exception with structured error information.

    Attributes:
        code: ErrorCode enum value (e.g., "CLIENT_001")
        message: Human-readable error message
        details: Optional dictionary with additional context
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}

        # Build exception message with code for easy debugging
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for JSON serialization.

        Returns:
            Dictionary with code, message and details
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ExplorerLaunchError(HarnessError):
    """The explorer binary could not be started."""


class ProcessClosedError(HarnessError):
    """A reference was requested on a process group that was already torn down."""

    def __init__(self, message: str = "explorer process already torn down"):
        super().__init__(ErrorCode.PROC_HANDLE_CLOSED, message)


class ExplorerError(HarnessError):
    """Base class for recoverable failures returned by explorer queries."""


class ExplorerClientError(ExplorerError):
    """Transport/connection failure while running a query (graph client error)."""


class ExplorerSerializationError(ExplorerError):
    """The response body is not the expected JSON envelope."""


class ExplorerTransportError(ExplorerError):
    """An HTTP-library error while reading a streamed response body (reset, bad content encoding)."""


class ExplorerNotReadyError(ExplorerError):
    """The explorer never answered during bootstrap (strict mode only)."""


class GraphQlClientError(Exception):
    """
    Raised by GraphQlClient when the HTTP round trip fails.

    Wraps the underlying httpx error and keeps the URI it was sent to.
    """

    def __init__(self, uri: str, error: httpx.HTTPError):
        super().__init__(f"request to {uri} failed: {error}")
        self.uri = uri
        self.error = error


# ============================================================================
# Convenience Functions
# ============================================================================

def classify_transport_error(error: BaseException) -> ErrorCode:
    """
    Map an httpx exception to the closest CLIENT_XXX code.

    Args:
        error: The original exception (may be a GraphQlClientError)

    Returns:
        ErrorCode for the failure
    """
    if isinstance(error, GraphQlClientError):
        error = error.error

    if isinstance(error, httpx.TimeoutException):
        return ErrorCode.CLIENT_TIMEOUT
    if isinstance(error, (httpx.ConnectError, httpx.NetworkError)):
        return ErrorCode.CLIENT_CONNECTION_FAILED
    if isinstance(error, (httpx.ProtocolError, httpx.DecodingError)):
        return ErrorCode.CLIENT_PROTOCOL_ERROR
    return ErrorCode.CLIENT_REQUEST_FAILED


# ============================================================================
# Module-Level Exports
# ============================================================================

__all__ = [
    "ErrorCode",
    "HarnessError",
    "ExplorerLaunchError",
    "ProcessClosedError",
    "ExplorerError",
    "ExplorerClientError",
    "ExplorerSerializationError",
    "ExplorerTransportError",
    "ExplorerNotReadyError",
    "GraphQlClientError",
    "classify_transport_error",
]
