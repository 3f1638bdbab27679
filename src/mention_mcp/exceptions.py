"""Mention MCP custom exceptions.

Exception Design Principles:
1. Every failure surfaced to the agent carries exactly one ErrorKind
2. Errors are logged where they are detected and propagated unchanged
3. Split on domain of actionable information:
   - Fixable by the agent in-session (ArgumentValidationError, UnknownToolError)
   - Fixable by reconfiguration outside the session (ConfigError,
     InvalidCredentialError, AccessDeniedError)
   - Transient, worth trying again later (RequestTimeoutError, NetworkError,
     RateLimitError)
   - Upstream misbehaviour (UpstreamError, UpstreamProtocolError,
     UpstreamShapeError)
"""

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Fixed taxonomy of failure kinds reported to the agent."""

    VALIDATION = "ValidationError"
    UNKNOWN_OPERATION = "UnknownOperation"
    TIMEOUT = "Timeout"
    NETWORK_FAILURE = "NetworkFailure"
    INVALID_CREDENTIAL = "InvalidCredential"
    ACCESS_DENIED = "AccessDenied"
    RATE_LIMITED = "RateLimited"
    UPSTREAM_ERROR = "UpstreamError"
    UPSTREAM_PROTOCOL_ERROR = "UpstreamProtocolError"
    UPSTREAM_SHAPE_ERROR = "UpstreamShapeError"
    CONFIG_ERROR = "ConfigError"


class MentionMCPError(Exception):
    """Base exception for all Mention MCP errors.

    Provides rich context and actionable suggestions beyond standard exceptions.
    All Mention MCP custom exceptions inherit from this base class.
    """

    kind: ErrorKind = ErrorKind.UPSTREAM_ERROR

    def __init__(
        self,
        message: str,  # the error message
        *,
        errors: list[str] | None = None,  # detailed list of errors (if available)
        suggestions: list[str] | None = None,  # remedial actions
        context: dict | None = None,  # additional detailed context
    ):
        """Initialize MentionMCPError.

        Args:
            message: Primary error message for users
            errors: List of specific error details
            suggestions: List of actionable suggestions for resolution
            context: Additional context information as key-value pairs
        """
        super().__init__(message)
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        self.context = context or {}


class ConfigError(MentionMCPError):
    """Application configuration errors - recoverable by user reconfiguration.

    Raised at startup, e.g. when MENTION_API_KEY is missing or a setting
    is out of range. Never raised while serving tool calls.
    """

    kind = ErrorKind.CONFIG_ERROR


class ArgumentValidationError(MentionMCPError):
    """Tool arguments violate the tool's declared schema.

    `errors` enumerates every violated constraint. Raised before any
    network activity.
    """

    kind = ErrorKind.VALIDATION


class UnknownToolError(MentionMCPError):
    """The invoked tool name is not registered."""

    kind = ErrorKind.UNKNOWN_OPERATION


class RequestTimeoutError(MentionMCPError):
    """No response arrived within the configured request timeout."""

    kind = ErrorKind.TIMEOUT


class NetworkError(MentionMCPError):
    """Transport-level failure before any HTTP response was received."""

    kind = ErrorKind.NETWORK_FAILURE


class UpstreamError(MentionMCPError):
    """The Mention API answered with a recognised error body.

    Carries the HTTP status code and the raw response body when available.
    Subclasses pin the kind for statuses that have a fixed meaning.
    """

    kind = ErrorKind.UPSTREAM_ERROR

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: Any = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.status_code = status_code
        self.body = body


class InvalidCredentialError(UpstreamError):
    """Upstream rejected the API key (HTTP 401)."""

    kind = ErrorKind.INVALID_CREDENTIAL


class AccessDeniedError(UpstreamError):
    """Upstream refused access to the resource (HTTP 403)."""

    kind = ErrorKind.ACCESS_DENIED


class RateLimitError(UpstreamError):
    """Upstream throttled the request (HTTP 429)."""

    kind = ErrorKind.RATE_LIMITED


class UpstreamProtocolError(UpstreamError):
    """Upstream returned a response that could not be interpreted."""

    kind = ErrorKind.UPSTREAM_PROTOCOL_ERROR


class UpstreamShapeError(UpstreamError):
    """A successful response body did not match the expected schema."""

    kind = ErrorKind.UPSTREAM_SHAPE_ERROR
