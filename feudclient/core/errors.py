"""Error Hierarchy — typed, categorized exceptions for every request failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Four outcomes of a round trip stay distinguishable: transport, protocol status,
      malformed envelope, domain rejection
    - DomainError.error_type is the server's string, passed through untouched
    - No password, digest or session token ends up in a message or context

Design Decisions:
    - Single hierarchy with FeudClientError base: callers can catch everything in one clause
    - ErrorContext as dataclass: diagnostics without coupling to the logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    MALFORMED = "malformed"
    DOMAIN = "domain"
    VALIDATION = "validation"
    ENCODING = "encoding"


@dataclass
class ErrorContext:
    """Request-side context attached to an error for debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    path: str | None = None
    status_code: int | None = None
    debug_info: dict[str, Any] | None = None


class FeudClientError(Exception):
    """Base exception for all feudclient errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_dict(self) -> dict:
        """Flatten into a diagnostic dict (logs, bug reports)."""
        return {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "path": self.context.path,
            "status_code": self.context.status_code,
        }


# ─── Client-side Errors ─────────────────────────────────────────

class ValidationError(FeudClientError):
    """Required argument missing, detected before any network call."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field


class EncodingError(FeudClientError):
    """Request body cannot be represented as JSON."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot encode request body: {message}",
            "ENCODING_ERROR", ErrorCategory.ENCODING,
            ErrorSeverity.ERROR, context,
        )


# ─── Round-trip Errors ──────────────────────────────────────────

class TransportFailure(FeudClientError):
    """Connection-level failure: no HTTP response was received."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Transport failure: {message}",
            "TRANSPORT_FAILURE", ErrorCategory.TRANSPORT,
            ErrorSeverity.CRITICAL, context,
        )


class ProtocolFailure(FeudClientError):
    """Server answered with a non-200 HTTP status."""
    def __init__(self, status_code: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.status_code = status_code
        super().__init__(
            f"got statuscode {status_code}",
            "PROTOCOL_FAILURE", ErrorCategory.PROTOCOL,
            ErrorSeverity.ERROR, ctx,
        )
        self.status_code = status_code


class MalformedResponse(FeudClientError):
    """Reply was not a recognizable {status, content} envelope."""
    def __init__(self, message: str, raw: Any = None, context: ErrorContext | None = None):
        super().__init__(
            message, "MALFORMED_RESPONSE", ErrorCategory.MALFORMED,
            ErrorSeverity.ERROR, context,
        )
        self.raw = raw


class DomainError(FeudClientError):
    """Server understood the request and refused it (status "error")."""
    def __init__(self, error_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"Error: {error_type}",
            "DOMAIN_ERROR", ErrorCategory.DOMAIN,
            ErrorSeverity.WARNING, context,
        )
        self.error_type = error_type
