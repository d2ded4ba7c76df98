"""Error Hierarchy - typed, categorized exceptions for every Anchor PDS failure mode.

Invariants:
    - Every error has a code (stable XRPC tag), category, severity and HTTP status
    - to_response() produces the XRPC error envelope: {"error": tag, "message": text}
    - Domain errors (400-level) carry the first failing rule; infrastructure errors
      (500-level) never expose internal details to callers

Design Decisions:
    - Single hierarchy with AnchorError base: FastAPI global handler catches all
      (ADR: uniform error shape across every XRPC method)
    - ErrorContext as dataclass: rich observability without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone

from anchor_pds.core.domain_types import RejectionReason


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    did: str | None = None
    collection: str | None = None
    rkey: str | None = None


class AnchorError(Exception):
    """Base exception for all Anchor PDS errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the XRPC error envelope."""
        return {"error": self.code, "message": self.message}


# ─── Domain Errors (400-level) ──────────────────────────────────

class AuthenticationRequiredError(AnchorError):
    """Missing, malformed, or unresolvable bearer token."""
    def __init__(
        self,
        message: str = "Authentication required",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "AuthenticationRequired", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(AnchorError):
    """Authenticated, but not allowed to act on the requested owner scope."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "Forbidden", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class InvalidRequestError(AnchorError):
    """Malformed request, wrong collection, or rejected record."""
    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        category: ErrorCategory = ErrorCategory.VALIDATION,
    ):
        super().__init__(
            message, "InvalidRequest", category,
            ErrorSeverity.ERROR, context, 400,
        )


class CheckinValidationError(InvalidRequestError):
    """Check-in record rejected by the validator (first failing rule only)."""
    def __init__(
        self,
        reason: RejectionReason,
        message: str,
        field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(message, context)
        self.reason = reason
        self.field = field


class RecordAlreadyExistsError(InvalidRequestError):
    """A record with the same key is already stored."""
    def __init__(self, rkey: str, context: ErrorContext | None = None):
        super().__init__(
            f"Record already exists: {rkey}", context, ErrorCategory.CONFLICT,
        )
        self.rkey = rkey


class RecordNotFoundError(AnchorError):
    """No record stored under the requested URI."""
    def __init__(self, uri: str, context: ErrorContext | None = None):
        super().__init__(
            "Record not found", "RecordNotFound",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO, context, 404,
        )
        self.uri = uri


class NotFoundError(AnchorError):
    """Unknown route."""
    def __init__(
        self, message: str = "Endpoint not found", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "NotFound", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )


class MethodNotImplementedError(AnchorError):
    """Recognized XRPC namespace, but the method is not served here."""
    def __init__(self, nsid: str, context: ErrorContext | None = None):
        super().__init__(
            f"Method not implemented: {nsid}", "MethodNotImplemented",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO, context, 501,
        )
        self.nsid = nsid


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(AnchorError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "InternalServerError", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
