"""Error Hierarchy: typed, categorized exceptions for all DevConnect failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with DevConnectError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - http_status overridable on ResourceNotFoundError: some lookups answer 400,
      matching the status codes existing clients already handle
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class DevConnectError(Exception):
    """Base exception for all DevConnect errors."""

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
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Auth Errors (401) ──────────────────────────────────────────

class UnauthenticatedError(DevConnectError):
    """Request carried no token."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No token, authorization denied",
            "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidTokenError(DevConnectError):
    """Token signature, expiry or payload rejected."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Token is not valid",
            "INVALID_TOKEN", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class NotAuthorizedError(DevConnectError):
    """Authenticated caller does not own the target resource."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User not authorized",
            "NOT_AUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(DevConnectError):
    """Requested aggregate or embedded entry does not exist."""
    def __init__(
        self,
        resource_type: str,
        resource_id: str | None = None,
        context: ErrorContext | None = None,
        http_status: int = 404,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, http_status,
        )
        self.resource_type = resource_type


class RuleViolationError(DevConnectError):
    """Sequence precondition failed (already liked, not liked, no such comment)."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )


class AlreadyExistsError(DevConnectError):
    """Unique resource (e.g. account email) already taken."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidCredentialsError(DevConnectError):
    """Login email/password pair rejected."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid credentials",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 400,
        )


class ConcurrencyError(DevConnectError):
    """Concurrent modification detected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UpstreamError(DevConnectError):
    """External HTTP API unreachable or timed out."""
    def __init__(self, service: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"{service} request failed: {message}",
            "UPSTREAM_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.service = service
