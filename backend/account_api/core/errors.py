"""Error Hierarchy — typed, categorized exceptions for every account pipeline failure.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries its HTTP status; api/error_handlers.py is the only place
      that turns an error into a response
    - Client errors (400-level) never include storage or driver details
    - Gateway errors (NotFoundError, ConstraintViolationError) are distinct from
      service errors so the service can re-raise them in business terms

Design Decisions:
    - Single hierarchy with AccountApiError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


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
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    account_id: int | None = None
    field_name: str | None = None


class AccountApiError(Exception):
    """Base exception for all account API errors."""

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
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.context.field_name:
            body["field"] = self.context.field_name
        return {"error": body}


# ─── Request Errors (400-level, raised by guards and validators) ─

class InvalidFieldError(AccountApiError):
    """Request field is missing, malformed, or out of range."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class UnauthenticatedError(AccountApiError):
    """No usable caller identity was supplied."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthorized: User ID required",
            "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(AccountApiError):
    """Caller is known but not entitled to the resource."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class InvalidTargetError(AccountApiError):
    """Path-addressed account id is not a valid numeric id."""
    def __init__(self, raw_id: str, context: ErrorContext | None = None):
        super().__init__(
            "Invalid user ID",
            "INVALID_TARGET", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.raw_id = raw_id


class InvalidCredentialsError(AccountApiError):
    """Login failed. Same error for unknown email and wrong password."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid credentials",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Service Errors ─────────────────────────────────────────────

class AccountNotFoundError(AccountApiError):
    """No account exists for the requested id."""
    def __init__(self, account_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.account_id = account_id
        super().__init__(
            "User not found",
            "ACCOUNT_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.account_id = account_id


class DuplicateAccountError(AccountApiError):
    """An account with this email already exists."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User with this email already exists",
            "DUPLICATE_ACCOUNT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Gateway Errors ─────────────────────────────────────────────

class NotFoundError(AccountApiError):
    """Storage row addressed by id does not exist."""
    def __init__(self, resource_type: str, resource_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConstraintViolationError(AccountApiError):
    """Storage-level constraint rejected the write."""
    def __init__(self, constraint: str, context: ErrorContext | None = None):
        super().__init__(
            f"Constraint violated: {constraint}",
            "CONSTRAINT_VIOLATION", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.constraint = constraint


class DatabaseError(AccountApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
