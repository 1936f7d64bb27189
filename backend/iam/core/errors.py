"""Error Hierarchy — typed, categorized exceptions for all IAM failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() is the ErrorEnvelope schema dumped, the same shape respond_error sends
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with IamError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from iam.core.domain_types import ErrorCode
from iam.schemas.envelope import ErrorEnvelope


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    group_id: str | None = None
    user_id: str | None = None
    debug_info: dict[str, Any] | None = None


class IamError(Exception):
    """Base exception for all IAM errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to the error envelope."""
        return ErrorEnvelope(
            code=self.code, message=self.message, details=self.details,
        ).model_dump()


# ─── API Errors ─────────────────────────────────────────────────

class ClientError(IamError):
    """Bad or missing request input."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorCode.API_ERROR.value, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class ServiceError(IamError):
    """Service call failed. Message is fixed per operation; the cause is logged only."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorCode.API_ERROR.value, ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, context, 500,
        )


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(IamError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            ErrorCode.RESOURCE_NOT_FOUND.value, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class MembershipConflictError(IamError):
    """User is already a member of the group."""
    def __init__(
        self, group_id: str, user_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.group_id = group_id
        ctx.user_id = user_id
        super().__init__(
            f"User '{user_id}' is already a member of group '{group_id}'",
            ErrorCode.MEMBERSHIP_CONFLICT.value, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(IamError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            ErrorCode.DATABASE_ERROR.value, ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
