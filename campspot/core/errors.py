"""Error Hierarchy: typed, categorized exceptions for every Campspot failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) carry a human-readable message
    - Server errors (500-level) carry a generic message; detail stays in logs
    - to_response() produces the REST envelope used by every error response

Design Decisions:
    - Single hierarchy with CampspotError base: one global handler renders all of them
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class CampspotError(Exception):
    """Base exception for all Campspot errors."""

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
        if self.context.resource:
            body["context"] = {
                "resource": self.context.resource,
                "resource_id": self.context.resource_id,
            }
        return {"error": body}


# ─── Client Errors (400-level) ──────────────────────────────────

class MissingFieldsError(CampspotError):
    """One or more required fields were not supplied."""
    def __init__(
        self, fields: list[str], message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message or f"Missing required fields: {', '.join(fields)}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.fields = fields


class EmailAlreadyRegisteredError(CampspotError):
    """Registration attempted with an email that already has an account."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            "Email is already registered",
            "EMAIL_ALREADY_REGISTERED", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400,
        )
        self.email = email


class InvalidCredentialsError(CampspotError):
    """Login failed. Never says whether the email or the password was wrong."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid email or password",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(CampspotError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class DatabaseError(CampspotError):
    """Database operation failed. The driver message is kept out of the response."""
    def __init__(self, operation: str = "query", context: ErrorContext | None = None):
        super().__init__(
            "A database error occurred while processing the request",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class InternalError(CampspotError):
    """Anything not covered by a more specific error."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An unexpected error occurred",
            "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
