"""Error Hierarchy — typed, categorized exceptions for all SMP directory failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) carry the offending identifier string in the message
    - Participant mismatches carry both compared identifiers
    - to_response() produces the REST error envelope

Design Decisions:
    - Single hierarchy with SMPServerError base: one FastAPI handler catches all
    - ErrorContext as dataclass: operation and request URI travel with the error,
      not with the logger
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
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHORIZATION = "authorization"
    CONFLICT = "conflict"
    STORE = "store"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Request context attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    service_group_id: str | None = None
    request_uri: str | None = None
    debug_info: dict[str, Any] | None = None


class SMPServerError(Exception):
    """Base exception for all SMP directory errors."""

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
                "context": {
                    "operation": self.context.operation,
                    "service_group_id": self.context.service_group_id,
                    "request_uri": self.context.request_uri,
                },
            }
        }


# ─── Bad Request (400) ──────────────────────────────────────────

class BadRequestError(SMPServerError):
    """Malformed or inconsistent client input."""
    def __init__(
        self, message: str, code: str = "BAD_REQUEST",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidIdentifierError(BadRequestError):
    """Service group identifier string could not be parsed."""
    def __init__(self, raw_id: str | None, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to parse serviceGroup '{raw_id}'",
            "INVALID_IDENTIFIER", context,
        )
        self.raw_id = raw_id


class ParticipantMismatchError(BadRequestError):
    """URL identifier and payload identifier do not match."""
    def __init__(
        self, url_identifier: str, payload_identifier: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Participant Inconsistency. The URL points to {url_identifier}"
            f" whereas the BusinessCard contains {payload_identifier}",
            "PARTICIPANT_INCONSISTENCY", context,
        )
        self.url_identifier = url_identifier
        self.payload_identifier = payload_identifier


class FeatureNotSupportedError(BadRequestError):
    """Business card support is disabled for this deployment."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "This SMP server does not support the BusinessCard API",
            "FEATURE_NOT_SUPPORTED", context,
        )


# ─── Not Found (404) ────────────────────────────────────────────

class NotFoundError(SMPServerError):
    """Referenced resource does not exist."""
    def __init__(
        self, message: str, code: str = "NOT_FOUND",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class ServiceGroupNotFoundError(NotFoundError):
    def __init__(self, service_group_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown serviceGroup '{service_group_id}'",
            "UNKNOWN_SERVICE_GROUP", context,
        )
        self.service_group_id = service_group_id


class BusinessCardNotFoundError(NotFoundError):
    def __init__(self, service_group_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"No BusinessCard assigned to serviceGroup '{service_group_id}'",
            "BUSINESS_CARD_NOT_FOUND", context,
        )
        self.service_group_id = service_group_id


# ─── Authorization (401/403) ────────────────────────────────────

class AuthorizationError(SMPServerError):
    """Credential validation or ownership verification failed."""
    def __init__(
        self, message: str, code: str, http_status: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, http_status,
        )


class UnauthorizedError(AuthorizationError):
    """Missing or invalid credentials."""
    def __init__(
        self, message: str, code: str = "UNAUTHORIZED",
        context: ErrorContext | None = None,
    ):
        super().__init__(message, code, 401, context)


class UnknownUserError(UnauthorizedError):
    def __init__(self, user_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"No user '{user_name}' is registered", "UNKNOWN_USER", context,
        )
        self.user_name = user_name


class OwnershipError(AuthorizationError):
    """Authenticated user does not own the service group."""
    def __init__(
        self, user_name: str, service_group_id: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"User '{user_name}' does not own serviceGroup '{service_group_id}'",
            "NOT_OWNER", 403, context,
        )
        self.user_name = user_name
        self.service_group_id = service_group_id


# ─── Conflict (409) ─────────────────────────────────────────────

class ServiceGroupExistsError(SMPServerError):
    def __init__(self, service_group_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"serviceGroup '{service_group_id}' already exists",
            "SERVICE_GROUP_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.service_group_id = service_group_id


# ─── Server-side (500-level) ────────────────────────────────────

class StoreFailureError(SMPServerError):
    """Persistence layer reported a logical failure (no exception)."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to store business card ({operation})",
            "STORE_FAILURE", ErrorCategory.STORE,
            ErrorSeverity.ERROR, context, 500,
        )
        self.operation = operation


class DatabaseError(SMPServerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class InitializationError(SMPServerError):
    """A manager could not be constructed at startup."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INITIALIZATION_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
