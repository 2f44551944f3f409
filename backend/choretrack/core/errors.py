"""Error Hierarchy — typed, categorized exceptions for all choretrack failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
      and a message_class the presentation layer maps to a distinct message
    - Domain errors (400-level) are reported to the caller, never retried here
    - TransportError wraps store/network failures without interpreting the cause
    - to_response() produces REST envelope; to_sse_event() produces SSE envelope

Design Decisions:
    - Single hierarchy with ChoreTrackError base: FastAPI global handler catches all
    - ErrorContext as dataclass: chore/household/version details for logs and clients
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from choretrack.core.domain_types import MessageClass


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    TRANSPORT = "transport"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    chore_id: str | None = None
    household_id: str | None = None
    expected_version: int | None = None
    current_version: int | None = None
    debug_info: dict[str, Any] | None = None


class ChoreTrackError(Exception):
    """Base exception for all choretrack errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        message_class: MessageClass,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.message_class = message_class
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
                "message_class": self.message_class.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "chore_id": self.context.chore_id,
                    "household_id": self.context.household_id,
                    "expected_version": self.context.expected_version,
                    "current_version": self.context.current_version,
                },
            }
        }

    def to_sse_event(self) -> dict:
        """Convert to SSE error event."""
        return {
            "type": "error",
            "data": {
                "code": self.code,
                "message": self.message,
                "message_class": self.message_class.value,
                "severity": self.severity.value,
                "recoverable": self.message_class in (
                    MessageClass.STALE_VIEW, MessageClass.TRANSPORT,
                ),
            },
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ChoreValidationError(ChoreTrackError):
    """Chore input rejected before any store write."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            MessageClass.FIX_INPUT, ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class VersionConflictError(ChoreTrackError):
    """Expected version was stale at write time. Caller re-reads and decides."""
    def __init__(
        self,
        chore_id: str,
        expected_version: int,
        current_version: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.chore_id = chore_id
        ctx.expected_version = expected_version
        ctx.current_version = current_version
        super().__init__(
            f"Chore '{chore_id}' changed since it was read "
            f"(expected version {expected_version}). Refresh and try again.",
            "VERSION_CONFLICT", ErrorCategory.CONFLICT,
            MessageClass.STALE_VIEW, ErrorSeverity.WARNING, ctx, 409,
        )
        self.chore_id = chore_id
        self.expected_version = expected_version
        self.current_version = current_version


class NotUndoableError(ChoreTrackError):
    """undo requested but the chore has no active completion record."""
    def __init__(self, chore_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.chore_id = chore_id
        super().__init__(
            f"Chore '{chore_id}' has no completion to undo.",
            "NOT_UNDOABLE", ErrorCategory.BUSINESS_RULE,
            MessageClass.NO_LONGER_APPLICABLE, ErrorSeverity.WARNING, ctx, 409,
        )
        self.chore_id = chore_id


class ChoreNotFoundError(ChoreTrackError):
    """Target chore no longer exists in the store."""
    def __init__(self, chore_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.chore_id = chore_id
        super().__init__(
            f"Chore '{chore_id}' not found",
            "CHORE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            MessageClass.NO_LONGER_APPLICABLE, ErrorSeverity.ERROR, ctx, 404,
        )
        self.chore_id = chore_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class TransportError(ChoreTrackError):
    """Store or network operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "TRANSPORT_ERROR", ErrorCategory.TRANSPORT,
            MessageClass.TRANSPORT, ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
