"""Error Hierarchy - typed, categorized exceptions for every recordkit failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Lifecycle errors are raised before any hook or primitive runs
    - NOT_IMPLEMENTED is always a wiring defect, never an expected runtime failure
    - to_dict() produces the envelope outer layers serialize

Design Decisions:
    - Single hierarchy with RecordKitError base: callers can catch one type
    - ErrorContext as dataclass: carries table/record identity without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from recordkit.core.domain_types import RecordId


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    LIFECYCLE = "lifecycle"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    table_name: str | None = None
    record_id: RecordId | None = None
    action: str | None = None
    debug_info: dict[str, Any] | None = None


class RecordKitError(Exception):
    """Base exception for all recordkit errors."""

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
        """Convert to the structured error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "table_name": self.context.table_name,
                    "record_id": self.context.record_id,
                    "action": self.context.action,
                },
            }
        }


# ─── Lifecycle Errors ────────────────────────────────────────────

class RecordNotFoundError(RecordKitError):
    """No stored record matched an identity lookup."""
    def __init__(
        self,
        table_name: str | None = None,
        record_id: RecordId | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.table_name = ctx.table_name or table_name
        ctx.record_id = record_id if ctx.record_id is None else ctx.record_id
        if table_name is None and record_id is None:
            message = "Record not found"
        else:
            message = f"{table_name or 'record'} record '{record_id}' not found"
        super().__init__(
            message, "RECORD_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx,
        )
        self.table_name = table_name
        self.record_id = record_id


class NotImplementedOperationError(RecordKitError):
    """A required storage primitive was never supplied."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"{operation} not implemented",
            "NOT_IMPLEMENTED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation


class UnsavedRecordOperationError(RecordKitError):
    """fetch/update/remove attempted on a record that has no id."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.action = action
        super().__init__(
            f"Can not {action} unsaved record",
            "UNSAVED_RECORD", ErrorCategory.LIFECYCLE,
            ErrorSeverity.ERROR, ctx,
        )
        self.action = action


class RecordValidationError(RecordKitError):
    """A validate hook rejected the record's fields."""
    def __init__(
        self,
        message: str,
        errors: list[dict] | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.debug_info = {"errors": errors or []}
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx,
        )
        self.errors = errors or []


# ─── Infrastructure Errors ───────────────────────────────────────

class DatabaseError(RecordKitError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation
