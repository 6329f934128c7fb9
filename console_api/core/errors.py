"""Error Hierarchy — typed, categorized exceptions for the endpoint kernel.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() produces the REST envelope used by dispatcher and global handlers
    - No internal details leaked in user-facing messages
    - Parameter validation and disabled services are NOT exceptions:
      they are answered in place (400 / 503) by the endpoint base

Design Decisions:
    - Single hierarchy with ConsoleError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    METHOD_NOT_ALLOWED = "method_not_allowed"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    service: str | None = None
    operation: str | None = None
    path: str | None = None
    debug_info: dict[str, Any] | None = None


class ConsoleError(Exception):
    """Base exception for all console endpoint errors."""

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
                    "service": self.context.service,
                    "operation": self.context.operation,
                    "path": self.context.path,
                },
            }
        }


# ─── Dispatch Errors (400-level) ────────────────────────────────

class OperationNotFoundError(ConsoleError):
    """No operation registered under the requested selector."""
    def __init__(self, operation: str | None, context: ErrorContext | None = None):
        super().__init__(
            f"Operation '{operation or ''}' not found",
            "OPERATION_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.operation = operation


class OperationMethodNotAllowedError(ConsoleError):
    """Operation exists, but not for the requested HTTP method."""
    def __init__(
        self, operation: str, method: str, allowed_methods: list[str],
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Operation '{operation}' does not support {method}",
            "METHOD_NOT_ALLOWED", ErrorCategory.METHOD_NOT_ALLOWED,
            ErrorSeverity.WARNING, context, 405,
        )
        self.operation = operation
        self.allowed_methods = allowed_methods


# ─── Encoding Errors (500-level) ────────────────────────────────

class EncodingCycleError(ConsoleError):
    """A container was reached again while it was still being encoded."""
    def __init__(self, type_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cyclic structure detected while encoding {type_name}",
            "ENCODING_CYCLE", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.type_name = type_name


class EncodingLimitError(ConsoleError):
    """A sequence yielded more items than the encoder accepts."""
    def __init__(self, max_items: int, context: ErrorContext | None = None):
        super().__init__(
            f"Sequence exceeds the encoder limit of {max_items} items",
            "ENCODING_LIMIT_EXCEEDED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.max_items = max_items
