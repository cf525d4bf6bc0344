"""Error Hierarchy — typed, categorized exceptions for all ledger failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Business-rule violations carry a FailureKind and are converted to Failure by the unit of work
    - Transient store errors (DatabaseError, StoreTimeoutError) propagate unchanged, never retried
    - LedgerInvariantError is fatal for the request and surfaces as an opaque 500
    - to_response() produces the REST envelope; no internal details in user-facing messages
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from merchcoin.core.domain_types import FailureKind


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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    account_id: int | None = None
    username: str | None = None
    item_name: str | None = None
    debug_info: dict[str, Any] | None = None


class LedgerError(Exception):
    """Base exception for all ledger errors."""

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


# ─── Business Rules (returned as Failure) ───────────────────────

class BusinessRuleViolation(LedgerError):
    """A ledger rule rejected the operation. Aborts the scope; no retry."""

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        category: ErrorCategory = ErrorCategory.BUSINESS_RULE,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, kind.name, category, ErrorSeverity.WARNING, context, 400,
        )
        self.kind = kind


class ItemNotFoundError(BusinessRuleViolation):
    """Catalog has no item with the requested name."""
    def __init__(self, item_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.item_name = item_name
        super().__init__(
            FailureKind.ITEM_NOT_FOUND, "item not found",
            ErrorCategory.RESOURCE_NOT_FOUND, ctx,
        )
        self.item_name = item_name


class InsufficientBalanceError(BusinessRuleViolation):
    """Debit would drive the balance below zero."""
    def __init__(self, account_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.account_id = account_id
        super().__init__(
            FailureKind.INSUFFICIENT_BALANCE, "insufficient balance", context=ctx,
        )
        self.account_id = account_id


class RecipientNotFoundError(BusinessRuleViolation):
    """Transfer recipient username does not resolve to an account."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.username = username
        super().__init__(
            FailureKind.RECIPIENT_NOT_FOUND, "recipient not found",
            ErrorCategory.RESOURCE_NOT_FOUND, ctx,
        )
        self.username = username


class SelfTransferError(BusinessRuleViolation):
    """Sender and recipient resolve to the same account."""
    def __init__(self, account_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.account_id = account_id
        super().__init__(
            FailureKind.SELF_TRANSFER, "cannot send coins to yourself", context=ctx,
        )
        self.account_id = account_id


# ─── Caller Contract (400/401-level) ────────────────────────────

class InvalidAmountError(LedgerError):
    """Amount is not a strictly positive integer."""
    def __init__(self, amount: object, context: ErrorContext | None = None):
        super().__init__(
            f"amount must be a positive integer, got {amount!r}",
            "INVALID_AMOUNT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.amount = amount


class AuthenticationError(LedgerError):
    """Credentials or bearer token rejected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure (500-level) ─────────────────────────────────

class DatabaseError(LedgerError):
    """Store operation failed. Transient; propagated to the caller unchanged."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
        code: str = "DATABASE_ERROR",
        category: ErrorCategory = ErrorCategory.DATABASE,
    ):
        super().__init__(
            f"Database {operation} failed: {message}",
            code, category, ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class StoreTimeoutError(DatabaseError):
    """Connection acquisition, a statement, or the whole scope exceeded its bound."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            message, operation, context,
            code="STORE_TIMEOUT", category=ErrorCategory.TIMEOUT,
        )


class LedgerInvariantError(LedgerError):
    """Sequencing assumption broken (e.g. conditional update hit a missing row)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "LEDGER_INVARIANT_VIOLATED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )

    def to_response(self) -> dict:
        """Opaque envelope — the detail goes to the log, not the client."""
        response = super().to_response()
        response["error"]["code"] = "INTERNAL_ERROR"
        response["error"]["message"] = "An unexpected error occurred"
        return response
