"""Error Hierarchy — typed, categorized exceptions for all ledger failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller errors are 400-level; conflicts with recorded state are 409
    - to_response() produces the REST envelope used by the API handlers
    - Missing account/network on record() is NOT an error (defined no-op)

Design Decisions:
    - Single hierarchy with LedgerError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - TransactionNotFoundError is raised only at the HTTP lookup boundary;
      the ledger itself treats unknown confirmations as soft (log + False)
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
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    network_id: int | None = None
    tx_hash: str | None = None
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
                "context": {
                    "network_id": self.context.network_id,
                    "tx_hash": self.context.tx_hash,
                },
            }
        }


# ─── Submission Errors (400-level) ──────────────────────────────

class NoHashFoundError(LedgerError):
    """Submission response carried no transaction hash."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No transaction hash found.",
            "NO_HASH_FOUND", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidSubmissionError(LedgerError):
    """record() called with an empty or duplicate hash."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid submission: {reason}",
            "INVALID_SUBMISSION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.reason = reason


# ─── State Conflicts ────────────────────────────────────────────

class AlreadyConfirmedError(LedgerError):
    """A different receipt was applied to an already-confirmed record."""
    def __init__(self, tx_hash: str, context: ErrorContext | None = None):
        super().__init__(
            f"Transaction '{tx_hash}' is already confirmed with a different receipt",
            "ALREADY_CONFIRMED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.tx_hash = tx_hash


class TransactionNotFoundError(LedgerError):
    """No record exists for the requested (network, hash)."""
    def __init__(
        self, network_id: int, tx_hash: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Transaction '{tx_hash}' not found on network {network_id}",
            "TRANSACTION_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.network_id = network_id
        self.tx_hash = tx_hash
