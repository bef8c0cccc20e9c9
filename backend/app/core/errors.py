"""Error Hierarchy — typed, categorized exceptions for all ledger failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler
    - BudgetExceededError always carries the remaining allowance as data

Design Decisions:
    - Single hierarchy with MoltFundError base: FastAPI global handler catches all (ADR: uniform error shape)
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
    BUSINESS_RULE = "business_rule"
    INVALID_STATE = "invalid_state"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    round_id: str | None = None
    project_id: str | None = None
    agent_name: str | None = None
    remaining_budget: float | None = None
    debug_info: dict[str, Any] | None = None


class MoltFundError(Exception):
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
                    "round_id": self.context.round_id,
                    "project_id": self.context.project_id,
                    "agent_name": self.context.agent_name,
                    "remaining_budget": self.context.remaining_budget,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class LedgerValidationError(MoltFundError):
    """Required input missing or malformed."""
    def __init__(
        self,
        message: str,
        field: str,
        code: str = "VALIDATION_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(MoltFundError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class RoundNotActiveError(MoltFundError):
    """Funding attempted while the round is upcoming or completed."""
    def __init__(self, status: str, context: ErrorContext | None = None):
        super().__init__(
            f"Round is not active (current status: {status})",
            "ROUND_NOT_ACTIVE", ErrorCategory.INVALID_STATE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.status = status


class BudgetExceededError(MoltFundError):
    """Contribution would push the agent past the round's per-agent budget."""
    def __init__(
        self, remaining: float, budget: float, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.remaining_budget = remaining
        super().__init__(
            f"Budget exceeded. You have {remaining:g} points remaining "
            f"(budget {budget:g} per agent).",
            "BUDGET_EXCEEDED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.remaining = remaining
        self.budget = budget


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(MoltFundError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
