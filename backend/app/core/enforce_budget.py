"""Budget Enforcement — write-time guard on an agent's spend within a round.

Invariants:
    - Accept iff prior_spend + amount <= budget (spending exactly the budget is allowed)
    - Comparison tolerates float rounding up to BUDGET_TOLERANCE: 0.1 + 0.2 fits a budget of 0.3
    - Rejection always reports remaining allowance = budget - prior_spend (never negative)
    - Pure: callers supply the prior contributions, this module never reads storage

Design Decisions:
    - Raises typed errors instead of returning descriptors: the write path has
      nothing useful to do with a rejected contribution except surface it
"""

import math
from typing import Iterable, Protocol

from app.core.errors import (
    BudgetExceededError, ErrorContext, LedgerValidationError,
)

BUDGET_TOLERANCE = 1e-9


class AgentContributionLike(Protocol):
    agent_name: str
    amount: float


def validate_contribution_amount(amount: float) -> None:
    """Amount must be a finite number strictly greater than zero."""
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise LedgerValidationError("amount must be a number", "amount")
    if not math.isfinite(amount) or amount <= 0:
        raise LedgerValidationError("amount must be greater than 0", "amount")


def agent_spend(
    contributions: Iterable[AgentContributionLike], agent_name: str,
) -> float:
    """Total already contributed by agent_name across the given records."""
    return sum(c.amount for c in contributions if c.agent_name == agent_name)


def check_agent_budget(
    prior_spend: float,
    amount: float,
    budget: float,
    context: ErrorContext | None = None,
) -> float:
    """Raise BudgetExceededError if amount does not fit. Returns allowance left after it."""
    if prior_spend + amount - budget > BUDGET_TOLERANCE:
        raise BudgetExceededError(
            remaining=max(budget - prior_spend, 0.0),
            budget=budget,
            context=context,
        )
    return max(budget - prior_spend - amount, 0.0)
