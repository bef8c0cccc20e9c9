"""Budget Enforcement — tests for the per-agent spend guard."""

from dataclasses import dataclass

import pytest

from app.core.enforce_budget import (
    agent_spend, check_agent_budget, validate_contribution_amount,
)
from app.core.errors import BudgetExceededError, LedgerValidationError


@dataclass
class Spend:
    agent_name: str
    amount: float


def test_agent_spend_sums_only_that_agent():
    records = [Spend("alice", 10), Spend("bob", 30), Spend("alice", 5.5)]
    assert agent_spend(records, "alice") == 15.5
    assert agent_spend(records, "bob") == 30
    assert agent_spend(records, "carol") == 0


def test_spending_exactly_the_budget_succeeds():
    assert check_agent_budget(prior_spend=0, amount=50, budget=50) == 0
    assert check_agent_budget(prior_spend=30, amount=20, budget=50) == 0


def test_one_unit_beyond_budget_reports_zero_remaining():
    with pytest.raises(BudgetExceededError) as exc_info:
        check_agent_budget(prior_spend=50, amount=1, budget=50)
    assert exc_info.value.remaining == 0
    assert exc_info.value.context.remaining_budget == 0


def test_rejection_reports_remaining_allowance():
    with pytest.raises(BudgetExceededError) as exc_info:
        check_agent_budget(prior_spend=30, amount=25, budget=50)
    assert exc_info.value.remaining == 20
    assert exc_info.value.budget == 50
    assert "20 points remaining" in exc_info.value.message


def test_remaining_never_negative():
    with pytest.raises(BudgetExceededError) as exc_info:
        check_agent_budget(prior_spend=120, amount=1, budget=100)
    assert exc_info.value.remaining == 0


def test_returns_allowance_left_after_contribution():
    assert check_agent_budget(prior_spend=10, amount=15, budget=100) == 75


@pytest.mark.parametrize("amount", [0, -1, -0.01, float("nan"), float("inf"), True, "5"])
def test_invalid_amounts_rejected(amount):
    with pytest.raises(LedgerValidationError) as exc_info:
        validate_contribution_amount(amount)
    assert exc_info.value.field == "amount"


@pytest.mark.parametrize("amount", [1, 0.5, 100])
def test_positive_amounts_accepted(amount):
    validate_contribution_amount(amount)


def test_fractional_spend_up_to_budget_succeeds():
    prior = agent_spend([Spend("alice", 0.1)], "alice")
    assert check_agent_budget(prior_spend=prior, amount=0.2, budget=0.3) == pytest.approx(0)


def test_reported_remaining_is_accepted_on_retry():
    with pytest.raises(BudgetExceededError) as exc_info:
        check_agent_budget(prior_spend=0.1, amount=0.25, budget=0.3)
    remaining = exc_info.value.remaining
    assert "0.2 points remaining" in exc_info.value.message
    assert check_agent_budget(prior_spend=0.1, amount=remaining, budget=0.3) == pytest.approx(0)
    assert check_agent_budget(prior_spend=0.1, amount=0.2, budget=0.3) == pytest.approx(0)


def test_fractional_overspend_still_rejected():
    with pytest.raises(BudgetExceededError):
        check_agent_budget(prior_spend=0.1, amount=0.2001, budget=0.3)
