"""Funding Handler — record a contribution under the round's rules.

Invariants:
    - Checks run in order: amount/agent valid → project exists → round exists →
      round active → agent budget; the first failure wins and nothing is written
    - Fund.round_id copied from the project, never from caller input
    - Read prior spend → check → append runs under one lock per (round, agent)

Design Decisions:
    - _budget_locks as module-level WeakValueDictionary of asyncio.Lock: closes the
      read-then-write race inside one process (ADR: single-process uvicorn). An entry
      lives only while some request holds or awaits its lock. Multi-worker deployments
      still race; a DB-level guard would be needed there.
"""

import asyncio
import logging
import uuid
import weakref
from datetime import datetime
from typing import Callable
from uuid import UUID

from app.core.domain_types import ProjectId
from app.core.enforce_budget import (
    agent_spend, check_agent_budget, validate_contribution_amount,
)
from app.core.errors import (
    BudgetExceededError, ErrorContext, LedgerValidationError,
    ResourceNotFoundError,
)
from app.core.repository_protocols import (
    FundRepository, ProjectRepository, RoundRepository,
)
from app.core.round_status import ensure_round_active
from app.models.fund import Fund
from app.schemas.fund import FundCreate, FundResponse
from app.services.handle_rounds import utc_now

logger = logging.getLogger(__name__)

_budget_locks: weakref.WeakValueDictionary[tuple[UUID, str], asyncio.Lock] = (
    weakref.WeakValueDictionary()
)


def budget_lock(round_id: UUID, agent_name: str) -> asyncio.Lock:
    """Lock guarding one agent's spend tally within one round.

    Callers must keep the returned lock referenced while using it.
    """
    key = (round_id, agent_name)
    lock = _budget_locks.get(key)
    if lock is None:
        lock = asyncio.Lock()
        _budget_locks[key] = lock
    return lock


class FundingHandlers:
    """Write path for contributions."""

    def __init__(
        self,
        rounds: RoundRepository,
        projects: ProjectRepository,
        funds: FundRepository,
        now: Callable[[], datetime] = utc_now,
    ):
        self.rounds = rounds
        self.projects = projects
        self.funds = funds
        self.now = now

    async def fund_project(
        self, project_id: ProjectId, body: FundCreate,
    ) -> FundResponse:
        if not body.agent_name:
            raise LedgerValidationError("agent_name is required", "agent_name")
        validate_contribution_amount(body.amount)

        project = await self.projects.get(project_id)
        if not project:
            raise ResourceNotFoundError(
                "Project", str(project_id),
                ErrorContext(project_id=str(project_id)),
            )
        ctx = ErrorContext(
            round_id=str(project.round_id),
            project_id=str(project.id),
            agent_name=body.agent_name,
        )
        round_ = await self.rounds.get(project.round_id)
        if not round_:
            raise ResourceNotFoundError("Round", str(project.round_id), ctx)

        ensure_round_active(
            self.now(), round_.start_date, round_.end_date, ctx,
        )

        async with budget_lock(round_.id, body.agent_name):
            prior = agent_spend(
                await self.funds.list_by_agent(round_.id, body.agent_name),
                body.agent_name,
            )
            try:
                remaining = check_agent_budget(
                    prior, body.amount, round_.funding_budget_per_agent, ctx,
                )
            except BudgetExceededError as e:
                logger.warning(
                    f"Budget exceeded for {body.agent_name}",
                    extra={
                        "round_id": ctx.round_id,
                        "agent_name": body.agent_name,
                        "amount": body.amount,
                        "remaining_budget": e.remaining,
                    },
                )
                raise

            fund = Fund(
                id=uuid.uuid4(),
                project_id=project.id,
                round_id=round_.id,
                agent_name=body.agent_name,
                amount=body.amount,
                created_at=self.now(),
            )
            fund = await self.funds.append(fund)

        logger.info(
            f"Contribution recorded: {body.amount:g} from {body.agent_name}",
            extra={
                "round_id": ctx.round_id,
                "project_id": ctx.project_id,
                "agent_name": body.agent_name,
                "amount": body.amount,
                "remaining_budget": remaining,
            },
        )
        return FundResponse.model_validate(fund)
