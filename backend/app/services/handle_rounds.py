"""Round Handlers — create, list and detail funding rounds.

Invariants:
    - Round status recomputed on every read; stale cache entries rewritten on list
    - Round detail allocation runs over this round's projects and funds only
    - get_round_detail raises ResourceNotFoundError for unknown ids

Design Decisions:
    - Clock injected (`now` callable): status boundaries testable without sleeping
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from app.core.domain_types import RoundId, RoundStatus
from app.core.errors import ResourceNotFoundError, ErrorContext
from app.core.quadratic_funding import allocate_matching
from app.core.repository_protocols import (
    FundRepository, ProjectRepository, RoundRepository,
)
from app.core.round_status import derive_round_status
from app.models.funding_round import FundingRound
from app.schemas.round import RoundCreate, RoundDetail, RoundResponse
from app.services.ledger_views import (
    group_funds_by_project, round_project, round_response,
)

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RoundHandlers:
    """Round lifecycle and allocation read-out."""

    def __init__(
        self,
        rounds: RoundRepository,
        projects: ProjectRepository,
        funds: FundRepository,
        default_agent_budget: float = 100.0,
        now: Callable[[], datetime] = utc_now,
    ):
        self.rounds = rounds
        self.projects = projects
        self.funds = funds
        self.default_agent_budget = default_agent_budget
        self.now = now

    async def create_round(self, body: RoundCreate) -> RoundResponse:
        now = self.now()
        budget = body.funding_budget_per_agent or self.default_agent_budget
        round_ = FundingRound(
            id=uuid.uuid4(),
            name=body.name,
            start_date=body.start_date,
            end_date=body.end_date,
            total_pool=body.total_pool,
            funding_budget_per_agent=budget,
            status=derive_round_status(now, body.start_date, body.end_date).value,
            created_at=now,
        )
        round_ = await self.rounds.append(round_)
        logger.info(
            f"Round created: {round_.name}",
            extra={"round_id": str(round_.id)},
        )
        return round_response(round_, now)

    async def list_rounds(
        self, status: RoundStatus | None = None,
    ) -> list[RoundResponse]:
        now = self.now()
        rounds = await self.rounds.list_all()
        views = [round_response(r, now) for r in rounds]
        stale = {
            r.id: v.status
            for r, v in zip(rounds, views)
            if r.status != v.status.value
        }
        if stale:
            await self.rounds.cache_statuses(stale)
        if status is not None:
            views = [v for v in views if v.status == status]
        return views

    async def get_round_detail(self, round_id: RoundId) -> RoundDetail:
        round_ = await self.rounds.get(round_id)
        if not round_:
            raise ResourceNotFoundError(
                "Round", str(round_id),
                ErrorContext(round_id=str(round_id)),
            )
        projects = await self.projects.list_all(round_id=round_.id)
        funds = await self.funds.list_by_round(round_.id)

        by_id = {p.id: p for p in projects}
        funds_by_project = group_funds_by_project(funds)
        allocations = allocate_matching(
            round_.total_pool, [p.id for p in projects], funds,
        )
        return RoundDetail(
            **round_response(round_, self.now()).model_dump(),
            projects=[
                round_project(
                    by_id[a.project_id], a,
                    funds_by_project.get(a.project_id, []),
                )
                for a in allocations
            ],
        )
