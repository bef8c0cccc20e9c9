"""SQLAlchemy Repositories — Record Store for rounds, projects and funds.

Invariants:
    - append() commits before returning: a returned record is durable
    - Reads are indexed queries (by id, round, project, agent), never full rewrites
    - Ordering is created_at ascending so engine ties stay deterministic

Design Decisions:
    - One small class per table over a generic repository: each exposes only the
      lookups the services need
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import RoundId, ProjectId, RoundStatus
from app.models.funding_round import FundingRound
from app.models.project import Project
from app.models.fund import Fund


async def _persist(db: AsyncSession, record):
    db.add(record)
    await db.commit()
    await db.refresh(record)
    return record


class SqlRoundRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def append(self, round_: FundingRound) -> FundingRound:
        return await _persist(self.db, round_)

    async def get(self, round_id: RoundId) -> FundingRound | None:
        result = await self.db.execute(
            select(FundingRound).where(FundingRound.id == round_id),
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> Sequence[FundingRound]:
        result = await self.db.execute(
            select(FundingRound).order_by(FundingRound.created_at),
        )
        return result.scalars().all()

    async def cache_statuses(
        self, statuses: dict[RoundId, RoundStatus],
    ) -> None:
        """Overwrite the advisory status column for rounds whose cache is stale."""
        if not statuses:
            return
        result = await self.db.execute(
            select(FundingRound).where(FundingRound.id.in_(list(statuses))),
        )
        for round_ in result.scalars().all():
            round_.status = statuses[round_.id].value
        await self.db.commit()


class SqlProjectRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def append(self, project: Project) -> Project:
        return await _persist(self.db, project)

    async def get(self, project_id: ProjectId) -> Project | None:
        result = await self.db.execute(
            select(Project).where(Project.id == project_id),
        )
        return result.scalar_one_or_none()

    async def list_all(
        self, round_id: RoundId | None = None,
    ) -> Sequence[Project]:
        query = select(Project).order_by(Project.created_at)
        if round_id is not None:
            query = query.where(Project.round_id == round_id)
        result = await self.db.execute(query)
        return result.scalars().all()


class SqlFundRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def append(self, fund: Fund) -> Fund:
        return await _persist(self.db, fund)

    async def list_all(self) -> Sequence[Fund]:
        result = await self.db.execute(select(Fund).order_by(Fund.created_at))
        return result.scalars().all()

    async def list_by_round(self, round_id: RoundId) -> Sequence[Fund]:
        result = await self.db.execute(
            select(Fund)
            .where(Fund.round_id == round_id)
            .order_by(Fund.created_at),
        )
        return result.scalars().all()

    async def list_by_project(self, project_id: ProjectId) -> Sequence[Fund]:
        result = await self.db.execute(
            select(Fund)
            .where(Fund.project_id == project_id)
            .order_by(Fund.created_at),
        )
        return result.scalars().all()

    async def list_by_agent(
        self, round_id: RoundId, agent_name: str,
    ) -> Sequence[Fund]:
        result = await self.db.execute(
            select(Fund)
            .where(Fund.round_id == round_id)
            .where(Fund.agent_name == agent_name),
        )
        return result.scalars().all()
