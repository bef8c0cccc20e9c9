"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - append() returns only after the record is durably persisted

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these records are never async themselves —
      the shell orchestrates the async calls around the pure logic
    - Indexed lookups (by round / project / agent) instead of full-collection scans
"""

from datetime import datetime
from typing import Protocol, Sequence

from app.core.domain_types import RoundId, ProjectId, FundId, RoundStatus


class RoundLike(Protocol):
    """Structural contract for a funding round record."""
    id: RoundId
    name: str
    start_date: datetime
    end_date: datetime
    total_pool: float
    funding_budget_per_agent: float
    status: str
    created_at: datetime


class ProjectLike(Protocol):
    """Structural contract for a nominated project record."""
    id: ProjectId
    title: str
    description: str
    repo_url: str
    category: str
    nominator_agent: str
    round_id: RoundId
    created_at: datetime


class FundLike(Protocol):
    """Structural contract for a single contribution record."""
    id: FundId
    project_id: ProjectId
    round_id: RoundId
    agent_name: str
    amount: float
    created_at: datetime


class RoundRepository(Protocol):
    """Contract for round persistence — implemented by shell."""
    async def append(self, round_: RoundLike) -> RoundLike: ...
    async def get(self, round_id: RoundId) -> RoundLike | None: ...
    async def list_all(self) -> Sequence[RoundLike]: ...
    async def cache_statuses(
        self, statuses: dict[RoundId, RoundStatus],
    ) -> None: ...


class ProjectRepository(Protocol):
    """Contract for project persistence — implemented by shell."""
    async def append(self, project: ProjectLike) -> ProjectLike: ...
    async def get(self, project_id: ProjectId) -> ProjectLike | None: ...
    async def list_all(
        self, round_id: RoundId | None = None,
    ) -> Sequence[ProjectLike]: ...


class FundRepository(Protocol):
    """Contract for contribution persistence — implemented by shell."""
    async def append(self, fund: FundLike) -> FundLike: ...
    async def list_all(self) -> Sequence[FundLike]: ...
    async def list_by_round(self, round_id: RoundId) -> Sequence[FundLike]: ...
    async def list_by_project(
        self, project_id: ProjectId,
    ) -> Sequence[FundLike]: ...
    async def list_by_agent(
        self, round_id: RoundId, agent_name: str,
    ) -> Sequence[FundLike]: ...
