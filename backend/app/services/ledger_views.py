"""Ledger Views — assemble API response shapes from records and allocations.

Invariants:
    - Round status in every view is derived from `now`, never read from the cache column
    - Views are built from already-loaded records (no IO here)
"""

from datetime import datetime
from typing import Iterable, Sequence
from uuid import UUID

from app.core.quadratic_funding import ProjectAllocation, summarize_project
from app.core.repository_protocols import FundLike, ProjectLike, RoundLike
from app.core.round_status import derive_round_status
from app.schemas.fund import FundResponse
from app.schemas.project import ProjectDetail, ProjectResponse, ProjectSummary
from app.schemas.round import RoundProject, RoundResponse


def round_response(round_: RoundLike, now: datetime) -> RoundResponse:
    return RoundResponse(
        id=round_.id,
        name=round_.name,
        start_date=round_.start_date,
        end_date=round_.end_date,
        total_pool=round_.total_pool,
        funding_budget_per_agent=round_.funding_budget_per_agent,
        status=derive_round_status(now, round_.start_date, round_.end_date),
        created_at=round_.created_at,
    )


def project_response(project: ProjectLike) -> ProjectResponse:
    return ProjectResponse(
        id=project.id,
        title=project.title,
        description=project.description,
        repo_url=project.repo_url,
        category=project.category,
        nominator_agent=project.nominator_agent,
        round_id=project.round_id,
        created_at=project.created_at,
    )


def group_funds_by_project(
    funds: Iterable[FundLike],
) -> dict[UUID, list[FundLike]]:
    grouped: dict[UUID, list[FundLike]] = {}
    for fund in funds:
        grouped.setdefault(fund.project_id, []).append(fund)
    return grouped


def project_summary(
    project: ProjectLike, funds: Sequence[FundLike],
) -> ProjectSummary:
    allocation = summarize_project(project.id, [f.amount for f in funds])
    return ProjectSummary(
        **project_response(project).model_dump(),
        total_contributions=allocation.total_contributions,
        quadratic_weight=allocation.quadratic_weight,
        contributors_count=allocation.contributors_count,
    )


def project_detail(
    project: ProjectLike, funds: Sequence[FundLike],
) -> ProjectDetail:
    return ProjectDetail(
        **project_summary(project, funds).model_dump(),
        contributions=[FundResponse.model_validate(f) for f in funds],
    )


def round_project(
    project: ProjectLike,
    allocation: ProjectAllocation,
    funds: Sequence[FundLike],
) -> RoundProject:
    return RoundProject(
        **project_response(project).model_dump(),
        total_contributions=allocation.total_contributions,
        quadratic_weight=allocation.quadratic_weight,
        contributors_count=allocation.contributors_count,
        contributions=[FundResponse.model_validate(f) for f in funds],
        matching_amount=allocation.matching_amount,
        total_funding=allocation.total_funding,
    )
