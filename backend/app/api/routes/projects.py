"""Project Routes — nominate, browse, inspect and fund projects.

Invariants:
    - Routes contain no business logic: validation by Pydantic, rules in services/core
    - Domain errors propagate to the global MoltFundError handler
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import (
    get_funding_handlers, get_project_handlers, project_path_id,
)
from app.core.domain_types import ProjectId, RoundId
from app.schemas.fund import FundCreate, FundResponse
from app.schemas.project import (
    ProjectCreate, ProjectDetail, ProjectResponse, ProjectSummary,
)
from app.services.handle_funding import FundingHandlers
from app.services.handle_projects import ProjectHandlers

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.post(
    "", response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectCreate,
    handlers: ProjectHandlers = Depends(get_project_handlers),
):
    """Nominate a project into an existing round."""
    return await handlers.create_project(body)


@router.get("", response_model=list[ProjectSummary])
async def list_projects(
    round_id: UUID | None = Query(None),
    handlers: ProjectHandlers = Depends(get_project_handlers),
):
    """Browse projects with contribution totals and quadratic weight."""
    return await handlers.list_projects(
        RoundId(round_id) if round_id else None,
    )


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project(
    project_id: ProjectId = Depends(project_path_id),
    handlers: ProjectHandlers = Depends(get_project_handlers),
):
    return await handlers.get_project_detail(project_id)


@router.post(
    "/{project_id}/fund", response_model=FundResponse,
    status_code=status.HTTP_201_CREATED,
)
async def fund_project(
    body: FundCreate,
    project_id: ProjectId = Depends(project_path_id),
    handlers: FundingHandlers = Depends(get_funding_handlers),
):
    """Contribute funding points to a project in an active round."""
    return await handlers.fund_project(project_id, body)
