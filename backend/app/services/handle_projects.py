"""Project Handlers — nominate, list and detail projects.

Invariants:
    - A project can only be nominated into an existing round
    - Unknown round on nomination is a validation failure (INVALID_REFERENCE, 400),
      unknown project on read is ResourceNotFoundError (404)
    - List/detail weights are per-project only (no matching: that needs the whole round)
"""

import logging
import uuid
from datetime import datetime
from typing import Callable

from app.core.domain_types import DEFAULT_CATEGORY, ProjectId, RoundId
from app.core.errors import (
    ErrorContext, LedgerValidationError, ResourceNotFoundError,
)
from app.core.repository_protocols import (
    FundRepository, ProjectRepository, RoundRepository,
)
from app.models.project import Project
from app.schemas.project import (
    ProjectCreate, ProjectDetail, ProjectResponse, ProjectSummary,
)
from app.services.handle_rounds import utc_now
from app.services.ledger_views import (
    group_funds_by_project, project_detail, project_response, project_summary,
)

logger = logging.getLogger(__name__)


class ProjectHandlers:
    """Project nomination and read-side enrichment."""

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

    async def create_project(self, body: ProjectCreate) -> ProjectResponse:
        round_ = await self.rounds.get(RoundId(body.round_id))
        if not round_:
            raise LedgerValidationError(
                f"Round '{body.round_id}' not found",
                "round_id",
                code="INVALID_REFERENCE",
                context=ErrorContext(round_id=str(body.round_id)),
            )
        project = Project(
            id=uuid.uuid4(),
            title=body.title,
            description=body.description,
            repo_url=body.repo_url or "",
            category=body.category or DEFAULT_CATEGORY,
            nominator_agent=body.nominator_agent,
            round_id=round_.id,
            created_at=self.now(),
        )
        project = await self.projects.append(project)
        logger.info(
            f"Project nominated: {project.title}",
            extra={
                "round_id": str(round_.id),
                "project_id": str(project.id),
                "agent_name": project.nominator_agent,
            },
        )
        return project_response(project)

    async def list_projects(
        self, round_id: RoundId | None = None,
    ) -> list[ProjectSummary]:
        projects = await self.projects.list_all(round_id=round_id)
        funds = (
            await self.funds.list_by_round(round_id)
            if round_id is not None else await self.funds.list_all()
        )
        funds_by_project = group_funds_by_project(funds)
        return [
            project_summary(p, funds_by_project.get(p.id, []))
            for p in projects
        ]

    async def get_project_detail(self, project_id: ProjectId) -> ProjectDetail:
        project = await self.projects.get(project_id)
        if not project:
            raise ResourceNotFoundError(
                "Project", str(project_id),
                ErrorContext(project_id=str(project_id)),
            )
        funds = await self.funds.list_by_project(project.id)
        return project_detail(project, funds)
