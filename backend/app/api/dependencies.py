"""Route Dependencies — wire SQLAlchemy repositories into service handlers per request.

Invariants:
    - One AsyncSession per request shared by all repositories of a handler
    - Handlers receive repositories, never the session itself
    - Malformed path ids raise ResourceNotFoundError (404), same as unknown ids
"""

from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.domain_types import ProjectId, RoundId
from app.core.errors import ResourceNotFoundError
from app.infrastructure.database import get_db
from app.infrastructure.repositories import (
    SqlFundRepository, SqlProjectRepository, SqlRoundRepository,
)
from app.services.handle_funding import FundingHandlers
from app.services.handle_projects import ProjectHandlers
from app.services.handle_rounds import RoundHandlers


def get_round_handlers(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> RoundHandlers:
    return RoundHandlers(
        SqlRoundRepository(db),
        SqlProjectRepository(db),
        SqlFundRepository(db),
        default_agent_budget=settings.default_agent_budget,
    )


def get_project_handlers(
    db: AsyncSession = Depends(get_db),
) -> ProjectHandlers:
    return ProjectHandlers(
        SqlRoundRepository(db), SqlProjectRepository(db), SqlFundRepository(db),
    )


def get_funding_handlers(
    db: AsyncSession = Depends(get_db),
) -> FundingHandlers:
    return FundingHandlers(
        SqlRoundRepository(db), SqlProjectRepository(db), SqlFundRepository(db),
    )


def _parse_resource_id(resource_type: str, raw: str) -> UUID:
    """Path ids that are not UUIDs name no record, so they are 404 like any unknown id."""
    try:
        return UUID(raw)
    except ValueError:
        raise ResourceNotFoundError(resource_type, raw) from None


def round_path_id(round_id: str) -> RoundId:
    return RoundId(_parse_resource_id("Round", round_id))


def project_path_id(project_id: str) -> ProjectId:
    return ProjectId(_parse_resource_id("Project", project_id))
