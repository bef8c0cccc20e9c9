"""Project Schemas — nomination input and enriched project views.

Invariants:
    - title, description, nominator_agent required, stripped, non-empty
    - repo_url defaults to "" and category to "general" when omitted
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.core.round_status import as_utc
from app.schemas.fund import FundResponse


class ProjectCreate(BaseModel):
    """Project nomination into an existing round."""
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=10_000)
    repo_url: str | None = Field(None, max_length=500)
    category: str | None = Field(None, max_length=50)
    nominator_agent: str = Field(min_length=1, max_length=100)
    round_id: UUID

    @field_validator("title", "description", "nominator_agent")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty or whitespace")
        return v


class ProjectResponse(BaseModel):
    id: UUID
    title: str
    description: str
    repo_url: str
    category: str
    nominator_agent: str
    round_id: UUID
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def normalize_timezone(cls, v: datetime) -> datetime:
        return as_utc(v)


class ProjectSummary(ProjectResponse):
    """Project enriched with its raw contribution total and quadratic weight."""
    total_contributions: float
    quadratic_weight: float
    contributors_count: int


class ProjectDetail(ProjectSummary):
    contributions: list[FundResponse]
