"""Round Schemas — Pydantic contracts for creating and reading funding rounds.

Invariants:
    - RoundCreate.name: 1-200 chars, stripped, non-empty
    - total_pool >= 0, funding_budget_per_agent > 0 when given, both finite
    - end_date must not precede start_date
    - Every datetime leaving the API is timezone-aware UTC

Design Decisions:
    - funding_budget_per_agent optional here; the service fills the configured default
    - RoundDetail extends RoundResponse: one shape for list and detail, detail adds projects
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from app.core.domain_types import RoundStatus
from app.core.round_status import as_utc
from app.schemas.project import ProjectDetail


class RoundCreate(BaseModel):
    """Round creation — validates pool, budget and time window."""
    name: str = Field(min_length=1, max_length=200)
    start_date: datetime
    end_date: datetime
    total_pool: float = Field(ge=0, allow_inf_nan=False)
    funding_budget_per_agent: float | None = Field(
        None, gt=0, allow_inf_nan=False,
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_timezone(cls, v: datetime) -> datetime:
        return as_utc(v)

    @model_validator(mode="after")
    def validate_window(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not precede start_date")
        return self


class RoundResponse(BaseModel):
    """Round as returned by the API — status always freshly derived."""
    id: UUID
    name: str
    start_date: datetime
    end_date: datetime
    total_pool: float
    funding_budget_per_agent: float
    status: RoundStatus
    created_at: datetime

    @field_validator("start_date", "end_date", "created_at")
    @classmethod
    def normalize_timezone(cls, v: datetime) -> datetime:
        return as_utc(v)


class RoundProject(ProjectDetail):
    """Project inside a round detail — adds its share of the matching pool."""
    matching_amount: float
    total_funding: float


class RoundDetail(RoundResponse):
    """Round with allocations, projects sorted by total_funding descending."""
    projects: list[RoundProject]
