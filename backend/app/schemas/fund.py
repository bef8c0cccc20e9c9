"""Fund Schemas — contribution request and record."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.round_status import as_utc


class FundCreate(BaseModel):
    """Funding request — amount strictly positive and finite."""
    agent_name: str = Field(min_length=1, max_length=100)
    amount: float = Field(gt=0, allow_inf_nan=False)

    @field_validator("agent_name")
    @classmethod
    def strip_agent_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("agent_name cannot be empty or whitespace")
        return v


class FundResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    round_id: UUID
    agent_name: str
    amount: float
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def normalize_timezone(cls, v: datetime) -> datetime:
        return as_utc(v)
