"""FundingRound ORM — persists a time-boxed funding event with a fixed matching pool.

Invariants:
    - start_date/end_date are authoritative; status is a cache of the derived value
    - total_pool >= 0, funding_budget_per_agent > 0 (validated at the API boundary)
    - Never updated after creation except for the status cache

Design Decisions:
    - status persisted anyway: cheap list filtering and a readable table dump,
      but every read path recomputes it from the timestamps
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Float, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class FundingRound(Base):
    """Round entity — projects and funds reference it by round_id."""
    __tablename__ = "rounds"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    end_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    total_pool: Mapped[float] = mapped_column(Float, nullable=False)
    funding_budget_per_agent: Mapped[float] = mapped_column(
        Float, nullable=False, default=100.0,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="upcoming",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
