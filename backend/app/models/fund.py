"""Fund ORM — persists a single agent contribution to a project.

Invariants:
    - round_id always equals the project's round_id (copied by the service, never from input)
    - amount > 0
    - Append-only: no update, delete or refund path exists

Design Decisions:
    - round_id denormalized: per-(round, agent) spend is one indexed query, no JOIN
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Float, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Fund(Base):
    """Contribution entity — funding points from one agent to one project."""
    __tablename__ = "funds"
    __table_args__ = (
        Index("ix_funds_round_agent", "round_id", "agent_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id"), nullable=False, index=True,
    )
    round_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("rounds.id"), nullable=False, index=True,
    )
    agent_name: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
