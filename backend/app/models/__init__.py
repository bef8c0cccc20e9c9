"""ORM Models — SQLAlchemy declarative models for rounds, projects and funds.

Invariants:
    - All models inherit from Base (db/base.py)
    - FundingRound is the aggregate root; projects and funds are scoped by round_id

Design Decisions:
    - One file per entity for locality
    - No ORM relationships: reads go through round_id/project_id indexed queries in
      the repositories, so loading a round never pulls its projects or funds
    - All models imported here so Base.metadata sees every table
"""

from app.models.funding_round import FundingRound  # noqa: F401
from app.models.project import Project  # noqa: F401
from app.models.fund import Fund  # noqa: F401
