"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - RoundId, ProjectId, FundId wrap UUIDs — never use bare UUID in domain logic
    - FundingPoints are finite floats; contributions are strictly positive
    - Round lifecycle states encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

RoundId = NewType("RoundId", UUID)
ProjectId = NewType("ProjectId", UUID)
FundId = NewType("FundId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

FundingPoints = NewType("FundingPoints", float)   # contribution / pool unit


# ─── Enums ───────────────────────────────────────────────────────

class RoundStatus(str, Enum):
    """Round lifecycle — always derived from timestamps, never set directly."""
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"


DEFAULT_CATEGORY = "general"
