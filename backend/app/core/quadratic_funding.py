"""Quadratic Funding — pure matching allocation over a round's contributions.

Invariants:
    - quadratic_weight(amounts) == (Σ √amount)²; empty → 0.0
    - When total weight > 0, Σ matching_amount == total_pool (within float tolerance)
    - When total weight == 0, every matching_amount is 0.0 (no division, no NaN)
    - Output sorted by total_funding descending; ties keep input project order
    - Never mutates its inputs

Design Decisions:
    - Inputs are plain sequences (ORM rows or dataclasses with project_id/amount):
      no storage dependency, trivially unit-testable
    - contributors_count counts contribution records, matching the public API
"""

import math
from dataclasses import dataclass, replace
from typing import Iterable, Protocol, Sequence
from uuid import UUID


class ContributionLike(Protocol):
    """Anything carrying a project reference and an amount."""
    project_id: UUID
    amount: float


@dataclass(frozen=True)
class ProjectAllocation:
    """Per-project funding summary for one round."""
    project_id: UUID
    total_contributions: float
    quadratic_weight: float
    contributors_count: int
    matching_amount: float = 0.0

    @property
    def total_funding(self) -> float:
        return self.total_contributions + self.matching_amount


def quadratic_weight(amounts: Iterable[float]) -> float:
    """Square of the sum of square roots."""
    sqrt_sum = 0.0
    for amount in amounts:
        if amount < 0:
            raise ValueError(f"Contribution amount cannot be negative: {amount}")
        sqrt_sum += math.sqrt(amount)
    return sqrt_sum ** 2


def summarize_project(
    project_id: UUID, amounts: Sequence[float],
) -> ProjectAllocation:
    """Raw total, weight and count for one project. Matching left at 0."""
    return ProjectAllocation(
        project_id=project_id,
        total_contributions=sum(amounts),
        quadratic_weight=quadratic_weight(amounts),
        contributors_count=len(amounts),
    )


def allocate_matching(
    total_pool: float,
    project_ids: Sequence[UUID],
    contributions: Iterable[ContributionLike],
) -> list[ProjectAllocation]:
    """Distribute total_pool across projects in proportion to quadratic weight."""
    amounts_by_project: dict[UUID, list[float]] = {pid: [] for pid in project_ids}
    for contribution in contributions:
        bucket = amounts_by_project.get(contribution.project_id)
        if bucket is not None:
            bucket.append(contribution.amount)

    summaries = [
        summarize_project(pid, amounts)
        for pid, amounts in amounts_by_project.items()
    ]
    total_weight = sum(s.quadratic_weight for s in summaries)

    allocations = [
        replace(
            s,
            matching_amount=(
                (s.quadratic_weight / total_weight) * total_pool
                if total_weight > 0 else 0.0
            ),
        )
        for s in summaries
    ]
    return sorted(allocations, key=lambda a: a.total_funding, reverse=True)
