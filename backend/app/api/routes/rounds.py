"""Round Routes — create, list and inspect funding rounds.

Invariants:
    - Routes contain no business logic: validation by Pydantic, rules in services/core
    - Unknown or malformed round id → 404 via ResourceNotFoundError and the global handler
"""

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_round_handlers, round_path_id
from app.core.domain_types import RoundId, RoundStatus
from app.schemas.round import RoundCreate, RoundDetail, RoundResponse
from app.services.handle_rounds import RoundHandlers

router = APIRouter(prefix="/api/v1/rounds", tags=["rounds"])


@router.post(
    "", response_model=RoundResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_round(
    body: RoundCreate,
    handlers: RoundHandlers = Depends(get_round_handlers),
):
    """Create a funding round."""
    return await handlers.create_round(body)


@router.get("", response_model=list[RoundResponse])
async def list_rounds(
    status_filter: RoundStatus | None = Query(None, alias="status"),
    handlers: RoundHandlers = Depends(get_round_handlers),
):
    """List rounds with freshly derived status."""
    return await handlers.list_rounds(status_filter)


@router.get("/{round_id}", response_model=RoundDetail)
async def get_round(
    round_id: RoundId = Depends(round_path_id),
    handlers: RoundHandlers = Depends(get_round_handlers),
):
    """Round detail with quadratic weights and matching allocation."""
    return await handlers.get_round_detail(round_id)
