"""Round Status — derive upcoming/active/completed from wall-clock time.

Invariants:
    - now < start ⇒ UPCOMING; now > end ⇒ COMPLETED; otherwise ACTIVE (bounds inclusive)
    - Recomputed on every read; the persisted status column is only a cache
    - Naive datetimes are treated as UTC
"""

from datetime import datetime, timezone

from app.core.domain_types import RoundStatus
from app.core.errors import ErrorContext, RoundNotActiveError


def as_utc(moment: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on read)."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def derive_round_status(
    now: datetime, start: datetime, end: datetime,
) -> RoundStatus:
    now, start, end = as_utc(now), as_utc(start), as_utc(end)
    if now < start:
        return RoundStatus.UPCOMING
    if now > end:
        return RoundStatus.COMPLETED
    return RoundStatus.ACTIVE


def ensure_round_active(
    now: datetime,
    start: datetime,
    end: datetime,
    context: ErrorContext | None = None,
) -> None:
    """Raise RoundNotActiveError unless the round accepts contributions right now."""
    status = derive_round_status(now, start, end)
    if status is not RoundStatus.ACTIVE:
        raise RoundNotActiveError(status.value, context)
