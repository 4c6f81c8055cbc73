from datetime import date

from fastapi import APIRouter, HTTPException, Query

from punchclock.api.dependencies import LookupsDep, PunchLedgerDep
from punchclock.core.logging import get_logger
from punchclock.core.lookups import ReferenceLookups
from punchclock.models.punch import (
    REJECTED_PUNCH_ID,
    Punch,
    PunchCreate,
    PunchPublic,
)
from punchclock.models.reference import Badge

logger = get_logger(__name__)

router = APIRouter(
    prefix="/punches",
    tags=["punches"],
    responses={404: {"description": "Punch or badge not found"}},
)


def _require_badge(lookups: ReferenceLookups, badge_id: str) -> Badge:
    badge = lookups.find_badge(badge_id)
    if badge is None:
        raise HTTPException(status_code=404, detail=f"Badge {badge_id} not found")
    return badge


@router.post("", response_model=PunchPublic, status_code=201)
async def create_punch(
    request: PunchCreate,
    lookups: LookupsDep,
    ledger: PunchLedgerDep,
) -> PunchPublic:
    """
    Record a punch.

    Args:
        request: Terminal, badge, timestamp and event type of the punch
        lookups: Reference lookups (injected)
        ledger: Punch ledger (injected)

    Returns:
        The stored punch

    Raises:
        HTTPException: 404 if the badge is unknown, 403 if the terminal is not
        allowed to record punches for the badge's employee
    """
    logger.info(
        f"Punch requested on terminal {request.terminal_id} for badge {request.badge_id}"
    )
    badge = _require_badge(lookups, request.badge_id)

    punch = Punch(
        terminal_id=request.terminal_id,
        badge=badge,
        original_timestamp=request.original_timestamp,
        event_type=request.event_type,
    )
    punch_id = ledger.create(punch)
    if punch_id == REJECTED_PUNCH_ID:
        raise HTTPException(
            status_code=403,
            detail=f"Terminal {request.terminal_id} may not record punches for badge {badge.id}",
        )

    stored = ledger.find_by_id(punch_id)
    if stored is None:
        # Only reachable if the row disappeared between insert and read back
        raise HTTPException(status_code=404, detail=f"Punch {punch_id} not found")
    return PunchPublic.from_punch(stored)


@router.get("/{punch_id}", response_model=PunchPublic)
async def get_punch(punch_id: int, ledger: PunchLedgerDep) -> PunchPublic:
    """Get a single punch by id."""
    punch = ledger.find_by_id(punch_id)
    if punch is None:
        raise HTTPException(status_code=404, detail=f"Punch {punch_id} not found")
    return PunchPublic.from_punch(punch)


@router.get("/badge/{badge_id}/day", response_model=list[PunchPublic])
async def list_punches_for_day(
    badge_id: str,
    lookups: LookupsDep,
    ledger: PunchLedgerDep,
    day: date = Query(..., description="Calendar day (YYYY-MM-DD)"),
) -> list[PunchPublic]:
    """
    List the punches of a badge for one day.

    A clock-out recorded shortly after midnight is listed with the day it
    closes.
    """
    badge = _require_badge(lookups, badge_id)
    return [PunchPublic.from_punch(p) for p in ledger.list_for_day(badge, day)]


@router.get("/badge/{badge_id}/range", response_model=list[PunchPublic])
async def list_punches_for_range(
    badge_id: str,
    lookups: LookupsDep,
    ledger: PunchLedgerDep,
    begin: date = Query(...),
    end: date = Query(...),
) -> list[PunchPublic]:
    """List the punches of a badge over a date range. Currently always empty."""
    badge = _require_badge(lookups, badge_id)
    return [PunchPublic.from_punch(p) for p in ledger.list_for_range(badge, begin, end)]
