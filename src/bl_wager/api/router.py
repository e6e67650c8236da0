"""bl_wager REST API — all endpoints require JWT authentication.

Every write responds with the wager and its bankroll's reconciled balance.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.database import get_db_session
from src.bl_common.response import ApiResponse, success_response
from src.bl_gateway.auth.dependencies import get_current_owner_id
from src.bl_wager.application.schemas import (
    CreateWagerRequest,
    UpdateOutcomeRequest,
    UpdateWagerRequest,
)
from src.bl_wager.application.service import WagerApplicationService

router = APIRouter(prefix="/wagers", tags=["wagers"])

_service = WagerApplicationService()

OwnerId = Annotated[str, Depends(get_current_owner_id)]
Db = Annotated[AsyncSession, Depends(get_db_session)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_wager(
    body: CreateWagerRequest, owner_id: OwnerId, db: Db, request: Request
) -> ApiResponse:
    data = await _service.create_wager(
        db,
        owner_id,
        body.bankroll_id,
        body.stake,
        body.odds,
        outcome=body.outcome,
        note=body.note,
        settlement_date=body.settlement_date,
        bet_type=body.bet_type,
    )
    return success_response(data.model_dump(mode="json"), request)


@router.get("/{wager_id}")
async def get_wager(wager_id: str, owner_id: OwnerId, db: Db, request: Request) -> ApiResponse:
    data = await _service.get_wager(db, owner_id, wager_id)
    return success_response(data.model_dump(mode="json"), request)


@router.patch("/{wager_id}/outcome")
async def update_wager_outcome(
    wager_id: str, body: UpdateOutcomeRequest, owner_id: OwnerId, db: Db, request: Request
) -> ApiResponse:
    data = await _service.update_wager_outcome(db, owner_id, wager_id, body.outcome)
    return success_response(data.model_dump(mode="json"), request)


@router.patch("/{wager_id}")
async def update_wager(
    wager_id: str, body: UpdateWagerRequest, owner_id: OwnerId, db: Db, request: Request
) -> ApiResponse:
    # Only fields present in the body are applied; "note": null clears the note.
    data = await _service.update_wager(
        db, owner_id, wager_id, **body.model_dump(exclude_unset=True)
    )
    return success_response(data.model_dump(mode="json"), request)


@router.delete("/{wager_id}")
async def delete_wager(
    wager_id: str, owner_id: OwnerId, db: Db, request: Request
) -> ApiResponse:
    data = await _service.delete_wager(db, owner_id, wager_id)
    return success_response(data.model_dump(mode="json"), request)
