"""bl_bankroll REST API — all endpoints require JWT authentication."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_bankroll.application.schemas import CreateBankrollRequest
from src.bl_bankroll.application.service import BankrollApplicationService
from src.bl_common.database import get_db_session
from src.bl_common.response import ApiResponse, success_response
from src.bl_gateway.auth.dependencies import get_current_owner_id

router = APIRouter(prefix="/bankrolls", tags=["bankrolls"])

_service = BankrollApplicationService()

OwnerId = Annotated[str, Depends(get_current_owner_id)]
Db = Annotated[AsyncSession, Depends(get_db_session)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_bankroll(
    body: CreateBankrollRequest, owner_id: OwnerId, db: Db, request: Request
) -> ApiResponse:
    data = await _service.create_bankroll(db, owner_id, body.name, body.initial_balance)
    return success_response(data.model_dump(mode="json"), request)


@router.get("")
async def list_bankrolls(owner_id: OwnerId, db: Db, request: Request) -> ApiResponse:
    data = await _service.list_bankrolls(db, owner_id)
    return success_response(data.model_dump(mode="json"), request)


@router.get("/{bankroll_id}")
async def get_bankroll(
    bankroll_id: str, owner_id: OwnerId, db: Db, request: Request
) -> ApiResponse:
    data = await _service.get_bankroll(db, owner_id, bankroll_id)
    return success_response(data.model_dump(mode="json"), request)


@router.delete("/{bankroll_id}")
async def delete_bankroll(
    bankroll_id: str, owner_id: OwnerId, db: Db, request: Request
) -> ApiResponse:
    data = await _service.delete_bankroll(db, owner_id, bankroll_id)
    return success_response(data.model_dump(mode="json"), request)


@router.post("/{bankroll_id}/reconcile")
async def reconcile_bankroll(
    bankroll_id: str, owner_id: OwnerId, db: Db, request: Request
) -> ApiResponse:
    data = await _service.reconcile_bankroll(db, owner_id, bankroll_id)
    return success_response(data.model_dump(mode="json"), request)
