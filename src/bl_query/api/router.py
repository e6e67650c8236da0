"""Read-side REST API: daily stats, daily wager list, paginated history."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.database import get_db_session
from src.bl_common.response import ApiResponse, success_response
from src.bl_gateway.auth.dependencies import get_current_owner_id
from src.bl_query.application.service import QueryApplicationService

router = APIRouter(prefix="/bankrolls", tags=["history"])

_service = QueryApplicationService()

OwnerId = Annotated[str, Depends(get_current_owner_id)]
Db = Annotated[AsyncSession, Depends(get_db_session)]


@router.get("/{bankroll_id}/daily-stats")
async def daily_stats(
    bankroll_id: str,
    owner_id: OwnerId,
    db: Db,
    request: Request,
    day: str | None = Query(None, alias="date", description="YYYY-MM-DD, default today (UTC)"),
) -> ApiResponse:
    data = await _service.daily_stats(db, owner_id, bankroll_id, day)
    return success_response(data.model_dump(mode="json"), request)


@router.get("/{bankroll_id}/daily-wagers")
async def daily_wagers(
    bankroll_id: str,
    owner_id: OwnerId,
    db: Db,
    request: Request,
    day: str | None = Query(None, alias="date", description="YYYY-MM-DD, default today (UTC)"),
) -> ApiResponse:
    data = await _service.daily_wagers(db, owner_id, bankroll_id, day)
    return success_response(data.model_dump(mode="json"), request)


@router.get("/{bankroll_id}/history")
async def history_page(
    bankroll_id: str,
    owner_id: OwnerId,
    db: Db,
    request: Request,
    outcome: str = Query("all", description="all | won | lost | open"),
    page: int = Query(1, description="1-based page number"),
) -> ApiResponse:
    data = await _service.history_page(db, owner_id, bankroll_id, outcome, page)
    return success_response(data.model_dump(mode="json"), request)
