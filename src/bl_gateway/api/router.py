"""Identity endpoints: /auth/register, /auth/login, /auth/refresh.

The token from /auth/login authorizes every ledger endpoint; its subject is
the owner_id all bankrolls and wagers are scoped to.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.database import get_db_session
from src.bl_common.response import ApiResponse, success_response
from src.bl_gateway.auth.jwt_handler import access_token_lifetime
from src.bl_gateway.user.models import User
from src.bl_gateway.user.schemas import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from src.bl_gateway.user.service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])

_service = UserService()

Db = Annotated[AsyncSession, Depends(get_db_session)]


def _user_body(user: User) -> UserResponse:
    return UserResponse(
        user_id=user.id,
        username=user.username,
        email=user.email,
        created_at=user.created_at.isoformat() if user.created_at else None,
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=ApiResponse)
async def register(request: Request, body: RegisterRequest, db: Db) -> ApiResponse:
    async with db.begin():
        user = await _service.register(db, body.username, body.email, body.password)
    return success_response(_user_body(user).model_dump(), request, "User registered")


@router.post("/login", response_model=ApiResponse)
async def login(request: Request, body: LoginRequest, db: Db) -> ApiResponse:
    user, tokens = await _service.login(db, body.username, body.password)
    data = TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=tokens.expires_in,
        user=_user_body(user),
    )
    return success_response(data.model_dump(exclude_none=True), request, "Login successful")


@router.post("/refresh", response_model=ApiResponse)
async def refresh(request: Request, body: RefreshRequest) -> ApiResponse:
    access_token = await _service.refresh(body.refresh_token)
    data = TokenResponse(access_token=access_token, expires_in=access_token_lifetime())
    return success_response(data.model_dump(exclude_none=True), request, "Token refreshed")
