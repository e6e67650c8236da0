"""Request-scoped identity: resolve the Bearer token to the acting owner.

Ledger routers take ``owner_id: str = Depends(get_current_owner_id)`` and pass
it explicitly to every service call.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.database import get_db_session
from src.bl_common.errors import AccountDisabledError, InvalidCredentialsError
from src.bl_common.ids import is_valid_id
from src.bl_gateway.auth.jwt_handler import decode_token
from src.bl_gateway.user.models import User
from src.bl_gateway.user.persistence import UserRepository

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")

_users = UserRepository()


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """401 for a missing/invalid/expired token or a vanished user; 403 if disabled."""
    try:
        claims = decode_token(token, expected_type="access")
    except InvalidCredentialsError:
        raise _unauthorized() from None
    user_id = claims["sub"]
    if not is_valid_id(user_id):
        raise _unauthorized()
    user = await _users.get_by_id(db, user_id)
    if user is None:
        raise _unauthorized()
    if not user.is_active:
        raise AccountDisabledError()
    return user


async def get_current_owner_id(user: User = Depends(get_current_user)) -> str:
    return user.id
