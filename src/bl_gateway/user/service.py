"""UserService: register, login, refresh.

The caller owns the transaction; register runs inside the router's
``async with db.begin()`` so the uniqueness checks and the insert commit together.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.errors import (
    AccountDisabledError,
    EmailExistsError,
    InvalidCredentialsError,
    UsernameExistsError,
)
from src.bl_gateway.auth.jwt_handler import (
    TokenPair,
    decode_token,
    issue_access_token,
    issue_tokens,
)
from src.bl_gateway.auth.password import hash_password, verify_password
from src.bl_gateway.user.models import User
from src.bl_gateway.user.persistence import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, repo: UserRepository | None = None) -> None:
        self._repo = repo or UserRepository()

    async def register(self, db: AsyncSession, username: str, email: str, password: str) -> User:
        if await self._repo.get_by_username(db, username) is not None:
            raise UsernameExistsError()
        if await self._repo.email_taken(db, email):
            raise EmailExistsError()
        user = await self._repo.insert_user(db, username, email, hash_password(password))
        logger.info("User registered: id=%s username=%s", user.id, username)
        return user

    async def login(
        self, db: AsyncSession, username: str, password: str
    ) -> tuple[User, TokenPair]:
        """Unknown user and wrong password are indistinguishable to the caller."""
        user = await self._repo.get_by_username(db, username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login rejected: username=%s", username)
            raise InvalidCredentialsError()
        if not user.is_active:
            raise AccountDisabledError()
        return user, issue_tokens(user.id)

    async def refresh(self, refresh_token: str) -> str:
        """New access token for a valid refresh token; the refresh token is not rotated."""
        claims = decode_token(refresh_token, expected_type="refresh")
        return issue_access_token(claims["sub"])
