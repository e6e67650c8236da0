"""HS256 JWTs whose subject is the user id, i.e. the ledger owner_id.

Access and refresh tokens differ only in lifetime and the ``type`` claim;
decode_token rejects a token presented as the other type. There is no
revocation list: a token is good until ``exp``.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Literal

from jose import JWTError, jwt

from config.settings import settings
from src.bl_common.errors import InvalidCredentialsError, InvalidRefreshTokenError

TokenType = Literal["access", "refresh"]

_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
_REFRESH_EXPIRE = timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS)


def access_token_lifetime() -> int:
    """Access-token lifetime in seconds (the OAuth2 expires_in)."""
    return int(_ACCESS_EXPIRE.total_seconds())


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str

    @property
    def expires_in(self) -> int:
        return access_token_lifetime()


def _lifetime(token_type: TokenType) -> timedelta:
    return _ACCESS_EXPIRE if token_type == "access" else _REFRESH_EXPIRE


def _sign(user_id: str, token_type: TokenType) -> str:
    issued = datetime.now(UTC)
    claims = {
        "sub": user_id,
        "type": token_type,
        "iat": issued,
        "exp": issued + _lifetime(token_type),
    }
    return str(jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM))


def issue_access_token(user_id: str) -> str:
    return _sign(user_id, "access")


def issue_refresh_token(user_id: str) -> str:
    return _sign(user_id, "refresh")


def issue_tokens(user_id: str) -> TokenPair:
    return TokenPair(issue_access_token(user_id), issue_refresh_token(user_id))


def decode_token(token: str, expected_type: TokenType) -> dict[str, str]:
    """Verify signature, expiry and type; return the claims.

    A bad access token raises InvalidCredentialsError, a bad refresh token
    InvalidRefreshTokenError.
    """
    error = InvalidCredentialsError if expected_type == "access" else InvalidRefreshTokenError
    try:
        # single-algorithm allowlist
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise error() from None
    if claims.get("type") != expected_type or not claims.get("sub"):
        raise error()
    return claims
