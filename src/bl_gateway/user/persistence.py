"""UserRepository — raw SQL over the users table (alembic 002).

users carries no row-level security: lookups happen before an owner is known.
"""

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.errors import EmailExistsError, InternalError, UsernameExistsError
from src.bl_gateway.user.models import User

_USER_COLUMNS = "id, username, email, password_hash, is_active, created_at"

_BY_USERNAME_SQL = text(f"SELECT {_USER_COLUMNS} FROM users WHERE username = :username")
_BY_ID_SQL = text(f"SELECT {_USER_COLUMNS} FROM users WHERE id = CAST(:user_id AS UUID)")
_EMAIL_TAKEN_SQL = text("SELECT 1 FROM users WHERE lower(email) = lower(:email)")

_INSERT_USER_SQL = text(f"""
    INSERT INTO users (username, email, password_hash)
    VALUES (:username, :email, :password_hash)
    RETURNING {_USER_COLUMNS}
""")


def _row_to_user(row: object) -> User:
    return User(
        id=str(row.id),  # type: ignore[attr-defined]
        username=row.username,  # type: ignore[attr-defined]
        email=row.email,  # type: ignore[attr-defined]
        password_hash=row.password_hash,  # type: ignore[attr-defined]
        is_active=row.is_active,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class UserRepository:
    async def get_by_username(self, db: AsyncSession, username: str) -> User | None:
        row = (await db.execute(_BY_USERNAME_SQL, {"username": username})).fetchone()
        return _row_to_user(row) if row else None

    async def get_by_id(self, db: AsyncSession, user_id: str) -> User | None:
        row = (await db.execute(_BY_ID_SQL, {"user_id": user_id})).fetchone()
        return _row_to_user(row) if row else None

    async def email_taken(self, db: AsyncSession, email: str) -> bool:
        return (await db.execute(_EMAIL_TAKEN_SQL, {"email": email})).fetchone() is not None

    async def insert_user(
        self, db: AsyncSession, username: str, email: str, password_hash: str
    ) -> User:
        """Insert a user. A lost race on either unique key maps to the matching 409."""
        try:
            result = await db.execute(
                _INSERT_USER_SQL,
                {"username": username, "email": email, "password_hash": password_hash},
            )
        except IntegrityError as exc:
            if "uq_users_email" in str(exc.orig):
                raise EmailExistsError() from exc
            raise UsernameExistsError() from exc
        row = result.fetchone()
        if row is None:
            raise InternalError("User insert returned no rows")
        return _row_to_user(row)
