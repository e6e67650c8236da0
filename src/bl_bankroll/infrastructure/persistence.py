"""BankrollRepository — concrete implementation of BankrollRepositoryProtocol.

current_balance is only ever written by _RECONCILE_SQL (and at insert, where it
equals initial_balance). initial_balance is never updated after insert.

Transaction ownership: The CALLER (application service) opens the
transaction via `owner_transaction(...)`. Nothing here commits.
"""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_bankroll.domain.models import Bankroll
from src.bl_common.errors import InternalError

_BANKROLL_COLUMNS = """
    id, owner_id, name, initial_balance, current_balance, created_at, updated_at
"""

_INSERT_BANKROLL_SQL = text(f"""
    INSERT INTO bankrolls (owner_id, name, initial_balance, current_balance)
    VALUES (:owner_id, :name, :initial_balance, :initial_balance)
    RETURNING {_BANKROLL_COLUMNS}
""")

_GET_BANKROLL_SQL = text(f"""
    SELECT {_BANKROLL_COLUMNS}
    FROM bankrolls
    WHERE id = :bankroll_id AND owner_id = :owner_id
""")

# Row lock serializes concurrent wager writes against the same bankroll
_LOCK_BANKROLL_SQL = text(f"""
    SELECT {_BANKROLL_COLUMNS}
    FROM bankrolls
    WHERE id = :bankroll_id AND owner_id = :owner_id
    FOR UPDATE
""")

_LIST_BANKROLLS_SQL = text(f"""
    SELECT {_BANKROLL_COLUMNS}
    FROM bankrolls
    WHERE owner_id = :owner_id
    ORDER BY created_at DESC, id DESC
""")

_DELETE_BANKROLL_WAGERS_SQL = text("""
    DELETE FROM wagers
    WHERE bankroll_id = :bankroll_id AND owner_id = :owner_id
""")

_DELETE_BANKROLL_SQL = text("""
    DELETE FROM bankrolls
    WHERE id = :bankroll_id AND owner_id = :owner_id
    RETURNING id
""")

_RECONCILE_SQL = text("""
    UPDATE bankrolls b
    SET current_balance = b.initial_balance + COALESCE((
            SELECT SUM(w.profit)
            FROM wagers w
            WHERE w.bankroll_id = b.id
              AND w.outcome <> 'open'
        ), 0),
        updated_at = NOW()
    WHERE b.id = :bankroll_id AND b.owner_id = :owner_id
    RETURNING b.current_balance
""")


def _row_to_bankroll(row: object) -> Bankroll:
    return Bankroll(
        id=str(row.id),  # type: ignore[attr-defined]
        owner_id=str(row.owner_id),  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        initial_balance=Decimal(row.initial_balance),  # type: ignore[attr-defined]
        current_balance=Decimal(row.current_balance),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class BankrollRepository:
    """Concrete repository — raw SQL, owner-scoped."""

    async def create_bankroll(
        self, db: AsyncSession, owner_id: str, name: str, initial_balance: Decimal
    ) -> Bankroll:
        result = await db.execute(
            _INSERT_BANKROLL_SQL,
            {"owner_id": owner_id, "name": name, "initial_balance": initial_balance},
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Bankroll insert returned no rows")
        return _row_to_bankroll(row)

    async def get_bankroll(
        self,
        db: AsyncSession,
        owner_id: str,
        bankroll_id: str,
        for_update: bool = False,
    ) -> Bankroll | None:
        sql = _LOCK_BANKROLL_SQL if for_update else _GET_BANKROLL_SQL
        result = await db.execute(sql, {"bankroll_id": bankroll_id, "owner_id": owner_id})
        row = result.fetchone()
        return _row_to_bankroll(row) if row else None

    async def list_bankrolls(self, db: AsyncSession, owner_id: str) -> list[Bankroll]:
        result = await db.execute(_LIST_BANKROLLS_SQL, {"owner_id": owner_id})
        return [_row_to_bankroll(row) for row in result.fetchall()]

    async def delete_bankroll(
        self, db: AsyncSession, owner_id: str, bankroll_id: str
    ) -> int | None:
        params = {"bankroll_id": bankroll_id, "owner_id": owner_id}
        # FK ON DELETE CASCADE would cover this too; explicit delete gives the count
        wagers_result = await db.execute(_DELETE_BANKROLL_WAGERS_SQL, params)
        result = await db.execute(_DELETE_BANKROLL_SQL, params)
        if result.fetchone() is None:
            return None
        return wagers_result.rowcount or 0

    async def reconcile_balance(
        self, db: AsyncSession, owner_id: str, bankroll_id: str
    ) -> Decimal | None:
        result = await db.execute(
            _RECONCILE_SQL, {"bankroll_id": bankroll_id, "owner_id": owner_id}
        )
        row = result.fetchone()
        return Decimal(row.current_balance) if row else None
