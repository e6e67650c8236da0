"""WagerRepository — concrete implementation of WagerRepositoryProtocol.

Every statement carries an explicit owner_id predicate on top of the
row-level-security policy (alembic 005); a row owned by someone else is
indistinguishable from a missing row.

Transaction ownership: The CALLER (application service) opens the
transaction via `owner_transaction(...)`. Nothing here commits.
"""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.enums import WagerOutcome
from src.bl_common.errors import InternalError
from src.bl_wager.domain.models import Wager, WagerDraft

_WAGER_COLUMNS = """
    id, bankroll_id, owner_id, stake, odds, outcome, bet_type, note,
    profit, settlement_date, created_at, updated_at
"""

_INSERT_WAGER_SQL = text(f"""
    INSERT INTO wagers
        (bankroll_id, owner_id, stake, odds, outcome, bet_type, note,
         profit, settlement_date)
    VALUES
        (:bankroll_id, :owner_id, :stake, :odds, :outcome, :bet_type, :note,
         :profit, :settlement_date)
    RETURNING {_WAGER_COLUMNS}
""")

_GET_WAGER_SQL = text(f"""
    SELECT {_WAGER_COLUMNS}
    FROM wagers
    WHERE id = :wager_id AND owner_id = :owner_id
""")

_LOCK_WAGER_SQL = text(f"""
    SELECT {_WAGER_COLUMNS}
    FROM wagers
    WHERE id = :wager_id AND owner_id = :owner_id
    FOR UPDATE
""")

# created_at and bankroll_id are never rewritten
_UPDATE_WAGER_SQL = text(f"""
    UPDATE wagers
    SET stake = :stake,
        odds = :odds,
        outcome = :outcome,
        profit = :profit,
        bet_type = :bet_type,
        note = :note,
        settlement_date = :settlement_date,
        updated_at = NOW()
    WHERE id = :wager_id AND owner_id = :owner_id
    RETURNING {_WAGER_COLUMNS}
""")

_DELETE_WAGER_SQL = text(f"""
    DELETE FROM wagers
    WHERE id = :wager_id AND owner_id = :owner_id
    RETURNING {_WAGER_COLUMNS}
""")


def row_to_wager(row: object) -> Wager:
    profit = row.profit  # type: ignore[attr-defined]
    return Wager(
        id=str(row.id),  # type: ignore[attr-defined]
        bankroll_id=str(row.bankroll_id),  # type: ignore[attr-defined]
        owner_id=str(row.owner_id),  # type: ignore[attr-defined]
        stake=Decimal(row.stake),  # type: ignore[attr-defined]
        odds=Decimal(row.odds),  # type: ignore[attr-defined]
        outcome=WagerOutcome(row.outcome),  # type: ignore[attr-defined]
        settlement_date=row.settlement_date,  # type: ignore[attr-defined]
        profit=Decimal(profit) if profit is not None else None,
        bet_type=row.bet_type,  # type: ignore[attr-defined]
        note=row.note,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class WagerRepository:
    """Concrete repository — raw SQL, owner-scoped."""

    async def insert_wager(
        self,
        db: AsyncSession,
        owner_id: str,
        draft: WagerDraft,
        profit: Decimal | None,
    ) -> Wager:
        result = await db.execute(
            _INSERT_WAGER_SQL,
            {
                "bankroll_id": draft.bankroll_id,
                "owner_id": owner_id,
                "stake": draft.stake,
                "odds": draft.odds,
                "outcome": draft.outcome.value,
                "bet_type": draft.bet_type,
                "note": draft.note,
                "profit": profit,
                "settlement_date": draft.settlement_date,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Wager insert returned no rows")
        return row_to_wager(row)

    async def get_wager(
        self,
        db: AsyncSession,
        owner_id: str,
        wager_id: str,
        for_update: bool = False,
    ) -> Wager | None:
        sql = _LOCK_WAGER_SQL if for_update else _GET_WAGER_SQL
        result = await db.execute(sql, {"wager_id": wager_id, "owner_id": owner_id})
        row = result.fetchone()
        return row_to_wager(row) if row else None

    async def update_wager(
        self, db: AsyncSession, owner_id: str, wager: Wager
    ) -> Wager | None:
        result = await db.execute(
            _UPDATE_WAGER_SQL,
            {
                "wager_id": wager.id,
                "owner_id": owner_id,
                "stake": wager.stake,
                "odds": wager.odds,
                "outcome": wager.outcome.value,
                "profit": wager.profit,
                "bet_type": wager.bet_type,
                "note": wager.note,
                "settlement_date": wager.settlement_date,
            },
        )
        row = result.fetchone()
        return row_to_wager(row) if row else None

    async def delete_wager(
        self, db: AsyncSession, owner_id: str, wager_id: str
    ) -> Wager | None:
        result = await db.execute(
            _DELETE_WAGER_SQL, {"wager_id": wager_id, "owner_id": owner_id}
        )
        row = result.fetchone()
        return row_to_wager(row) if row else None
