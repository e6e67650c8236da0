"""QueryRepository — read-only wager projections, owner-scoped.

History ordering is settlement_date DESC, created_at DESC, with id as the
final tiebreaker so offset pages never overlap or skip rows.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.enums import WagerOutcome
from src.bl_query.domain.models import DailyStats
from src.bl_wager.domain.models import Wager
from src.bl_wager.infrastructure.persistence import row_to_wager

_WAGER_COLUMNS = """
    id, bankroll_id, owner_id, stake, odds, outcome, bet_type, note,
    profit, settlement_date, created_at, updated_at
"""

_DAILY_STATS_SQL = text("""
    SELECT COUNT(*)                                              AS count,
           COUNT(*) FILTER (WHERE outcome = 'won')               AS won_count,
           COUNT(*) FILTER (WHERE outcome = 'lost')              AS lost_count,
           COUNT(*) FILTER (WHERE outcome = 'open')              AS open_count,
           COALESCE(SUM(profit) FILTER (WHERE outcome <> 'open'), 0) AS net_profit,
           COALESCE(SUM(stake), 0)                               AS total_staked
    FROM wagers
    WHERE bankroll_id = :bankroll_id
      AND owner_id = :owner_id
      AND settlement_date = :day
""")

_DAILY_WAGERS_SQL = text(f"""
    SELECT {_WAGER_COLUMNS}
    FROM wagers
    WHERE bankroll_id = :bankroll_id
      AND owner_id = :owner_id
      AND settlement_date = :day
    ORDER BY created_at DESC, id DESC
""")

_HISTORY_COUNT_SQL = text("""
    SELECT COUNT(*)
    FROM wagers
    WHERE bankroll_id = :bankroll_id
      AND owner_id = :owner_id
      AND (CAST(:outcome AS TEXT) IS NULL OR outcome = :outcome)
""")

_HISTORY_PAGE_SQL = text(f"""
    SELECT {_WAGER_COLUMNS}
    FROM wagers
    WHERE bankroll_id = :bankroll_id
      AND owner_id = :owner_id
      AND (CAST(:outcome AS TEXT) IS NULL OR outcome = :outcome)
    ORDER BY settlement_date DESC, created_at DESC, id DESC
    LIMIT :limit OFFSET :offset
""")


class QueryRepository:
    async def daily_stats(
        self, db: AsyncSession, owner_id: str, bankroll_id: str, day: date
    ) -> DailyStats:
        result = await db.execute(
            _DAILY_STATS_SQL,
            {"bankroll_id": bankroll_id, "owner_id": owner_id, "day": day},
        )
        row = result.fetchone()
        if row is None:
            return DailyStats(bankroll_id=bankroll_id, day=day)
        return DailyStats(
            bankroll_id=bankroll_id,
            day=day,
            count=row.count,
            won_count=row.won_count,
            lost_count=row.lost_count,
            open_count=row.open_count,
            net_profit=Decimal(row.net_profit),
            total_staked=Decimal(row.total_staked),
        )

    async def list_daily_wagers(
        self, db: AsyncSession, owner_id: str, bankroll_id: str, day: date
    ) -> list[Wager]:
        result = await db.execute(
            _DAILY_WAGERS_SQL,
            {"bankroll_id": bankroll_id, "owner_id": owner_id, "day": day},
        )
        return [row_to_wager(row) for row in result.fetchall()]

    async def count_history(
        self,
        db: AsyncSession,
        owner_id: str,
        bankroll_id: str,
        outcome: WagerOutcome | None,
    ) -> int:
        result = await db.execute(
            _HISTORY_COUNT_SQL,
            {
                "bankroll_id": bankroll_id,
                "owner_id": owner_id,
                "outcome": outcome.value if outcome else None,
            },
        )
        return int(result.scalar_one())

    async def list_history(
        self,
        db: AsyncSession,
        owner_id: str,
        bankroll_id: str,
        outcome: WagerOutcome | None,
        limit: int,
        offset: int,
    ) -> list[Wager]:
        result = await db.execute(
            _HISTORY_PAGE_SQL,
            {
                "bankroll_id": bankroll_id,
                "owner_id": owner_id,
                "outcome": outcome.value if outcome else None,
                "limit": limit,
                "offset": offset,
            },
        )
        return [row_to_wager(row) for row in result.fetchall()]
