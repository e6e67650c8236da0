"""Repository Protocol for read-side projections."""

from datetime import date
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.enums import WagerOutcome
from src.bl_query.domain.models import DailyStats
from src.bl_wager.domain.models import Wager


class QueryRepositoryProtocol(Protocol):
    async def daily_stats(
        self, db: AsyncSession, owner_id: str, bankroll_id: str, day: date
    ) -> DailyStats: ...

    async def list_daily_wagers(
        self, db: AsyncSession, owner_id: str, bankroll_id: str, day: date
    ) -> list[Wager]: ...

    async def count_history(
        self,
        db: AsyncSession,
        owner_id: str,
        bankroll_id: str,
        outcome: WagerOutcome | None,
    ) -> int: ...

    async def list_history(
        self,
        db: AsyncSession,
        owner_id: str,
        bankroll_id: str,
        outcome: WagerOutcome | None,
        limit: int,
        offset: int,
    ) -> list[Wager]: ...
