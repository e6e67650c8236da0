"""QueryApplicationService — read-side projections over one owner's wagers.

All methods are read-only. An unknown (or foreign) bankroll is
BankrollNotFoundError; an empty day or an empty page is a normal result.
"""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.bl_bankroll.domain.repository import BankrollRepositoryProtocol
from src.bl_bankroll.infrastructure.persistence import BankrollRepository
from src.bl_common.database import owner_transaction
from src.bl_common.datetime_utils import parse_date
from src.bl_common.enums import OutcomeFilter
from src.bl_common.errors import BankrollNotFoundError, ValidationError
from src.bl_common.ids import is_valid_id
from src.bl_query.application.schemas import (
    DailyStatsResponse,
    DailyWagersResponse,
    HistoryPageResponse,
)
from src.bl_query.domain.models import DailyStats, HistoryPage
from src.bl_query.domain.pagination import page_offset, validate_page
from src.bl_query.domain.repository import QueryRepositoryProtocol
from src.bl_query.infrastructure.persistence import QueryRepository
from src.bl_wager.application.schemas import WagerResponse


def _parse_filter(value: OutcomeFilter | str | None) -> OutcomeFilter:
    if value is None:
        return OutcomeFilter.ALL
    try:
        return OutcomeFilter(value)
    except ValueError:
        allowed = ", ".join(f.value for f in OutcomeFilter)
        raise ValidationError("outcome", f"filter must be one of {allowed}, got {value!r}") from None


class QueryApplicationService:
    def __init__(
        self,
        repo: QueryRepositoryProtocol | None = None,
        bankroll_repo: BankrollRepositoryProtocol | None = None,
        page_size: int | None = None,
    ) -> None:
        self._repo: QueryRepositoryProtocol = repo or QueryRepository()
        self._bankrolls: BankrollRepositoryProtocol = bankroll_repo or BankrollRepository()
        self._page_size = page_size or settings.HISTORY_PAGE_SIZE

    async def daily_stats(
        self, db: AsyncSession, owner_id: str, bankroll_id: str, day: date | str | None
    ) -> DailyStatsResponse:
        """Count/won/lost/open and net profit for one bankroll on one settlement date."""
        day = parse_date(day, "date")
        async with owner_transaction(db, owner_id):
            await self._require_bankroll(db, owner_id, bankroll_id)
            stats = await self._repo.daily_stats(db, owner_id, bankroll_id, day)
        return DailyStatsResponse.from_domain(stats)

    async def daily_wagers(
        self, db: AsyncSession, owner_id: str, bankroll_id: str, day: date | str | None
    ) -> DailyWagersResponse:
        day = parse_date(day, "date")
        async with owner_transaction(db, owner_id):
            await self._require_bankroll(db, owner_id, bankroll_id)
            wagers = await self._repo.list_daily_wagers(db, owner_id, bankroll_id, day)
        # Summary from the same rows, so list and totals always agree
        stats = DailyStats.from_wagers(bankroll_id, day, wagers)
        return DailyWagersResponse(
            summary=DailyStatsResponse.from_domain(stats),
            items=[WagerResponse.from_domain(w) for w in wagers],
        )

    async def history_page(
        self,
        db: AsyncSession,
        owner_id: str,
        bankroll_id: str,
        outcome_filter: OutcomeFilter | str | None = OutcomeFilter.ALL,
        page: int | None = 1,
    ) -> HistoryPageResponse:
        """One page of a bankroll's wagers, newest settlement date first.

        Callers reset to page 1 whenever the bankroll or the filter changes;
        the page number is not carried across.
        """
        flt = _parse_filter(outcome_filter)
        page = validate_page(page)
        outcome = flt.to_outcome()
        async with owner_transaction(db, owner_id):
            await self._require_bankroll(db, owner_id, bankroll_id)
            total = await self._repo.count_history(db, owner_id, bankroll_id, outcome)
            offset = page_offset(page, self._page_size)
            items = []
            if offset < total:
                items = await self._repo.list_history(
                    db, owner_id, bankroll_id, outcome, self._page_size, offset
                )
        history = HistoryPage(
            items=items,
            total=total,
            page=page,
            page_size=self._page_size,
            outcome_filter=flt,
        )
        return HistoryPageResponse.from_domain(history)

    async def _require_bankroll(self, db: AsyncSession, owner_id: str, bankroll_id: str) -> None:
        if not is_valid_id(bankroll_id):
            raise BankrollNotFoundError(bankroll_id)
        if await self._bankrolls.get_bankroll(db, owner_id, bankroll_id) is None:
            raise BankrollNotFoundError(bankroll_id)
