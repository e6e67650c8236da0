"""QueryApplicationService: daily stats, daily wagers and paginated history."""

import uuid
from datetime import date, timedelta
from decimal import Decimal

import pytest

from src.bl_common.errors import BankrollNotFoundError, ValidationError
from src.bl_query.domain.pagination import page_offset, total_pages, validate_page

DAY = date(2026, 10, 19)


@pytest.fixture
async def bankroll_id(bankroll_service, db, owner_id) -> str:
    created = await bankroll_service.create_bankroll(db, owner_id, "Main", "1000")
    return created.id


async def _add(wager_service, db, owner_id, bankroll_id, outcome, day=DAY, stake="10"):
    return await wager_service.create_wager(
        db, owner_id, bankroll_id, stake, "2", outcome=outcome, settlement_date=day
    )


class TestPagination:
    def test_total_pages(self) -> None:
        assert total_pages(0, 10) == 0
        assert total_pages(10, 10) == 1
        assert total_pages(21, 10) == 3

    def test_offset(self) -> None:
        assert page_offset(1, 10) == 0
        assert page_offset(3, 10) == 20

    def test_validate_page(self) -> None:
        assert validate_page(None) == 1
        with pytest.raises(ValidationError):
            validate_page(0)


class TestDailyStats:
    async def test_counts_and_net_profit(
        self, query_service, wager_service, db, owner_id, bankroll_id
    ) -> None:
        await _add(wager_service, db, owner_id, bankroll_id, "won")    # +10
        await _add(wager_service, db, owner_id, bankroll_id, "lost")   # -10
        await _add(wager_service, db, owner_id, bankroll_id, "lost", stake="5")
        await _add(wager_service, db, owner_id, bankroll_id, "open")
        await _add(wager_service, db, owner_id, bankroll_id, "won", day=DAY - timedelta(days=1))

        stats = await query_service.daily_stats(db, owner_id, bankroll_id, "2026-10-19")

        assert stats.count == 4
        assert (stats.won_count, stats.lost_count, stats.open_count) == (1, 2, 1)
        assert stats.net_profit == Decimal("-5.00")
        assert stats.total_staked == Decimal("35.00")

    async def test_empty_day_is_zero(self, query_service, db, owner_id, bankroll_id) -> None:
        stats = await query_service.daily_stats(db, owner_id, bankroll_id, "2020-01-01")
        assert stats.count == 0
        assert stats.net_profit == Decimal("0")

    async def test_malformed_date(self, query_service, db, owner_id, bankroll_id) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await query_service.daily_stats(db, owner_id, bankroll_id, "19/10/2026")
        assert exc_info.value.field == "date"

    async def test_foreign_bankroll(
        self, query_service, db, other_owner_id, bankroll_id
    ) -> None:
        with pytest.raises(BankrollNotFoundError):
            await query_service.daily_stats(db, other_owner_id, bankroll_id, DAY)

    async def test_daily_wagers_summary_matches_items(
        self, query_service, wager_service, db, owner_id, bankroll_id
    ) -> None:
        await _add(wager_service, db, owner_id, bankroll_id, "won")
        last = await _add(wager_service, db, owner_id, bankroll_id, "open")

        result = await query_service.daily_wagers(db, owner_id, bankroll_id, DAY)

        assert result.summary.count == len(result.items) == 2
        assert result.items[0].id == last.wager.id
        assert result.summary.net_profit == Decimal("10.00")


class TestHistoryPage:
    async def test_page_lengths(
        self, query_service, wager_service, db, owner_id, bankroll_id
    ) -> None:
        for i in range(23):
            await _add(wager_service, db, owner_id, bankroll_id, "lost", day=DAY - timedelta(days=i))

        pages = [
            await query_service.history_page(db, owner_id, bankroll_id, "all", p)
            for p in (1, 2, 3, 4)
        ]

        assert [len(p.items) for p in pages] == [10, 10, 3, 0]
        assert pages[0].total == 23
        assert pages[0].total_pages == 3
        assert pages[0].has_next and not pages[2].has_next
        ids = [w.id for p in pages for w in p.items]
        assert len(ids) == len(set(ids)) == 23

    async def test_ordering_date_then_created(
        self, query_service, wager_service, db, owner_id, bankroll_id
    ) -> None:
        old = await _add(wager_service, db, owner_id, bankroll_id, "won", day=DAY - timedelta(days=2))
        first_today = await _add(wager_service, db, owner_id, bankroll_id, "won")
        second_today = await _add(wager_service, db, owner_id, bankroll_id, "won")

        page = await query_service.history_page(db, owner_id, bankroll_id)

        assert [w.id for w in page.items] == [
            second_today.wager.id,
            first_today.wager.id,
            old.wager.id,
        ]

    async def test_outcome_filter(
        self, query_service, wager_service, db, owner_id, bankroll_id
    ) -> None:
        await _add(wager_service, db, owner_id, bankroll_id, "won")
        await _add(wager_service, db, owner_id, bankroll_id, "open")
        await _add(wager_service, db, owner_id, bankroll_id, "open")

        page = await query_service.history_page(db, owner_id, bankroll_id, "open")

        assert page.total == 2
        assert {w.outcome.value for w in page.items} == {"open"}
        assert page.outcome_filter.value == "open"

    async def test_unknown_filter(self, query_service, db, owner_id, bankroll_id) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await query_service.history_page(db, owner_id, bankroll_id, "pending")
        assert exc_info.value.field == "outcome"

    async def test_page_below_one(self, query_service, db, owner_id, bankroll_id) -> None:
        with pytest.raises(ValidationError):
            await query_service.history_page(db, owner_id, bankroll_id, "all", 0)

    async def test_unknown_bankroll(self, query_service, db, owner_id) -> None:
        with pytest.raises(BankrollNotFoundError):
            await query_service.history_page(db, owner_id, str(uuid.uuid4()))
