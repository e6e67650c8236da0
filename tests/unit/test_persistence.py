"""Unit tests for the raw-SQL repositories using MagicMock AsyncSession."""

from datetime import UTC, date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.bl_bankroll.infrastructure.persistence import BankrollRepository
from src.bl_common.enums import WagerOutcome
from src.bl_common.errors import InternalError
from src.bl_query.infrastructure.persistence import QueryRepository
from src.bl_wager.domain.models import WagerDraft
from src.bl_wager.infrastructure.persistence import WagerRepository, row_to_wager


def _make_bankroll_row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", "b-1")
    row.owner_id = kwargs.get("owner_id", "u-1")
    row.name = kwargs.get("name", "Main")
    row.initial_balance = kwargs.get("initial_balance", Decimal("1000.00"))
    row.current_balance = kwargs.get("current_balance", Decimal("1000.00"))
    row.created_at = datetime.now(UTC)
    row.updated_at = datetime.now(UTC)
    return row


def _make_wager_row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", "w-1")
    row.bankroll_id = kwargs.get("bankroll_id", "b-1")
    row.owner_id = kwargs.get("owner_id", "u-1")
    row.stake = kwargs.get("stake", Decimal("100.00"))
    row.odds = kwargs.get("odds", Decimal("2.500"))
    row.outcome = kwargs.get("outcome", "won")
    row.bet_type = "simple"
    row.note = None
    row.profit = kwargs.get("profit", Decimal("150.00"))
    row.settlement_date = date(2026, 10, 19)
    row.created_at = datetime.now(UTC)
    row.updated_at = datetime.now(UTC)
    return row


def _result(fetchone=None, fetchall=None, scalar=None, rowcount=None):
    result = MagicMock()
    result.fetchone.return_value = fetchone
    result.fetchall.return_value = fetchall or []
    result.scalar_one.return_value = scalar
    result.rowcount = rowcount
    return result


@pytest.fixture
def db():
    return MagicMock()


def _sql_of(call) -> str:
    return str(call.args[0])


class TestBankrollRepository:
    async def test_create_sets_current_to_initial(self, db):
        db.execute = AsyncMock(return_value=_result(fetchone=_make_bankroll_row()))
        bankroll = await BankrollRepository().create_bankroll(db, "u-1", "Main", Decimal("1000"))

        assert bankroll.current_balance == Decimal("1000.00")
        sql = _sql_of(db.execute.call_args)
        assert "VALUES (:owner_id, :name, :initial_balance, :initial_balance)" in sql

    async def test_create_without_row_raises_internal(self, db):
        db.execute = AsyncMock(return_value=_result(fetchone=None))
        with pytest.raises(InternalError):
            await BankrollRepository().create_bankroll(db, "u-1", "Main", Decimal("1"))

    async def test_get_for_update_locks_row(self, db):
        db.execute = AsyncMock(return_value=_result(fetchone=_make_bankroll_row()))
        await BankrollRepository().get_bankroll(db, "u-1", "b-1", for_update=True)
        assert "FOR UPDATE" in _sql_of(db.execute.call_args)

    async def test_get_is_owner_scoped(self, db):
        db.execute = AsyncMock(return_value=_result(fetchone=None))
        assert await BankrollRepository().get_bankroll(db, "u-2", "b-1") is None
        params = db.execute.call_args.args[1]
        assert params == {"bankroll_id": "b-1", "owner_id": "u-2"}
        assert "owner_id = :owner_id" in _sql_of(db.execute.call_args)

    async def test_list_newest_first(self, db):
        rows = [_make_bankroll_row(id="b-2"), _make_bankroll_row(id="b-1")]
        db.execute = AsyncMock(return_value=_result(fetchall=rows))
        bankrolls = await BankrollRepository().list_bankrolls(db, "u-1")
        assert [b.id for b in bankrolls] == ["b-2", "b-1"]
        assert "ORDER BY created_at DESC" in _sql_of(db.execute.call_args)

    async def test_delete_returns_wager_count(self, db):
        db.execute = AsyncMock(
            side_effect=[_result(rowcount=3), _result(fetchone=MagicMock(id="b-1"))]
        )
        assert await BankrollRepository().delete_bankroll(db, "u-1", "b-1") == 3
        first_sql = _sql_of(db.execute.call_args_list[0])
        assert "DELETE FROM wagers" in first_sql

    async def test_delete_missing_returns_none(self, db):
        db.execute = AsyncMock(side_effect=[_result(rowcount=0), _result(fetchone=None)])
        assert await BankrollRepository().delete_bankroll(db, "u-1", "b-x") is None

    async def test_reconcile_reaggregates_settled_profit(self, db):
        db.execute = AsyncMock(
            return_value=_result(fetchone=MagicMock(current_balance=Decimal("1100.00")))
        )
        balance = await BankrollRepository().reconcile_balance(db, "u-1", "b-1")

        assert balance == Decimal("1100.00")
        sql = _sql_of(db.execute.call_args)
        assert "SUM(w.profit)" in sql
        assert "w.outcome <> 'open'" in sql

    async def test_reconcile_missing_returns_none(self, db):
        db.execute = AsyncMock(return_value=_result(fetchone=None))
        assert await BankrollRepository().reconcile_balance(db, "u-1", "b-x") is None


class TestWagerRepository:
    def test_row_mapping_open_wager_keeps_null_profit(self):
        wager = row_to_wager(_make_wager_row(outcome="open", profit=None))
        assert wager.outcome is WagerOutcome.OPEN
        assert wager.profit is None

    async def test_insert_passes_profit_and_outcome(self, db):
        db.execute = AsyncMock(return_value=_result(fetchone=_make_wager_row()))
        draft = WagerDraft(
            bankroll_id="b-1",
            stake=Decimal("100.00"),
            odds=Decimal("2.500"),
            outcome=WagerOutcome.WON,
            settlement_date=date(2026, 10, 19),
        )
        wager = await WagerRepository().insert_wager(db, "u-1", draft, Decimal("150.00"))

        params = db.execute.call_args.args[1]
        assert params["profit"] == Decimal("150.00")
        assert params["outcome"] == "won"
        assert params["owner_id"] == "u-1"
        assert wager.profit == Decimal("150.00")

    async def test_get_for_update(self, db):
        db.execute = AsyncMock(return_value=_result(fetchone=_make_wager_row()))
        await WagerRepository().get_wager(db, "u-1", "w-1", for_update=True)
        assert "FOR UPDATE" in _sql_of(db.execute.call_args)

    async def test_update_missing_returns_none(self, db):
        db.execute = AsyncMock(return_value=_result(fetchone=None))
        wager = row_to_wager(_make_wager_row())
        assert await WagerRepository().update_wager(db, "u-1", wager) is None

    async def test_delete_returns_deleted_row(self, db):
        db.execute = AsyncMock(return_value=_result(fetchone=_make_wager_row(id="w-9")))
        deleted = await WagerRepository().delete_wager(db, "u-1", "w-9")
        assert deleted is not None and deleted.id == "w-9"


class TestQueryRepository:
    async def test_daily_stats_maps_aggregate_row(self, db):
        row = MagicMock(
            count=3, won_count=1, lost_count=1, open_count=1,
            net_profit=Decimal("100.00"), total_staked=Decimal("200.00"),
        )
        db.execute = AsyncMock(return_value=_result(fetchone=row))
        stats = await QueryRepository().daily_stats(db, "u-1", "b-1", date(2026, 10, 19))

        assert stats.count == 3
        assert stats.open_count == 1
        assert stats.net_profit == Decimal("100.00")
        assert "FILTER (WHERE outcome <> 'open')" in _sql_of(db.execute.call_args)

    async def test_history_order_and_window(self, db):
        db.execute = AsyncMock(return_value=_result(fetchall=[_make_wager_row()]))
        items = await QueryRepository().list_history(
            db, "u-1", "b-1", WagerOutcome.LOST, limit=10, offset=20
        )

        assert len(items) == 1
        sql = _sql_of(db.execute.call_args)
        assert "ORDER BY settlement_date DESC, created_at DESC, id DESC" in sql
        params = db.execute.call_args.args[1]
        assert (params["limit"], params["offset"], params["outcome"]) == (10, 20, "lost")

    async def test_count_history_all_passes_null_outcome(self, db):
        db.execute = AsyncMock(return_value=_result(scalar=7))
        total = await QueryRepository().count_history(db, "u-1", "b-1", None)
        assert total == 7
        assert db.execute.call_args.args[1]["outcome"] is None
