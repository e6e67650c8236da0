"""In-memory ledger for service-level unit tests.

The fake repositories share one InMemoryLedger. The mocked AsyncSession's
begin() snapshots the ledger and restores it when the block raises, so
rollback behaves like the real store.
"""

import copy
import itertools
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.bl_bankroll.application.service import BankrollApplicationService
from src.bl_bankroll.domain.models import Bankroll
from src.bl_bankroll.domain.reconciler import expected_balance
from src.bl_common.enums import WagerOutcome
from src.bl_query.application.service import QueryApplicationService
from src.bl_query.domain.models import DailyStats
from src.bl_wager.application.service import WagerApplicationService
from src.bl_wager.domain.models import Wager, WagerDraft


class InMemoryLedger:
    def __init__(self) -> None:
        self.bankrolls: dict[str, Bankroll] = {}
        self.wagers: dict[str, Wager] = {}
        self._tick = itertools.count()

    def next_timestamp(self) -> datetime:
        return datetime(2026, 1, 1, tzinfo=UTC) + timedelta(seconds=next(self._tick))

    def wagers_of(self, owner_id: str, bankroll_id: str) -> list[Wager]:
        return [
            w for w in self.wagers.values()
            if w.owner_id == owner_id and w.bankroll_id == bankroll_id
        ]

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        snapshot = (copy.deepcopy(self.bankrolls), copy.deepcopy(self.wagers))
        try:
            yield
        except BaseException:
            self.bankrolls, self.wagers = snapshot
            raise


class FakeBankrollRepository:
    def __init__(self, ledger: InMemoryLedger) -> None:
        self.ledger = ledger

    async def create_bankroll(self, db, owner_id, name, initial_balance):
        bankroll = Bankroll(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            name=name,
            initial_balance=initial_balance,
            current_balance=initial_balance,
            created_at=self.ledger.next_timestamp(),
        )
        self.ledger.bankrolls[bankroll.id] = bankroll
        return replace(bankroll)

    async def get_bankroll(self, db, owner_id, bankroll_id, for_update=False):
        bankroll = self.ledger.bankrolls.get(bankroll_id)
        if bankroll is None or bankroll.owner_id != owner_id:
            return None
        return replace(bankroll)

    async def list_bankrolls(self, db, owner_id):
        owned = [b for b in self.ledger.bankrolls.values() if b.owner_id == owner_id]
        owned.sort(key=lambda b: (b.created_at, b.id), reverse=True)
        return [replace(b) for b in owned]

    async def delete_bankroll(self, db, owner_id, bankroll_id):
        if await self.get_bankroll(db, owner_id, bankroll_id) is None:
            return None
        doomed = [w.id for w in self.ledger.wagers_of(owner_id, bankroll_id)]
        for wager_id in doomed:
            del self.ledger.wagers[wager_id]
        del self.ledger.bankrolls[bankroll_id]
        return len(doomed)

    async def reconcile_balance(self, db, owner_id, bankroll_id):
        bankroll = self.ledger.bankrolls.get(bankroll_id)
        if bankroll is None or bankroll.owner_id != owner_id:
            return None
        profits = [
            w.profit for w in self.ledger.wagers_of(owner_id, bankroll_id)
            if w.outcome is not WagerOutcome.OPEN
        ]
        bankroll.current_balance = expected_balance(bankroll.initial_balance, profits)
        return bankroll.current_balance


class FakeWagerRepository:
    def __init__(self, ledger: InMemoryLedger) -> None:
        self.ledger = ledger

    async def insert_wager(self, db, owner_id, draft: WagerDraft, profit):
        wager = Wager(
            id=str(uuid.uuid4()),
            bankroll_id=draft.bankroll_id,
            owner_id=owner_id,
            stake=draft.stake,
            odds=draft.odds,
            outcome=draft.outcome,
            settlement_date=draft.settlement_date,
            profit=profit,
            bet_type=draft.bet_type,
            note=draft.note,
            created_at=self.ledger.next_timestamp(),
        )
        self.ledger.wagers[wager.id] = wager
        return replace(wager)

    async def get_wager(self, db, owner_id, wager_id, for_update=False):
        wager = self.ledger.wagers.get(wager_id)
        if wager is None or wager.owner_id != owner_id:
            return None
        return replace(wager)

    async def update_wager(self, db, owner_id, wager: Wager):
        if await self.get_wager(db, owner_id, wager.id) is None:
            return None
        self.ledger.wagers[wager.id] = replace(wager)
        return replace(wager)

    async def delete_wager(self, db, owner_id, wager_id):
        wager = await self.get_wager(db, owner_id, wager_id)
        if wager is None:
            return None
        del self.ledger.wagers[wager_id]
        return wager


class FakeQueryRepository:
    def __init__(self, ledger: InMemoryLedger) -> None:
        self.ledger = ledger

    def _day(self, owner_id: str, bankroll_id: str, day: date) -> list[Wager]:
        rows = [
            w for w in self.ledger.wagers_of(owner_id, bankroll_id)
            if w.settlement_date == day
        ]
        rows.sort(key=lambda w: (w.created_at, w.id), reverse=True)
        return rows

    def _history(self, owner_id, bankroll_id, outcome) -> list[Wager]:
        rows = [
            w for w in self.ledger.wagers_of(owner_id, bankroll_id)
            if outcome is None or w.outcome is outcome
        ]
        rows.sort(key=lambda w: (w.settlement_date, w.created_at, w.id), reverse=True)
        return rows

    async def daily_stats(self, db, owner_id, bankroll_id, day):
        return DailyStats.from_wagers(bankroll_id, day, self._day(owner_id, bankroll_id, day))

    async def list_daily_wagers(self, db, owner_id, bankroll_id, day):
        return [replace(w) for w in self._day(owner_id, bankroll_id, day)]

    async def count_history(self, db, owner_id, bankroll_id, outcome):
        return len(self._history(owner_id, bankroll_id, outcome))

    async def list_history(self, db, owner_id, bankroll_id, outcome, limit, offset):
        rows = self._history(owner_id, bankroll_id, outcome)
        return [replace(w) for w in rows[offset:offset + limit]]


@pytest.fixture
def owner_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def other_owner_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def ledger() -> InMemoryLedger:
    return InMemoryLedger()


@pytest.fixture
def bankroll_repo(ledger: InMemoryLedger) -> FakeBankrollRepository:
    return FakeBankrollRepository(ledger)


@pytest.fixture
def wager_repo(ledger: InMemoryLedger) -> FakeWagerRepository:
    return FakeWagerRepository(ledger)


@pytest.fixture
def query_repo(ledger: InMemoryLedger) -> FakeQueryRepository:
    return FakeQueryRepository(ledger)


@pytest.fixture
def db(ledger: InMemoryLedger) -> MagicMock:
    """AsyncSession stand-in whose begin() is backed by the in-memory ledger."""
    session = MagicMock()
    session.in_transaction = MagicMock(return_value=False)
    session.rollback = AsyncMock()
    session.connection = AsyncMock()
    session.execute = AsyncMock()
    session.begin = MagicMock(side_effect=lambda: ledger.transaction())
    return session


@pytest.fixture
def bankroll_service(bankroll_repo: FakeBankrollRepository) -> BankrollApplicationService:
    return BankrollApplicationService(repo=bankroll_repo)


@pytest.fixture
def wager_service(
    wager_repo: FakeWagerRepository, bankroll_repo: FakeBankrollRepository
) -> WagerApplicationService:
    return WagerApplicationService(repo=wager_repo, bankroll_repo=bankroll_repo)


@pytest.fixture
def query_service(
    query_repo: FakeQueryRepository, bankroll_repo: FakeBankrollRepository
) -> QueryApplicationService:
    return QueryApplicationService(repo=query_repo, bankroll_repo=bankroll_repo, page_size=10)


@pytest.fixture
def balance_of(ledger: InMemoryLedger):
    """Stored current_balance of a bankroll, read straight from the ledger."""

    def _balance(bankroll_id: str) -> Decimal:
        return ledger.bankrolls[bankroll_id].current_balance

    return _balance
