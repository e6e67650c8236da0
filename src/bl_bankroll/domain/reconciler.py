"""Balance reconciler — keeps current_balance equal to the ledger it summarizes.

Invariant: current_balance == initial_balance + Σ profit(wagers of the bankroll with outcome != open)

Reconciliation is a full re-aggregation, never an incremental delta, so
running it twice on the same committed state yields the same balance and a
retry after a failed transaction needs no compensation logic.

It must run inside the same transaction as the wager write that triggered it
(see bl_wager.application.service); on its own it is also the repair path
exposed as POST /bankrolls/{id}/reconcile.
"""

import logging
from collections.abc import Iterable
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_bankroll.domain.repository import BankrollRepositoryProtocol
from src.bl_common.errors import BankrollNotFoundError
from src.bl_common.money import quantize_money

logger = logging.getLogger(__name__)


def expected_balance(initial_balance: Decimal, profits: Iterable[Decimal | None]) -> Decimal:
    """Pure form of the invariant. Open wagers carry profit None and add nothing."""
    settled = sum((p for p in profits if p is not None), Decimal("0"))
    return quantize_money(initial_balance + settled)


class BalanceReconciler:
    def __init__(self, repo: BankrollRepositoryProtocol) -> None:
        self._repo = repo

    async def reconcile(self, db: AsyncSession, owner_id: str, bankroll_id: str) -> Decimal:
        balance = await self._repo.reconcile_balance(db, owner_id, bankroll_id)
        if balance is None:
            raise BankrollNotFoundError(bankroll_id)
        logger.debug("Reconciled bankroll=%s balance=%s", bankroll_id, balance)
        return balance
