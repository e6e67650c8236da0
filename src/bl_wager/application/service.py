"""WagerApplicationService — the wager write path.

Every write is one SERIALIZABLE owner-scoped transaction:

    validate → lock bankroll → settle → persist wager → reconcile bankroll → commit

Validation happens before the transaction opens. If anything inside fails,
neither the wager row nor the balance is committed.

Lock order is always bankroll row, then wager row, so two writers on the
same bankroll queue behind each other instead of deadlocking.
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_bankroll.domain.reconciler import BalanceReconciler
from src.bl_bankroll.domain.repository import BankrollRepositoryProtocol
from src.bl_bankroll.infrastructure.persistence import BankrollRepository
from src.bl_common.database import owner_transaction
from src.bl_common.enums import WagerOutcome
from src.bl_common.errors import BankrollNotFoundError, ValidationError, WagerNotFoundError
from src.bl_common.ids import is_valid_id
from src.bl_common.money import money_to_display
from src.bl_wager.application.schemas import (
    DeleteWagerResponse,
    WagerResponse,
    WagerWriteResponse,
)
from src.bl_wager.domain.models import WagerDraft
from src.bl_wager.domain.repository import WagerRepositoryProtocol
from src.bl_wager.domain.validators import (
    validate_bankroll_selection,
    validate_bet_type,
    validate_note,
    validate_odds,
    validate_outcome,
    validate_settlement_date,
    validate_stake,
)
from src.bl_wager.infrastructure.persistence import WagerRepository

logger = logging.getLogger(__name__)

# Default for fields where None is a meaningful value (a note can be cleared).
_UNCHANGED = object()

Amount = Decimal | int | float | str


class WagerApplicationService:
    def __init__(
        self,
        repo: WagerRepositoryProtocol | None = None,
        bankroll_repo: BankrollRepositoryProtocol | None = None,
    ) -> None:
        self._repo: WagerRepositoryProtocol = repo or WagerRepository()
        self._bankrolls: BankrollRepositoryProtocol = bankroll_repo or BankrollRepository()
        self._reconciler = BalanceReconciler(self._bankrolls)

    async def create_wager(
        self,
        db: AsyncSession,
        owner_id: str,
        bankroll_id: str | None,
        stake: Amount | None,
        odds: Amount | None,
        outcome: WagerOutcome | str | None = WagerOutcome.OPEN,
        note: str | None = None,
        settlement_date: date | str | None = None,
        bet_type: str | None = None,
    ) -> WagerWriteResponse:
        draft = WagerDraft(
            bankroll_id=validate_bankroll_selection(bankroll_id),
            stake=validate_stake(stake),
            odds=validate_odds(odds),
            outcome=validate_outcome(outcome),
            settlement_date=validate_settlement_date(settlement_date),
            bet_type=validate_bet_type(bet_type),
            note=validate_note(note),
        )
        if not is_valid_id(draft.bankroll_id):
            raise BankrollNotFoundError(draft.bankroll_id)

        async with owner_transaction(db, owner_id, serializable=True):
            await self._lock_bankroll(db, owner_id, draft.bankroll_id)
            settlement = draft.settlement()
            wager = await self._repo.insert_wager(db, owner_id, draft, settlement.profit)
            balance = await self._reconciler.reconcile(db, owner_id, draft.bankroll_id)

        logger.info(
            "Wager created: id=%s bankroll=%s outcome=%s profit=%s balance=%s",
            wager.id,
            wager.bankroll_id,
            wager.outcome.value,
            wager.profit,
            balance,
        )
        return WagerWriteResponse.from_result(wager, balance)

    async def get_wager(self, db: AsyncSession, owner_id: str, wager_id: str) -> WagerResponse:
        if not is_valid_id(wager_id):
            raise WagerNotFoundError(wager_id)
        async with owner_transaction(db, owner_id):
            wager = await self._repo.get_wager(db, owner_id, wager_id)
        if wager is None:
            raise WagerNotFoundError(wager_id)
        return WagerResponse.from_domain(wager)

    async def update_wager_outcome(
        self,
        db: AsyncSession,
        owner_id: str,
        wager_id: str,
        outcome: WagerOutcome | str | None,
    ) -> WagerWriteResponse:
        """Settle, resettle or reopen a wager. Any transition among open/won/lost is allowed."""
        if outcome is None:
            raise ValidationError("outcome", "is required")
        return await self.update_wager(db, owner_id, wager_id, outcome=outcome)

    async def update_wager(
        self,
        db: AsyncSession,
        owner_id: str,
        wager_id: str,
        *,
        stake: Amount | None = None,
        odds: Amount | None = None,
        outcome: WagerOutcome | str | None = None,
        note: str | None | object = _UNCHANGED,
        bet_type: str | None = None,
        settlement_date: date | str | None = None,
    ) -> WagerWriteResponse:
        """Partial update. Profit is always recomputed from the resulting fields.

        None leaves a field unchanged, except ``note``: an explicit None clears it.
        """
        changes: dict[str, object] = {}
        if stake is not None:
            changes["stake"] = validate_stake(stake)
        if odds is not None:
            changes["odds"] = validate_odds(odds)
        if outcome is not None:
            changes["outcome"] = validate_outcome(outcome)
        if note is not _UNCHANGED:
            changes["note"] = validate_note(note)  # type: ignore[arg-type]
        if bet_type is not None:
            changes["bet_type"] = validate_bet_type(bet_type)
        if settlement_date is not None:
            changes["settlement_date"] = validate_settlement_date(settlement_date)
        if not is_valid_id(wager_id):
            raise WagerNotFoundError(wager_id)

        async with owner_transaction(db, owner_id, serializable=True):
            current = await self._repo.get_wager(db, owner_id, wager_id)
            if current is None:
                raise WagerNotFoundError(wager_id)
            await self._lock_bankroll(db, owner_id, current.bankroll_id)
            # Re-read under lock: the unlocked read only told us which bankroll to lock
            current = await self._repo.get_wager(db, owner_id, wager_id, for_update=True)
            if current is None:
                raise WagerNotFoundError(wager_id)
            previous_outcome = current.outcome
            updated = await self._repo.update_wager(
                db, owner_id, current.resettled(**changes)
            )
            if updated is None:
                raise WagerNotFoundError(wager_id)
            balance = await self._reconciler.reconcile(db, owner_id, updated.bankroll_id)

        logger.info(
            "Wager updated: id=%s outcome=%s->%s profit=%s balance=%s",
            updated.id,
            previous_outcome.value,
            updated.outcome.value,
            updated.profit,
            balance,
        )
        return WagerWriteResponse.from_result(updated, balance)

    async def delete_wager(
        self, db: AsyncSession, owner_id: str, wager_id: str
    ) -> DeleteWagerResponse:
        """Remove a wager and its profit contribution from the bankroll balance."""
        if not is_valid_id(wager_id):
            raise WagerNotFoundError(wager_id)
        async with owner_transaction(db, owner_id, serializable=True):
            wager = await self._repo.get_wager(db, owner_id, wager_id)
            if wager is None:
                raise WagerNotFoundError(wager_id)
            await self._lock_bankroll(db, owner_id, wager.bankroll_id)
            deleted = await self._repo.delete_wager(db, owner_id, wager_id)
            if deleted is None:
                raise WagerNotFoundError(wager_id)
            balance = await self._reconciler.reconcile(db, owner_id, deleted.bankroll_id)

        logger.info(
            "Wager deleted: id=%s bankroll=%s balance=%s", wager_id, deleted.bankroll_id, balance
        )
        return DeleteWagerResponse(
            id=wager_id,
            bankroll_id=deleted.bankroll_id,
            bankroll_balance=balance,
            bankroll_balance_display=money_to_display(balance),
        )

    async def _lock_bankroll(self, db: AsyncSession, owner_id: str, bankroll_id: str) -> None:
        bankroll = await self._bankrolls.get_bankroll(db, owner_id, bankroll_id, for_update=True)
        if bankroll is None:
            raise BankrollNotFoundError(bankroll_id)
