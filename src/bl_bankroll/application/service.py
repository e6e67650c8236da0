"""BankrollApplicationService — bankroll store operations for one owner.

Every call opens its own `owner_transaction`; writes commit on success and
roll back on any error. Reads never fail on an empty result set.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_bankroll.application.schemas import (
    BankrollListResponse,
    BankrollResponse,
    DeleteBankrollResponse,
    ReconcileResponse,
)
from src.bl_bankroll.domain.reconciler import BalanceReconciler
from src.bl_bankroll.domain.repository import BankrollRepositoryProtocol
from src.bl_bankroll.domain.validators import validate_initial_balance, validate_name
from src.bl_bankroll.infrastructure.persistence import BankrollRepository
from src.bl_common.database import owner_transaction
from src.bl_common.errors import BankrollNotFoundError
from src.bl_common.ids import is_valid_id

logger = logging.getLogger(__name__)


class BankrollApplicationService:
    def __init__(self, repo: BankrollRepositoryProtocol | None = None) -> None:
        self._repo: BankrollRepositoryProtocol = repo or BankrollRepository()
        self._reconciler = BalanceReconciler(self._repo)

    async def create_bankroll(
        self, db: AsyncSession, owner_id: str, name: str | None, initial_balance: object
    ) -> BankrollResponse:
        name = validate_name(name)
        balance = validate_initial_balance(initial_balance)  # type: ignore[arg-type]
        async with owner_transaction(db, owner_id):
            bankroll = await self._repo.create_bankroll(db, owner_id, name, balance)
        logger.info(
            "Bankroll created: id=%s owner=%s initial=%s", bankroll.id, owner_id, balance
        )
        return BankrollResponse.from_domain(bankroll)

    async def get_bankroll(
        self, db: AsyncSession, owner_id: str, bankroll_id: str
    ) -> BankrollResponse:
        if not is_valid_id(bankroll_id):
            raise BankrollNotFoundError(bankroll_id)
        async with owner_transaction(db, owner_id):
            bankroll = await self._repo.get_bankroll(db, owner_id, bankroll_id)
        if bankroll is None:
            raise BankrollNotFoundError(bankroll_id)
        return BankrollResponse.from_domain(bankroll)

    async def list_bankrolls(self, db: AsyncSession, owner_id: str) -> BankrollListResponse:
        async with owner_transaction(db, owner_id):
            bankrolls = await self._repo.list_bankrolls(db, owner_id)
        return BankrollListResponse(items=[BankrollResponse.from_domain(b) for b in bankrolls])

    async def delete_bankroll(
        self, db: AsyncSession, owner_id: str, bankroll_id: str
    ) -> DeleteBankrollResponse:
        """Delete a bankroll and, in the same transaction, every wager it owns."""
        if not is_valid_id(bankroll_id):
            raise BankrollNotFoundError(bankroll_id)
        async with owner_transaction(db, owner_id, serializable=True):
            deleted_wagers = await self._repo.delete_bankroll(db, owner_id, bankroll_id)
            if deleted_wagers is None:
                raise BankrollNotFoundError(bankroll_id)
        logger.info(
            "Bankroll deleted: id=%s owner=%s wagers=%d", bankroll_id, owner_id, deleted_wagers
        )
        return DeleteBankrollResponse(id=bankroll_id, deleted_wagers=deleted_wagers)

    async def reconcile_bankroll(
        self, db: AsyncSession, owner_id: str, bankroll_id: str
    ) -> ReconcileResponse:
        """Re-run reconciliation on committed state. Idempotent; used for retry/repair."""
        if not is_valid_id(bankroll_id):
            raise BankrollNotFoundError(bankroll_id)
        async with owner_transaction(db, owner_id, serializable=True):
            bankroll = await self._repo.get_bankroll(db, owner_id, bankroll_id, for_update=True)
            if bankroll is None:
                raise BankrollNotFoundError(bankroll_id)
            balance = await self._reconciler.reconcile(db, owner_id, bankroll_id)
        if balance != bankroll.current_balance:
            logger.warning(
                "Bankroll balance drift repaired: id=%s stored=%s reconciled=%s",
                bankroll_id,
                bankroll.current_balance,
                balance,
            )
        return ReconcileResponse.from_result(bankroll_id, bankroll.current_balance, balance)
