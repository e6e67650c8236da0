"""Repository Protocol — dependency inversion for testability.

Unit tests inject an in-memory implementation that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_bankroll.domain.models import Bankroll


class BankrollRepositoryProtocol(Protocol):
    async def create_bankroll(
        self, db: AsyncSession, owner_id: str, name: str, initial_balance: Decimal
    ) -> Bankroll: ...

    async def get_bankroll(
        self,
        db: AsyncSession,
        owner_id: str,
        bankroll_id: str,
        for_update: bool = False,
    ) -> Bankroll | None: ...

    async def list_bankrolls(self, db: AsyncSession, owner_id: str) -> list[Bankroll]: ...

    async def delete_bankroll(
        self, db: AsyncSession, owner_id: str, bankroll_id: str
    ) -> int | None:
        """Delete the bankroll and its wagers. Returns wagers removed, None if not found."""
        ...

    async def reconcile_balance(
        self, db: AsyncSession, owner_id: str, bankroll_id: str
    ) -> Decimal | None:
        """Recompute and persist current_balance. None if the bankroll is not found."""
        ...
