"""Repository Protocol — dependency inversion for testability.

Unit tests inject an in-memory implementation that conforms to this Protocol.
Infrastructure layer provides the real implementation.

Every method takes owner_id: there is no unscoped read or write.
"""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_wager.domain.models import Wager, WagerDraft


class WagerRepositoryProtocol(Protocol):
    async def insert_wager(
        self,
        db: AsyncSession,
        owner_id: str,
        draft: WagerDraft,
        profit: Decimal | None,
    ) -> Wager: ...

    async def get_wager(
        self,
        db: AsyncSession,
        owner_id: str,
        wager_id: str,
        for_update: bool = False,
    ) -> Wager | None: ...

    async def update_wager(
        self, db: AsyncSession, owner_id: str, wager: Wager
    ) -> Wager | None: ...

    async def delete_wager(
        self, db: AsyncSession, owner_id: str, wager_id: str
    ) -> Wager | None: ...
