"""Domain models for bl_wager — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal

from src.bl_common.enums import WagerOutcome
from src.bl_wager.domain.settlement import Settlement, settle


@dataclass
class WagerDraft:
    """Validated input for a new wager; profit is derived at write time."""
    bankroll_id: str
    stake: Decimal
    odds: Decimal
    outcome: WagerOutcome
    settlement_date: date
    bet_type: str = "simple"
    note: str | None = None

    def settlement(self) -> Settlement:
        return settle(self.stake, self.odds, self.outcome)


@dataclass
class Wager:
    id: str
    bankroll_id: str
    owner_id: str
    stake: Decimal            # > 0, 2 dp
    odds: Decimal             # >= 1, decimal odds
    outcome: WagerOutcome
    settlement_date: date
    profit: Decimal | None    # None while open
    bet_type: str = "simple"
    note: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_settled(self) -> bool:
        return self.outcome.is_settled

    def settlement(self) -> Settlement:
        return settle(self.stake, self.odds, self.outcome)

    def resettled(self, **changes: object) -> "Wager":
        """Copy with field changes applied and profit recomputed from them."""
        updated = replace(self, **changes)
        updated.profit = updated.settlement().profit
        return updated
