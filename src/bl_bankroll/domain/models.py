"""Domain models for bl_bankroll — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal


@dataclass
class Bankroll:
    id: str
    owner_id: str
    name: str
    initial_balance: Decimal   # fixed at creation
    current_balance: Decimal   # written only by the reconciler
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def net_profit(self) -> Decimal:
        return self.current_balance - self.initial_balance

    @property
    def roi_percent(self) -> Decimal | None:
        """Return on the initial balance, in percent. None for a zero-funded bankroll."""
        if self.initial_balance == 0:
            return None
        roi = self.net_profit / self.initial_balance * 100
        return roi.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
