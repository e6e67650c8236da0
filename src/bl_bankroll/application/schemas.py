"""Pydantic schemas for bl_bankroll API.

Amounts are Decimal and serialize as strings ("1150.00") under
model_dump(mode="json"); *_display fields are preformatted for the UI.
"""

from decimal import Decimal

from pydantic import BaseModel

from src.bl_bankroll.domain.models import Bankroll
from src.bl_common.money import money_to_display

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateBankrollRequest(BaseModel):
    # Range checks live in domain validators so violations share one error envelope
    name: str
    initial_balance: Decimal


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BankrollResponse(BaseModel):
    id: str
    name: str
    initial_balance: Decimal
    initial_balance_display: str
    current_balance: Decimal
    current_balance_display: str
    net_profit: Decimal
    net_profit_display: str
    roi_percent: Decimal | None
    created_at: str  # ISO8601 string

    @classmethod
    def from_domain(cls, bankroll: Bankroll) -> "BankrollResponse":
        return cls(
            id=bankroll.id,
            name=bankroll.name,
            initial_balance=bankroll.initial_balance,
            initial_balance_display=money_to_display(bankroll.initial_balance),
            current_balance=bankroll.current_balance,
            current_balance_display=money_to_display(bankroll.current_balance),
            net_profit=bankroll.net_profit,
            net_profit_display=money_to_display(bankroll.net_profit),
            roi_percent=bankroll.roi_percent,
            created_at=bankroll.created_at.isoformat() if bankroll.created_at else "",
        )


class BankrollListResponse(BaseModel):
    items: list[BankrollResponse]


class DeleteBankrollResponse(BaseModel):
    id: str
    deleted_wagers: int


class ReconcileResponse(BaseModel):
    id: str
    previous_balance: Decimal
    current_balance: Decimal
    current_balance_display: str
    drift: Decimal   # non-zero means the stored balance had diverged and was repaired

    @classmethod
    def from_result(
        cls, bankroll_id: str, previous: Decimal, current: Decimal
    ) -> "ReconcileResponse":
        return cls(
            id=bankroll_id,
            previous_balance=previous,
            current_balance=current,
            current_balance_display=money_to_display(current),
            drift=current - previous,
        )
