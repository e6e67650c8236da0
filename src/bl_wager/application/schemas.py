"""Pydantic schemas for bl_wager API.

profit is null while a wager is open; profit_display reads "undetermined"
so an open wager is never shown as a zero result.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from src.bl_common.enums import WagerOutcome
from src.bl_common.money import money_to_display
from src.bl_wager.domain.models import Wager

UNDETERMINED = "undetermined"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateWagerRequest(BaseModel):
    # stake/odds/bankroll_id are checked by domain validators, not here,
    # so every violation comes back as a ValidationError naming the field
    bankroll_id: str | None = None
    stake: Decimal | None = None
    odds: Decimal | None = None
    outcome: str = WagerOutcome.OPEN.value
    note: str | None = None
    bet_type: str | None = None
    settlement_date: str | None = None  # YYYY-MM-DD, defaults to today (UTC)


class UpdateOutcomeRequest(BaseModel):
    outcome: str


class UpdateWagerRequest(BaseModel):
    """Partial update; omitted fields keep their current value. "note": null clears the note."""
    stake: Decimal | None = None
    odds: Decimal | None = None
    outcome: str | None = None
    note: str | None = None
    bet_type: str | None = None
    settlement_date: str | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class WagerResponse(BaseModel):
    id: str
    bankroll_id: str
    stake: Decimal
    stake_display: str
    odds: Decimal
    outcome: WagerOutcome
    profit: Decimal | None
    profit_display: str
    payout: Decimal | None
    bet_type: str
    note: str | None
    settlement_date: date
    created_at: str  # ISO8601 string

    @classmethod
    def from_domain(cls, wager: Wager) -> "WagerResponse":
        settlement = wager.settlement()
        return cls(
            id=wager.id,
            bankroll_id=wager.bankroll_id,
            stake=wager.stake,
            stake_display=money_to_display(wager.stake),
            odds=wager.odds,
            outcome=wager.outcome,
            profit=wager.profit,
            profit_display=(
                money_to_display(wager.profit) if wager.profit is not None else UNDETERMINED
            ),
            payout=settlement.payout,
            bet_type=wager.bet_type,
            note=wager.note,
            settlement_date=wager.settlement_date,
            created_at=wager.created_at.isoformat() if wager.created_at else "",
        )


class WagerWriteResponse(BaseModel):
    """Result of a wager write: the wager plus its bankroll's reconciled balance."""
    wager: WagerResponse
    bankroll_id: str
    bankroll_balance: Decimal
    bankroll_balance_display: str

    @classmethod
    def from_result(cls, wager: Wager, balance: Decimal) -> "WagerWriteResponse":
        return cls(
            wager=WagerResponse.from_domain(wager),
            bankroll_id=wager.bankroll_id,
            bankroll_balance=balance,
            bankroll_balance_display=money_to_display(balance),
        )


class DeleteWagerResponse(BaseModel):
    id: str
    bankroll_id: str
    bankroll_balance: Decimal
    bankroll_balance_display: str
