"""Settlement engine — profit/loss of a wager from stake, decimal odds and outcome.

    won   -> profit = stake * odds - stake   (gross payout = stake * odds)
    lost  -> profit = -stake
    open  -> profit undetermined (None); contributes 0 to any aggregate

Pure and total. Input constraints (stake > 0, odds >= 1) are enforced by the
wager write path (validators.py), not here.
"""

from dataclasses import dataclass
from decimal import Decimal

from src.bl_common.enums import WagerOutcome
from src.bl_common.money import ZERO, quantize_money


@dataclass(frozen=True)
class Settlement:
    outcome: WagerOutcome
    profit: Decimal | None   # None while open — never a real zero result
    payout: Decimal | None   # gross amount returned; None while open

    @property
    def is_settled(self) -> bool:
        return self.profit is not None

    @property
    def contribution(self) -> Decimal:
        """Amount this wager adds to its bankroll balance."""
        return self.profit if self.profit is not None else ZERO


def settle(stake: Decimal, odds: Decimal, outcome: WagerOutcome) -> Settlement:
    outcome = WagerOutcome(outcome)
    if outcome is WagerOutcome.WON:
        payout = quantize_money(stake * odds)
        return Settlement(outcome, quantize_money(payout - stake), payout)
    if outcome is WagerOutcome.LOST:
        return Settlement(outcome, quantize_money(-stake), ZERO)
    return Settlement(outcome, None, None)
