"""Read-side projections — pure dataclasses."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.bl_common.enums import OutcomeFilter, WagerOutcome
from src.bl_common.money import ZERO
from src.bl_query.domain.pagination import total_pages
from src.bl_wager.domain.models import Wager


@dataclass
class DailyStats:
    bankroll_id: str
    day: date
    count: int = 0
    won_count: int = 0
    lost_count: int = 0
    open_count: int = 0
    net_profit: Decimal = ZERO     # settled wagers only
    total_staked: Decimal = ZERO   # all wagers of the day, open included

    @classmethod
    def from_wagers(cls, bankroll_id: str, day: date, wagers: list[Wager]) -> "DailyStats":
        """Aggregate in Python; mirrors the SQL aggregate in the query repository."""
        stats = cls(bankroll_id=bankroll_id, day=day)
        for w in wagers:
            stats.count += 1
            stats.total_staked += w.stake
            if w.outcome.is_settled:
                stats.net_profit += w.profit or ZERO
                if w.outcome is WagerOutcome.WON:
                    stats.won_count += 1
                else:
                    stats.lost_count += 1
            else:
                stats.open_count += 1
        return stats


@dataclass
class HistoryPage:
    items: list[Wager]
    total: int
    page: int
    page_size: int
    outcome_filter: OutcomeFilter = OutcomeFilter.ALL

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
