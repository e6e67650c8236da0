"""Pydantic schemas for the read-side endpoints."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from src.bl_common.enums import OutcomeFilter
from src.bl_common.money import money_to_display
from src.bl_query.domain.models import DailyStats, HistoryPage
from src.bl_wager.application.schemas import WagerResponse


class DailyStatsResponse(BaseModel):
    bankroll_id: str
    day: date
    count: int
    won_count: int
    lost_count: int
    open_count: int
    net_profit: Decimal
    net_profit_display: str
    total_staked: Decimal
    total_staked_display: str

    @classmethod
    def from_domain(cls, stats: DailyStats) -> "DailyStatsResponse":
        return cls(
            bankroll_id=stats.bankroll_id,
            day=stats.day,
            count=stats.count,
            won_count=stats.won_count,
            lost_count=stats.lost_count,
            open_count=stats.open_count,
            net_profit=stats.net_profit,
            net_profit_display=money_to_display(stats.net_profit),
            total_staked=stats.total_staked,
            total_staked_display=money_to_display(stats.total_staked),
        )


class DailyWagersResponse(BaseModel):
    summary: DailyStatsResponse
    items: list[WagerResponse]


class HistoryPageResponse(BaseModel):
    items: list[WagerResponse]
    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    outcome_filter: OutcomeFilter

    @classmethod
    def from_domain(cls, history: HistoryPage) -> "HistoryPageResponse":
        return cls(
            items=[WagerResponse.from_domain(w) for w in history.items],
            page=history.page,
            page_size=history.page_size,
            total=history.total,
            total_pages=history.total_pages,
            has_next=history.has_next,
            outcome_filter=history.outcome_filter,
        )
