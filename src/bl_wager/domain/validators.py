"""Wager input validation — runs before any write is attempted.

Each validator returns the normalized value or raises ValidationError naming
the violated field.
"""

from datetime import date
from decimal import Decimal

from src.bl_common.datetime_utils import parse_date
from src.bl_common.enums import WagerOutcome
from src.bl_common.errors import ValidationError
from src.bl_common.money import quantize_money, quantize_odds, to_decimal

MIN_ODDS = Decimal("1")
MAX_ODDS = Decimal("1000")
# Keeps a won profit, stake * (odds - 1), inside NUMERIC(12,2).
MAX_STAKE = Decimal("10000000.00")
MAX_BET_TYPE_LEN = 32
MAX_NOTE_LEN = 1000


def validate_stake(value: Decimal | int | float | str | None) -> Decimal:
    if value is None:
        raise ValidationError("stake", "is required")
    try:
        stake = quantize_money(to_decimal(value))
    except (ValueError, ArithmeticError):
        raise ValidationError("stake", f"not a number in range: {value!r}") from None
    if stake <= 0:
        raise ValidationError("stake", f"must be greater than 0, got {stake}")
    if stake > MAX_STAKE:
        raise ValidationError("stake", f"must be at most {MAX_STAKE}, got {stake}")
    return stake


def validate_odds(value: Decimal | int | float | str | None) -> Decimal:
    if value is None:
        raise ValidationError("odds", "is required")
    try:
        odds = quantize_odds(to_decimal(value))
    except (ValueError, ArithmeticError):
        raise ValidationError("odds", f"not a number in range: {value!r}") from None
    if odds < MIN_ODDS:
        raise ValidationError("odds", f"must be at least {MIN_ODDS} (decimal odds), got {odds}")
    if odds > MAX_ODDS:
        raise ValidationError("odds", f"must be at most {MAX_ODDS}, got {odds}")
    return odds


def validate_outcome(value: WagerOutcome | str | None) -> WagerOutcome:
    if value is None:
        return WagerOutcome.OPEN
    try:
        return WagerOutcome(value)
    except ValueError:
        allowed = ", ".join(o.value for o in WagerOutcome)
        raise ValidationError("outcome", f"must be one of {allowed}, got {value!r}") from None


def validate_bankroll_selection(value: str | None) -> str:
    if value is None or not str(value).strip():
        raise ValidationError("bankroll_id", "a bankroll must be selected")
    return str(value).strip()


def validate_settlement_date(value: date | str | None) -> date:
    return parse_date(value, "settlement_date")


def validate_bet_type(value: str | None) -> str:
    bet_type = (value or "simple").strip() or "simple"
    if len(bet_type) > MAX_BET_TYPE_LEN:
        raise ValidationError("bet_type", f"at most {MAX_BET_TYPE_LEN} characters")
    return bet_type


def validate_note(value: str | None) -> str | None:
    if value is None:
        return None
    note = value.strip()
    if len(note) > MAX_NOTE_LEN:
        raise ValidationError("note", f"at most {MAX_NOTE_LEN} characters")
    return note or None
