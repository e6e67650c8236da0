"""Bankroll input validation — runs before any write is attempted."""

from decimal import Decimal

from src.bl_common.errors import ValidationError
from src.bl_common.money import MAX_MONEY, quantize_money, to_decimal

MAX_NAME_LEN = 100


def validate_name(value: str | None) -> str:
    name = (value or "").strip()
    if not name:
        raise ValidationError("name", "must not be empty")
    if len(name) > MAX_NAME_LEN:
        raise ValidationError("name", f"at most {MAX_NAME_LEN} characters")
    return name


def validate_initial_balance(value: Decimal | int | float | str | None) -> Decimal:
    if value is None:
        raise ValidationError("initial_balance", "is required")
    try:
        balance = quantize_money(to_decimal(value))
    except (ValueError, ArithmeticError):
        raise ValidationError("initial_balance", f"not a number in range: {value!r}") from None
    if balance < 0:
        raise ValidationError("initial_balance", f"must be >= 0, got {balance}")
    if balance > MAX_MONEY:
        raise ValidationError("initial_balance", f"must be at most {MAX_MONEY}, got {balance}")
    return balance
