"""Decimal arithmetic utilities for monetary amounts and decimal odds.

All stakes, profits and balances are Decimal with 2 fractional digits
(NUMERIC(12,2) in the DB). Odds keep 3 fractional digits (NUMERIC(10,3)).
No float ever reaches a balance.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ODDS_QUANTUM = Decimal("0.001")
ZERO = Decimal("0.00")
# Largest value a NUMERIC(12,2) column holds.
MAX_MONEY = Decimal("9999999999.99")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Coerce input to Decimal. Floats go through str() to avoid binary noise.

    Raises ValueError for non-numeric or non-finite input.
    """
    if isinstance(value, float):
        value = str(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Not a decimal number: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def quantize_money(value: Decimal) -> Decimal:
    """Round to cents, half-up: 149.995 -> 150.00.

    Raises ValueError when the value has too many digits to carry cents.
    """
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Out of range: {value}") from exc


def quantize_odds(value: Decimal) -> Decimal:
    try:
        return value.quantize(ODDS_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Out of range: {value}") from exc


def money_to_display(amount: Decimal) -> str:
    """Format for display: Decimal('1150') -> '$1,150.00', Decimal('-50') -> '-$50.00'."""
    amount = quantize_money(amount)
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"
