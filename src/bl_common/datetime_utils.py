"""UTC datetime utilities."""

from datetime import date, datetime, timezone

from src.bl_common.errors import ValidationError


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()


def parse_date(value: date | str | None, field: str = "settlement_date") -> date:
    """Accept a date or an ISO 'YYYY-MM-DD' string. None means today (UTC)."""
    if value is None:
        return utc_today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(field, f"malformed date {value!r}, expected YYYY-MM-DD") from None
