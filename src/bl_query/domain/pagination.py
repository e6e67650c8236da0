"""Offset pagination arithmetic for the wager history (1-based pages)."""

from src.bl_common.errors import ValidationError


def validate_page(page: int | None) -> int:
    if page is None:
        return 1
    if page < 1:
        raise ValidationError("page", f"must be >= 1, got {page}")
    return page


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def total_pages(total: int, page_size: int) -> int:
    """ceil(total / page_size) in integers: 0 rows -> 0 pages, 21 rows/10 -> 3."""
    return (total + page_size - 1) // page_size

