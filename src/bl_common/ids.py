"""Entity id helpers. Ids are UUIDs assigned by PostgreSQL (gen_random_uuid())."""

import uuid


def is_valid_id(value: object) -> bool:
    """True when value is a UUID or a string that parses as one.

    A malformed id can never match a row, so callers treat it as "not found"
    instead of letting the cast fail inside the transaction.
    """
    if isinstance(value, uuid.UUID):
        return True
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True
