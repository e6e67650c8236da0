"""bcrypt password hashing for user credentials.

bcrypt truncates input at 72 bytes; longer passwords are rejected by the
RegisterRequest schema (max 72 chars of ASCII) before they get here.
"""

import bcrypt

_ENCODING = "utf-8"


def hash_password(plain: str) -> str:
    """Return a salted bcrypt hash (random salt, so equal inputs hash differently)."""
    return bcrypt.hashpw(plain.encode(_ENCODING), bcrypt.gensalt()).decode(_ENCODING)


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(_ENCODING), hashed.encode(_ENCODING))
