"""Identity domain model. A user's id is the owner_id of everything they record."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    id: str
    username: str
    email: str
    password_hash: str
    is_active: bool = True
    created_at: datetime | None = None
