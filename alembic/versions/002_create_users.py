"""002: users (identity; id doubles as the ledger owner_id)

Revision ID: 002
Revises: 001
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE users (
            id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
            username varchar(64) NOT NULL CONSTRAINT uq_users_username UNIQUE
                CONSTRAINT ck_users_username_format CHECK (username ~ '^\\w{3,64}$'),
            email varchar(254) NOT NULL,
            password_hash text NOT NULL,
            is_active boolean NOT NULL DEFAULT true,
            created_at timestamptz NOT NULL DEFAULT now(),
            updated_at timestamptz NOT NULL DEFAULT now()
        );
    """)
    # Emails compare case-insensitively
    op.execute("CREATE UNIQUE INDEX uq_users_email ON users (lower(email));")
    op.execute("""
        CREATE TRIGGER trg_users_touch
            BEFORE UPDATE ON users
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
