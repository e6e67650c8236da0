"""003: create bankrolls table

Revision ID: 003
Revises: 002
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE bankrolls (
            id                  UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            owner_id            UUID            NOT NULL REFERENCES users(id),
            name                VARCHAR(100)    NOT NULL,
            initial_balance     NUMERIC(12,2)   NOT NULL,
            current_balance     NUMERIC(12,2)   NOT NULL,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_bankrolls_initial_non_negative CHECK (initial_balance >= 0),
            CONSTRAINT ck_bankrolls_name_not_blank CHECK (LENGTH(TRIM(name)) > 0)
        );
    """)
    op.execute(
        "CREATE INDEX idx_bankrolls_owner_created ON bankrolls (owner_id, created_at DESC);"
    )
    op.execute("""
        CREATE TRIGGER trg_bankrolls_touch
            BEFORE UPDATE ON bankrolls
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute(
        "COMMENT ON COLUMN bankrolls.current_balance IS "
        "'initial_balance + SUM(profit) over settled wagers; maintained by reconciliation';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS bankrolls CASCADE;")
