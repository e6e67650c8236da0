"""001: shared trigger and owner-lookup functions

Revision ID: 001
Revises:
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_touch_updated_at()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at := NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    # Owner set by the application with set_config('app.current_owner', ..., true).
    # Once a local setting ends the session keeps it as '', hence NULLIF.
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_current_owner()
        RETURNS UUID AS $$
            SELECT NULLIF(current_setting('app.current_owner', true), '')::uuid;
        $$ LANGUAGE sql STABLE;
    """)


def downgrade() -> None:
    op.execute("DROP FUNCTION IF EXISTS fn_current_owner();")
    op.execute("DROP FUNCTION IF EXISTS fn_touch_updated_at();")
