"""004: create wagers table

Revision ID: 004
Revises: 003
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE wagers (
            id                  UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            bankroll_id         UUID            NOT NULL REFERENCES bankrolls(id) ON DELETE CASCADE,
            owner_id            UUID            NOT NULL REFERENCES users(id),
            stake               NUMERIC(12,2)   NOT NULL,
            odds                NUMERIC(10,3)   NOT NULL,
            outcome             VARCHAR(8)      NOT NULL DEFAULT 'open',
            bet_type            VARCHAR(32)     NOT NULL DEFAULT 'simple',
            note                TEXT,
            profit              NUMERIC(12,2),
            settlement_date     DATE            NOT NULL DEFAULT CURRENT_DATE,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_wagers_stake_positive CHECK (stake > 0),
            CONSTRAINT ck_wagers_odds_min CHECK (odds >= 1),
            CONSTRAINT ck_wagers_outcome CHECK (outcome IN ('open', 'won', 'lost')),
            CONSTRAINT ck_wagers_profit_iff_settled CHECK ((outcome = 'open') = (profit IS NULL))
        );
    """)
    op.execute("""
        CREATE INDEX idx_wagers_bankroll_history
            ON wagers (bankroll_id, settlement_date DESC, created_at DESC);
    """)
    op.execute("CREATE INDEX idx_wagers_owner ON wagers (owner_id);")
    op.execute("""
        CREATE TRIGGER trg_wagers_touch
            BEFORE UPDATE ON wagers
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute("COMMENT ON COLUMN wagers.profit IS 'NULL while the wager is open';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS wagers CASCADE;")
