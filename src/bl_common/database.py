import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.exc import DataError, DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import settings
from src.bl_common.errors import InternalError, TransactionError, ValidationError

logger = logging.getLogger(__name__)


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Read by the row-level security policies (alembic 005); is_local=true scopes
# it to the current transaction.
_SET_OWNER_SQL = text("SELECT set_config('app.current_owner', :owner_id, true)")


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: yields an AsyncSession, auto-closes after request."""
    async with async_session_factory() as session:
        yield session


@asynccontextmanager
async def owner_transaction(
    db: AsyncSession, owner_id: str, *, serializable: bool = False
) -> AsyncIterator[AsyncSession]:
    """Open one transaction scoped to ``owner_id``.

    Commits on clean exit, rolls back on any exception. Transient driver
    failures (connection lost, serialization conflict, deadlock) surface as
    TransactionError. A value the columns cannot hold is a ValidationError and
    a constraint violation an InternalError; neither is worth retrying.
    Application errors propagate unchanged.

    Ledger writes pass ``serializable=True`` so concurrent reconciliations of
    the same bankroll cannot interleave.
    """
    if db.in_transaction():
        # Close the implicit read transaction (e.g. the auth lookup) so the
        # isolation level below applies to a fresh transaction.
        await db.rollback()
    try:
        async with db.begin():
            if serializable:
                await db.connection(execution_options={"isolation_level": "SERIALIZABLE"})
            await db.execute(_SET_OWNER_SQL, {"owner_id": owner_id})
            yield db
    except DataError as exc:
        logger.warning("Ledger write rejected by store: owner=%s error=%s", owner_id, exc.orig)
        raise ValidationError("amount", "out of range for storage") from exc
    except IntegrityError as exc:
        logger.error("Ledger constraint violated: owner=%s error=%s", owner_id, exc.orig)
        raise InternalError("Ledger constraint violated") from exc
    except (DBAPIError, OSError) as exc:
        detail = str(getattr(exc, "orig", None) or exc)
        logger.warning("Ledger transaction aborted: owner=%s error=%s", owner_id, detail)
        raise TransactionError(detail) from exc
