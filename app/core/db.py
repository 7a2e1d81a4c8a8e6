import enum
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)

PG_FOREIGN_KEY_VIOLATION = "23503"
PG_UNIQUE_VIOLATION = "23505"


class Constraint(enum.Enum):
    """Kind of constraint an IntegrityError tripped over"""
    FOREIGN_KEY = "foreign_key"
    UNIQUE = "unique"
    OTHER = "other"


def classify_integrity_error(err: IntegrityError) -> Constraint:
    """Maps a driver level integrity error to a Constraint."""
    orig = err.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is None and orig is not None and orig.__cause__ is not None:
        code = getattr(orig.__cause__, "sqlstate", None)

    if code == PG_FOREIGN_KEY_VIOLATION:
        return Constraint.FOREIGN_KEY
    if code == PG_UNIQUE_VIOLATION:
        return Constraint.UNIQUE

    # sqlite only reports constraint failures in the message
    message = str(orig)
    if "FOREIGN KEY constraint failed" in message:
        return Constraint.FOREIGN_KEY
    if "UNIQUE constraint failed" in message:
        return Constraint.UNIQUE
    return Constraint.OTHER


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """sqlite leaves foreign keys off unless asked per connection"""
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# One engine per process; sessions come from SessionLocal
engine = create_async_engine(settings.database_url, echo=settings.sql_echo)
enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    """Request scoped session, injected into routes with Depends"""
    async with SessionLocal() as session:
        yield session


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Commits everything done in the block, rolls back on any error."""
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        logger.debug("Transaction rolled back")
        raise
