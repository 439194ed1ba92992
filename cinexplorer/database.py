from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool
import logging

from cinexplorer.config import settings

logger = logging.getLogger(__name__)

engine_kwargs = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # aiosqlite connections are bound to the loop that opened them
    engine_kwargs["poolclass"] = NullPool

engine = create_async_engine(settings.DATABASE_URL, **engine_kwargs)

SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def supports_row_locks(database_url: str) -> bool:
    """SQLite ignores SELECT ... FOR UPDATE, so seat counts are only
    serialized inside a single worker process there."""
    if database_url.startswith("sqlite"):
        logger.warning(
            "SQLite does not support row locks: run a single worker process, "
            "or use PostgreSQL to keep purchases from overselling across workers."
        )
        return False
    return True


async def get_db():
    async with SessionLocal() as session:
        yield session
