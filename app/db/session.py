"""
Async database session management.
Challenge: Connection pooling, scoped sessions, proper cleanup.
Design: One session (and one transaction) per request. The session is committed
after the endpoint returns and rolled back if anything raised, so services never
commit themselves. Side effects that must only happen once the data is visible
to other requests (cache invalidation) are queued with after_commit() and run
by get_db right after a successful commit; a rollback discards them.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import get_settings

settings = get_settings()

# Async engine with connection pool (scalability)
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,  # Verify connections before use
    pool_size=10,
    max_overflow=20,
)

# Session factory: one session per request
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


AFTER_COMMIT_KEY = "after_commit"


def after_commit(session: AsyncSession, callback: Callable[..., Awaitable[Any]], *args: Any) -> None:
    """Queue an async callback to run once this session's transaction has committed."""
    session.info.setdefault(AFTER_COMMIT_KEY, []).append((callback, args))


async def run_after_commit(session: AsyncSession) -> None:
    """Run (and clear) the queued callbacks in order."""
    for callback, args in session.info.pop(AFTER_COMMIT_KEY, []):
        await callback(*args)


def discard_after_commit(session: AsyncSession) -> None:
    session.info.pop(AFTER_COMMIT_KEY, None)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session per request. Ensures rollback on error, close on exit."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            discard_after_commit(session)
            raise
        else:
            await run_after_commit(session)
        finally:
            await session.close()


# Type alias for FastAPI dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
