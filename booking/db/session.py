from functools import lru_cache
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from booking.core.config import settings


@lru_cache()
def get_engine() -> AsyncEngine:
    return create_async_engine(settings.DATABASE_URL, future=True, echo=settings.DEBUG)


@lru_cache()
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)


async def get_db():
    async with get_sessionmaker()() as session:
        yield session
