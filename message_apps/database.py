from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from message_apps.config import settings

async_engine = create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)
AsyncSessionLocal = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()

async def create_tables(engine=async_engine):
    from message_apps.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
