from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from financeflow.db.settings import get_settings

settings = get_settings()

engine = create_async_engine(settings.database_url, future=True, pool_pre_ping=True)
AsyncSessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
